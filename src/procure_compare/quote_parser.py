#!/usr/bin/env python3
"""
Vendor quote text parser.
Turns free-form quotation text into priced QuoteLine records.
"""

import logging
import re
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Tuple

from .models import QuoteLine
from .segmenter import UNIT_PATTERN, extract_quantity

logger = logging.getLogger(__name__)

MIN_QUOTE_LINE_LENGTH = 3

# 1,234,567 / 1,00,000 (lakh grouping) / 850, with up to two decimals
AMOUNT = r'(\d{1,3}(?:,\d{3})+|\d{1,3}(?:,\d{2})+,\d{3}|\d+)(\.\d{1,2})?'

# Case-sensitive: an upper-case "RS" is a bearing seal suffix, not rupees
CURRENCY_PRICE_PATTERN = re.compile(
    r'(?<![A-Za-z0-9])(?:Rs\.?|INR|₹)\s*' + AMOUNT + r'(?!\d)(?:/-?)?'
)

# Bare amounts; numbers tagged as quantities, percentages or lead times are skipped
STANDALONE_PRICE_PATTERN = re.compile(
    r'(?<![\w.,/-])' + AMOUNT + r'(?:/-?)?'
    r'(?![\w,%-]|\.\d)'
    r'(?!\s*(?:' + UNIT_PATTERN + r'|days?|weeks?)\b)',
    re.IGNORECASE,
)


def is_quote_header(line: str) -> bool:
    lowered = line.lower()
    return 'description' in lowered and ('price' in lowered or 'rate' in lowered)


def find_price(line: str) -> Optional[Tuple[Decimal, Tuple[int, int]]]:
    """
    Locate the monetary amount on a quote line.

    Returns:
        (amount, span of the matched price text) or None when no amount is present
    """
    match = CURRENCY_PRICE_PATTERN.search(line)
    if not match:
        candidates = list(STANDALONE_PRICE_PATTERN.finditer(line))
        match = candidates[-1] if candidates else None
    if not match:
        return None

    digits = match.group(1).replace(',', '') + (match.group(2) or '')
    try:
        return Decimal(digits), match.span()
    except InvalidOperation:
        logger.debug(f"Invalid price format: {match.group(0)!r}")
        return None


def parse_quote_text(raw_text: str, default_gst_percent: Decimal = Decimal("18")) -> List[QuoteLine]:
    """
    Parse vendor quote text into priced lines.

    Lines without a recognizable amount are dropped. GST is not read from
    the text; every line carries the default rate.
    """
    quote_lines: List[QuoteLine] = []
    if not raw_text:
        return quote_lines

    for physical_line in raw_text.splitlines():
        line = physical_line.strip()
        if len(line) < MIN_QUOTE_LINE_LENGTH or is_quote_header(line):
            continue

        price = find_price(line)
        if price is None:
            logger.debug(f"No price found, dropping quote line: {line!r}")
            continue

        unit_price, (start, end) = price
        description = (line[:start] + line[end:]).strip()
        quantity, unit = extract_quantity(description)

        quote_lines.append(QuoteLine(
            line_number=len(quote_lines) + 1,
            description=description,
            quantity=quantity,
            unit=unit,
            unit_price=unit_price,
            gst_percent=Decimal(default_gst_percent),
            freight=Decimal("0"),
        ))

    logger.info(f"Parsed {len(quote_lines)} priced lines from quote text")
    return quote_lines
