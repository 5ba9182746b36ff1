"""
Text segmenter for free-form indent text.

Splits pasted text (or text pulled out of a spreadsheet or PDF) into one
RawLine per line item, dropping header rows and noise.
"""

import logging
import re
from decimal import Decimal, InvalidOperation
from typing import List, Tuple

from .models import RawLine

logger = logging.getLogger(__name__)

MIN_LINE_LENGTH = 5
DEFAULT_UNIT = "NOS"

UNIT_TOKENS = ("nos", "pcs", "kg", "mtr", "set", "pair", "ltr")

# Singular stems also accept a plural "s": "20 sets", "100 mtrs"
UNIT_PATTERN = '|'.join(token if token.endswith('s') else token + 's?' for token in UNIT_TOKENS)

# A number directly followed by a known unit token: "10 nos", "2.5kg"
UNIT_QUANTITY_PATTERN = re.compile(
    r'(\d+(?:\.\d+)?)\s*(' + UNIT_PATTERN + r')\b',
    re.IGNORECASE,
)

# A whitespace-delimited bare number; part codes like 6205-2RS are skipped
BARE_QUANTITY_PATTERN = re.compile(r'(?<!\S)(\d+(?:\.\d+)?)(?!\S)')


def is_header_or_noise(line: str) -> bool:
    """Check whether a trimmed indent line is a header row or too short to be an item."""
    if len(line) < MIN_LINE_LENGTH:
        return True
    lowered = line.lower()
    if 'description' in lowered:
        return True
    return 'item' in lowered and 'qty' in lowered


def _canonical_unit(token: str) -> str:
    lowered = token.lower()
    if lowered not in UNIT_TOKENS:
        lowered = lowered[:-1]
    return lowered.upper()


def extract_quantity(text: str) -> Tuple[Decimal, str]:
    """
    Infer quantity and unit from a line of text.

    A number tagged with a unit token wins; plural units map to their
    singular form ("20 sets" is 20 SET). Otherwise the LAST standalone
    number on the line is taken with the default unit, so in
    "Gate valve 2 inch 4" the size is skipped and the quantity is 4.
    Lines without any number default to 1 NOS.
    """
    match = UNIT_QUANTITY_PATTERN.search(text)
    if match:
        try:
            return Decimal(match.group(1)), _canonical_unit(match.group(2))
        except InvalidOperation:
            logger.debug(f"Unparseable quantity {match.group(1)!r} in {text!r}")

    bare = BARE_QUANTITY_PATTERN.findall(text)
    if bare:
        try:
            return Decimal(bare[-1]), DEFAULT_UNIT
        except InvalidOperation:
            logger.debug(f"Unparseable quantity {bare[-1]!r} in {text!r}")

    return Decimal("1"), DEFAULT_UNIT


def segment(raw_text: str) -> List[RawLine]:
    """Split raw indent text into numbered line records."""
    lines: List[RawLine] = []
    if not raw_text:
        return lines

    for physical_line in raw_text.splitlines():
        text = physical_line.strip()
        if is_header_or_noise(text):
            if text:
                logger.debug(f"Skipping header/noise line: {text!r}")
            continue

        quantity, unit = extract_quantity(text)
        lines.append(RawLine(
            line_number=len(lines) + 1,
            text=text,
            quantity=quantity,
            unit=unit,
        ))

    logger.info(f"Segmented {len(lines)} line items from indent text")
    return lines
