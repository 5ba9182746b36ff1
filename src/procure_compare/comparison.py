#!/usr/bin/env python3
"""
Comparison matrix builder.

Lines up each vendor's matched quote lines against the indent lines and
marks the lowest landed cost and the shortest lead time per line. The
resulting rows are what approval and export consume.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from .landed_cost import landed_cost
from .models import ComparisonRow, IndentLine, QuoteLine, VendorOffer, VendorQuote

logger = logging.getLogger(__name__)

VendorQuotes = Union[Mapping[str, VendorQuote], Iterable[VendorQuote]]


@dataclass
class VendorSummary:
    """Per-vendor totals across a comparison."""
    vendor_id: str
    vendor_name: str
    items_quoted: int = 0
    best_price_count: int = 0
    total_landed_value: Decimal = Decimal('0')

    def to_dict(self) -> Dict[str, Any]:
        return {
            "vendorId": self.vendor_id,
            "vendorName": self.vendor_name,
            "itemsQuoted": self.items_quoted,
            "bestPriceCount": self.best_price_count,
            "totalLandedValue": str(self.total_landed_value),
        }


def _ordered_vendor_quotes(vendor_quotes: VendorQuotes) -> List[VendorQuote]:
    if isinstance(vendor_quotes, Mapping):
        return list(vendor_quotes.values())
    return list(vendor_quotes)


def _quote_line_id(vendor: VendorQuote, quote_line: QuoteLine) -> str:
    if quote_line.id is not None:
        return quote_line.id
    return f"{vendor.vendor_id}:{quote_line.line_number}"


def _offers_by_indent_line(vendor: VendorQuote) -> Dict[str, QuoteLine]:
    """First matched quote line (by line number) per indent line for one vendor."""
    offers: Dict[str, QuoteLine] = {}
    for quote_line in sorted(vendor.quote_lines, key=lambda line: line.line_number):
        indent_line_id = quote_line.matched_indent_line_id
        if indent_line_id is None:
            continue
        if indent_line_id in offers:
            logger.warning(
                f"Vendor {vendor.vendor_id} has more than one quote line for indent line "
                f"{indent_line_id}; keeping line {offers[indent_line_id].line_number}"
            )
            continue
        offers[indent_line_id] = quote_line
    return offers


def build_offer(vendor: VendorQuote, quote_line: QuoteLine, quantity: Decimal,
                currency: str = "INR") -> VendorOffer:
    """Price one quote line against the indent line's quantity."""
    cost: Optional[Decimal] = None
    if quote_line.unit_price is not None:
        cost = landed_cost(quote_line.unit_price, quantity, quote_line.gst_percent,
                           quote_line.freight, currency)
    return VendorOffer(
        vendor_name=vendor.vendor_name,
        quote_line_id=_quote_line_id(vendor, quote_line),
        unit_price=quote_line.unit_price,
        gst_percent=quote_line.gst_percent,
        freight=quote_line.freight,
        landed_cost=cost,
        lead_time_days=quote_line.lead_time_days,
        brand=quote_line.brand,
        payment_terms=quote_line.payment_terms,
    )


def _lowest(offers: Mapping[str, VendorOffer], attribute: str) -> Optional[str]:
    """Vendor with the smallest non-null value; the first one scanned wins ties."""
    winner: Optional[str] = None
    lowest = None
    for vendor_id, offer in offers.items():
        value = getattr(offer, attribute)
        if value is None:
            continue
        if lowest is None or value < lowest:
            winner, lowest = vendor_id, value
    return winner


def build_comparison(indent_lines: Sequence[IndentLine], vendor_quotes: VendorQuotes,
                     currency: str = "INR") -> List[ComparisonRow]:
    """
    Build one comparison row per indent line, in indent order.

    Args:
        indent_lines: The indent's lines, in line order
        vendor_quotes: Vendor submissions whose quote lines are already matched;
            their iteration order is the vendor order inside every row
        currency: Currency code for landed cost arithmetic

    Returns:
        Comparison rows; vendors without a matched quote line are left out
    """
    vendors = _ordered_vendor_quotes(vendor_quotes)
    offer_tables = [(vendor, _offers_by_indent_line(vendor)) for vendor in vendors]

    rows: List[ComparisonRow] = []
    for indent_line in indent_lines:
        offers: Dict[str, VendorOffer] = {}
        for vendor, table in offer_tables:
            quote_line = table.get(indent_line.id)
            if quote_line is not None:
                offers[vendor.vendor_id] = build_offer(vendor, quote_line, indent_line.quantity, currency)

        rows.append(ComparisonRow(
            line_id=indent_line.id,
            line_number=indent_line.line_number,
            description=indent_line.raw_description,
            quantity=indent_line.quantity,
            unit=indent_line.unit,
            vendors=offers,
            lowest_cost_vendor=_lowest(offers, 'landed_cost'),
            lowest_lead_time_vendor=_lowest(offers, 'lead_time_days'),
        ))

    logger.info(f"Built comparison of {len(rows)} lines across {len(vendors)} vendors")
    return rows


def summarize_vendors(rows: Sequence[ComparisonRow]) -> List[VendorSummary]:
    """Items quoted, best-price wins and total landed value per vendor, in first-seen order."""
    summaries: Dict[str, VendorSummary] = {}
    for row in rows:
        for vendor_id, offer in row.vendors.items():
            summary = summaries.get(vendor_id)
            if summary is None:
                summary = summaries[vendor_id] = VendorSummary(vendor_id, offer.vendor_name)
            summary.items_quoted += 1
            if offer.landed_cost is not None:
                summary.total_landed_value += offer.landed_cost
        if row.lowest_cost_vendor is not None:
            summaries[row.lowest_cost_vendor].best_price_count += 1
    return list(summaries.values())


def default_selections(rows: Sequence[ComparisonRow]) -> Dict[str, str]:
    """Pre-select the lowest-cost offer for every row that has one."""
    return {
        row.line_id: row.vendors[row.lowest_cost_vendor].quote_line_id
        for row in rows
        if row.lowest_cost_vendor is not None
    }


def comparison_to_dict(rows: Sequence[ComparisonRow]) -> Dict[str, Any]:
    """JSON-serializable view of a comparison for export."""
    return {
        "comparison": [row.to_dict() for row in rows],
        "vendorSummary": [summary.to_dict() for summary in summarize_vendors(rows)],
    }
