"""
Data models for the procurement comparison engine.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class Category(str, Enum):
    """Built-in item categories. Extra categories may be registered as plain strings."""
    BEARINGS = "BEARINGS"
    MOTORS = "MOTORS"
    VALVES = "VALVES"
    INSTRUMENTATION = "INSTRUMENTATION"
    GENERIC = "GENERIC"


CategoryName = Union[Category, str]


def category_name(category: CategoryName) -> str:
    return category.value if isinstance(category, Category) else str(category)


def _decimal_str(value: Optional[Decimal]) -> Optional[str]:
    return None if value is None else str(value)


@dataclass
class RawLine:
    """A retained physical line of indent text."""
    line_number: int
    text: str
    quantity: Decimal = Decimal("1")
    unit: str = "NOS"


@dataclass(frozen=True)
class ExtractionResult:
    """Structured fields recovered from one line of text."""
    attributes: Dict[str, Any]
    clean_description: str
    confidence: float


@dataclass(frozen=True)
class NormalizedItem:
    """Canonical form of an indent line. Replaced wholesale, never patched."""
    category: CategoryName
    clean_description: str
    attributes: Dict[str, Any]
    confidence: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": category_name(self.category),
            "cleanDescription": self.clean_description,
            "attributes": dict(self.attributes),
            "confidence": self.confidence,
        }


@dataclass
class IndentLine:
    """A line item of an indent (internal purchase request)."""
    id: str
    line_number: int
    raw_description: str
    quantity: Decimal
    unit: str
    normalized_item: Optional[NormalizedItem] = None

    @classmethod
    def from_raw_line(cls, raw: RawLine, line_id: str) -> "IndentLine":
        return cls(
            id=line_id,
            line_number=raw.line_number,
            raw_description=raw.text,
            quantity=raw.quantity,
            unit=raw.unit,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "lineNumber": self.line_number,
            "rawDescription": self.raw_description,
            "quantity": _decimal_str(self.quantity),
            "unit": self.unit,
            "normalizedItem": self.normalized_item.to_dict() if self.normalized_item else None,
        }


@dataclass(frozen=True)
class QuoteLine:
    """A priced line from a vendor's quotation."""
    line_number: int
    description: str
    quantity: Decimal
    unit: str
    unit_price: Optional[Decimal]
    gst_percent: Decimal = Decimal("18")
    freight: Decimal = Decimal("0")
    lead_time_days: Optional[int] = None
    payment_terms: Optional[str] = None
    brand: Optional[str] = None
    origin: Optional[str] = None
    matched_indent_line_id: Optional[str] = None
    match_score: Optional[float] = None
    id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "lineNumber": self.line_number,
            "description": self.description,
            "quantity": _decimal_str(self.quantity),
            "unit": self.unit,
            "unitPrice": _decimal_str(self.unit_price),
            "gstPercent": _decimal_str(self.gst_percent),
            "freight": _decimal_str(self.freight),
            "leadTimeDays": self.lead_time_days,
            "paymentTerms": self.payment_terms,
            "brand": self.brand,
            "origin": self.origin,
            "matchedIndentLineId": self.matched_indent_line_id,
            "matchScore": self.match_score,
        }


@dataclass
class VendorQuote:
    """One vendor's quote submission for one RFQ round."""
    vendor_id: str
    vendor_name: str
    quote_lines: List[QuoteLine] = field(default_factory=list)


@dataclass
class VendorOffer:
    """A vendor's offer for a single indent line."""
    vendor_name: str
    quote_line_id: str
    unit_price: Optional[Decimal]
    gst_percent: Decimal
    freight: Decimal
    landed_cost: Optional[Decimal]
    lead_time_days: Optional[int]
    brand: Optional[str]
    payment_terms: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "vendorName": self.vendor_name,
            "quoteLineId": self.quote_line_id,
            "unitPrice": _decimal_str(self.unit_price),
            "gstPercent": _decimal_str(self.gst_percent),
            "freight": _decimal_str(self.freight),
            "landedCost": _decimal_str(self.landed_cost),
            "leadTimeDays": self.lead_time_days,
            "brand": self.brand,
            "paymentTerms": self.payment_terms,
        }


@dataclass
class ComparisonRow:
    """Side-by-side vendor offers for one indent line."""
    line_id: str
    line_number: int
    description: str
    quantity: Decimal
    unit: str
    vendors: Dict[str, VendorOffer] = field(default_factory=dict)
    lowest_cost_vendor: Optional[str] = None
    lowest_lead_time_vendor: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lineId": self.line_id,
            "lineNumber": self.line_number,
            "description": self.description,
            "quantity": _decimal_str(self.quantity),
            "unit": self.unit,
            "vendors": {vendor_id: offer.to_dict() for vendor_id, offer in self.vendors.items()},
            "lowestCostVendor": self.lowest_cost_vendor,
            "lowestLeadTimeVendor": self.lowest_lead_time_vendor,
        }
