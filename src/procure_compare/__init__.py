"""
Procure Compare

Quote normalization and comparison engine for indent/RFQ procurement workflows.
"""

__version__ = "1.0.0"

from .comparison import build_comparison, default_selections, summarize_vendors
from .config import EngineConfig
from .engine import ExtractionEngine, HeuristicEngine
from .landed_cost import landed_cost
from .matcher import match_quote_lines, match_score
from .models import (
    Category,
    ComparisonRow,
    IndentLine,
    NormalizedItem,
    QuoteLine,
    RawLine,
    VendorOffer,
    VendorQuote,
)
from .quote_parser import parse_quote_text
from .segmenter import segment
from .taxonomy import Taxonomy, classify, extract_attributes, normalize_item

__all__ = [
    "build_comparison",
    "default_selections",
    "summarize_vendors",
    "EngineConfig",
    "ExtractionEngine",
    "HeuristicEngine",
    "landed_cost",
    "match_quote_lines",
    "match_score",
    "Category",
    "ComparisonRow",
    "IndentLine",
    "NormalizedItem",
    "QuoteLine",
    "RawLine",
    "VendorOffer",
    "VendorQuote",
    "parse_quote_text",
    "segment",
    "Taxonomy",
    "classify",
    "extract_attributes",
    "normalize_item",
]
