"""
Extraction engine interface.

Callers depend on ExtractionEngine only. HeuristicEngine is the
keyword/regex implementation; a statistical or LLM-backed engine can
replace it by implementing the same five operations.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence

from . import matcher, quote_parser, segmenter
from .config import EngineConfig
from .models import (
    CategoryName,
    ExtractionResult,
    IndentLine,
    NormalizedItem,
    QuoteLine,
    RawLine,
)
from .taxonomy import Taxonomy, default_taxonomy

logger = logging.getLogger(__name__)


class ExtractionEngine(ABC):
    """Text in, structured records out."""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()

    @abstractmethod
    def segment(self, raw_text: str) -> List[RawLine]:
        """Split indent text into numbered line records."""

    @abstractmethod
    def classify(self, text: str) -> CategoryName:
        """Assign a category to a line of text."""

    @abstractmethod
    def extract_attributes(self, text: str, category: CategoryName) -> ExtractionResult:
        """Recover structured attributes and a clean description."""

    @abstractmethod
    def parse_quote_text(self, raw_text: str) -> List[QuoteLine]:
        """Split vendor quote text into priced quote lines."""

    @abstractmethod
    def match_score(self, quote_line: QuoteLine, indent_line: IndentLine) -> float:
        """Similarity in [0, 1] between a quote line and an indent line."""

    def normalize(self, raw_description: str) -> NormalizedItem:
        """Fresh NormalizedItem computed from the raw description."""
        category = self.classify(raw_description)
        result = self.extract_attributes(raw_description, category)
        return NormalizedItem(
            category=category,
            clean_description=result.clean_description,
            attributes=result.attributes,
            confidence=result.confidence,
        )

    def normalize_line(self, indent_line: IndentLine) -> IndentLine:
        """Replace the line's normalized item, recomputing from raw_description."""
        indent_line.normalized_item = self.normalize(indent_line.raw_description)
        return indent_line

    def build_indent_lines(self, raw_text: str, normalize: bool = True,
                           id_factory: Optional[Callable[[RawLine], str]] = None) -> List[IndentLine]:
        """
        Segment indent text into IndentLines, optionally normalizing each.

        Args:
            raw_text: Pasted or extracted indent text
            normalize: Attach a NormalizedItem to every line
            id_factory: Builds a line id from the raw line, defaults to "L<line number>"
        """
        make_id = id_factory or (lambda raw: f"L{raw.line_number}")
        lines = [IndentLine.from_raw_line(raw, make_id(raw)) for raw in self.segment(raw_text)]
        if normalize:
            for line in lines:
                self.normalize_line(line)
        return lines

    def match_quote_lines(self, quote_lines: Sequence[QuoteLine],
                          indent_lines: Sequence[IndentLine]) -> List[QuoteLine]:
        """Associate one vendor submission's quote lines with the indent's lines."""
        return matcher.match_quote_lines(
            quote_lines, indent_lines,
            min_score=self.config.match_min_score,
            scorer=self.match_score,
        )


class HeuristicEngine(ExtractionEngine):
    """Keyword and regular-expression implementation."""

    def __init__(self, config: Optional[EngineConfig] = None, taxonomy: Optional[Taxonomy] = None):
        super().__init__(config)
        self.taxonomy = taxonomy or default_taxonomy()

    def segment(self, raw_text: str) -> List[RawLine]:
        return segmenter.segment(raw_text)

    def classify(self, text: str) -> CategoryName:
        return self.taxonomy.classify(text)

    def extract_attributes(self, text: str, category: CategoryName) -> ExtractionResult:
        return self.taxonomy.extract(text, category)

    def parse_quote_text(self, raw_text: str) -> List[QuoteLine]:
        return quote_parser.parse_quote_text(raw_text, self.config.default_gst_percent)

    def match_score(self, quote_line: QuoteLine, indent_line: IndentLine) -> float:
        return matcher.match_score(quote_line, indent_line)
