"""
Item taxonomy and keyword classifier.

The taxonomy is an ordered table of (category, keywords, extractor) rules.
Classification scans it in declaration order and the first rule with a
keyword present in the text wins, so more specific categories must be
registered ahead of broader ones.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from .attributes import extract_bearing_attributes, extract_generic_attributes
from .models import Category, CategoryName, ExtractionResult, NormalizedItem, category_name

logger = logging.getLogger(__name__)

Extractor = Callable[[str, CategoryName], ExtractionResult]


@dataclass
class CategoryRule:
    """One taxonomy entry."""
    category: CategoryName
    keywords: List[str]
    extractor: Extractor = extract_generic_attributes


class Taxonomy:
    """Ordered keyword table mapping line text to a category and extractor."""

    def __init__(self, rules: Sequence[CategoryRule] = (), fallback: CategoryName = Category.GENERIC):
        self.rules: List[CategoryRule] = []
        self.fallback = fallback
        for rule in rules:
            self.register(rule.category, rule.keywords, rule.extractor)

    def register(self, category: CategoryName, keywords: Sequence[str],
                 extractor: Optional[Extractor] = None,
                 before: Optional[CategoryName] = None) -> CategoryRule:
        """
        Add a category to the table.

        Args:
            category: Category to register; must not already be present
            keywords: Substrings that select this category (matched lowercase)
            extractor: Attribute extractor, defaults to the generic keyword bag
            before: Insert ahead of this already-registered category

        Returns:
            The registered rule
        """
        name = category_name(category)
        if any(category_name(rule.category) == name for rule in self.rules):
            raise ValueError(f"Category already registered: {name}")

        rule = CategoryRule(
            category=category,
            keywords=[keyword.lower() for keyword in keywords],
            extractor=extractor or extract_generic_attributes,
        )

        if before is None:
            self.rules.append(rule)
        else:
            index = self._index_of(before)
            if index is None:
                raise ValueError(f"Unknown category: {category_name(before)}")
            self.rules.insert(index, rule)
        return rule

    def _index_of(self, category: CategoryName) -> Optional[int]:
        name = category_name(category)
        for index, rule in enumerate(self.rules):
            if category_name(rule.category) == name:
                return index
        return None

    def categories(self) -> List[CategoryName]:
        return [rule.category for rule in self.rules] + [self.fallback]

    def classify(self, text: str) -> CategoryName:
        """Return the first category whose keywords appear in the text."""
        lowered = (text or '').lower()
        for rule in self.rules:
            for keyword in rule.keywords:
                if keyword in lowered:
                    logger.debug(f"Classified {text!r} as {category_name(rule.category)} (keyword {keyword!r})")
                    return rule.category
        return self.fallback

    def extract(self, text: str, category: CategoryName) -> ExtractionResult:
        """Run the extractor registered for the category, or the generic one."""
        index = self._index_of(category)
        extractor = self.rules[index].extractor if index is not None else extract_generic_attributes
        return extractor(text or '', category)

    def normalize(self, raw_description: str) -> NormalizedItem:
        """Classify and extract in one pass, always from the raw description."""
        category = self.classify(raw_description)
        result = self.extract(raw_description, category)
        return NormalizedItem(
            category=category,
            clean_description=result.clean_description,
            attributes=result.attributes,
            confidence=result.confidence,
        )


def default_taxonomy() -> Taxonomy:
    """Build the standard procurement taxonomy."""
    return Taxonomy([
        CategoryRule(
            Category.BEARINGS,
            ['bearing', 'ball bearing', 'roller bearing', 'skf', 'fag', 'nsk', 'ntn', 'timken'],
            extract_bearing_attributes,
        ),
        CategoryRule(
            Category.MOTORS,
            ['motor', 'electric motor', 'ac motor', 'dc motor', 'servo', 'gearbox'],
        ),
        CategoryRule(
            Category.VALVES,
            ['valve', 'gate valve', 'globe valve', 'ball valve', 'butterfly valve', 'check valve'],
        ),
        CategoryRule(
            Category.INSTRUMENTATION,
            ['sensor', 'gauge', 'transmitter', 'controller', 'plc'],
        ),
    ])


DEFAULT_TAXONOMY = default_taxonomy()


def classify(text: str) -> CategoryName:
    return DEFAULT_TAXONOMY.classify(text)


def extract_attributes(text: str, category: CategoryName) -> ExtractionResult:
    return DEFAULT_TAXONOMY.extract(text, category)


def normalize_item(raw_description: str) -> NormalizedItem:
    return DEFAULT_TAXONOMY.normalize(raw_description)
