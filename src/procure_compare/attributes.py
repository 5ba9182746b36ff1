"""
Category-specific attribute extractors.

Each extractor takes the raw line text and its category and returns an
ExtractionResult. Extractors are pure: the same text always yields the same
result, and they must be fed the raw description, never a previous
clean description.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from .models import CategoryName, ExtractionResult, category_name

logger = logging.getLogger(__name__)

SERIES_CONFIDENCE = 0.85
BEARING_BASELINE_CONFIDENCE = 0.60
GENERIC_CONFIDENCE = 0.40

# Most specific first; the first match supplies the series
BEARING_SERIES_PATTERNS = [
    re.compile(r'\b(6[0-9]{3})-?([2Z]{2}|2RS|RS|ZZ)?\b', re.IGNORECASE),  # deep groove
    re.compile(r'\b(NU?[0-9]{3,4})\b', re.IGNORECASE),  # cylindrical roller
    re.compile(r'\b(22[0-9]{2,3})\b', re.IGNORECASE),  # spherical roller
    re.compile(r'\b(30[0-9]{2,3})\b', re.IGNORECASE),  # tapered roller
]

BEARING_BRANDS = ['SKF', 'FAG', 'NSK', 'NTN', 'TIMKEN', 'INA', 'KOYO', 'NACHI']

DIMENSION_PATTERN = re.compile(r'(\d+)\s*[xX×]\s*(\d+)\s*[xX×]\s*(\d+)')


def collapse_whitespace(text: str) -> str:
    return re.sub(r'\s+', ' ', text).strip()


def find_brand(text: str, brands: List[str] = BEARING_BRANDS) -> Optional[str]:
    upper = text.upper()
    for brand in brands:
        if brand in upper:
            return brand
    return None


def extract_bearing_attributes(text: str, category: CategoryName) -> ExtractionResult:
    """Recover series, seal type, brand and dimensions from a bearing description."""
    attributes: Dict[str, Any] = {
        'series': None,
        'bore': None,
        'outer_diameter': None,
        'width': None,
        'seal_type': None,
        'clearance': None,
        'brand': None,
    }

    for pattern in BEARING_SERIES_PATTERNS:
        match = pattern.search(text)
        if match:
            attributes['series'] = match.group(1).upper()
            if pattern.groups > 1 and match.group(2):
                attributes['seal_type'] = match.group(2).upper()
            break

    attributes['brand'] = find_brand(text)

    dimensions = DIMENSION_PATTERN.search(text)
    if dimensions:
        attributes['bore'] = int(dimensions.group(1))
        attributes['outer_diameter'] = int(dimensions.group(2))
        attributes['width'] = int(dimensions.group(3))

    if attributes['series']:
        # Canonical form replaces the free text entirely
        parts = [attributes['series']]
        if attributes['seal_type']:
            parts.append(attributes['seal_type'])
        if attributes['brand']:
            parts.insert(0, attributes['brand'])
        clean_description = ' '.join(parts)
        confidence = SERIES_CONFIDENCE
    else:
        clean_description = collapse_whitespace(text)
        confidence = BEARING_BASELINE_CONFIDENCE

    logger.debug(f"Bearing attributes for {text!r}: {attributes} (confidence {confidence})")
    return ExtractionResult(
        attributes=attributes,
        clean_description=clean_description,
        confidence=confidence,
    )


def extract_generic_attributes(text: str, category: CategoryName) -> ExtractionResult:
    """Keyword bag for categories without a dedicated extractor."""
    keywords = [word for word in text.lower().split() if len(word) > 3]
    return ExtractionResult(
        attributes={
            'raw_category': category_name(category),
            'keywords': keywords,
        },
        clean_description=collapse_whitespace(text),
        confidence=GENERIC_CONFIDENCE,
    )
