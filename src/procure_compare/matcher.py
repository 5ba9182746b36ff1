"""
Lexical matcher between vendor quote lines and indent lines.

Scores are the share of distinct tokens the two descriptions have in
common, relative to the larger token set. Cheap, explainable, and easy to
swap for an embedding-based score behind the same signature.
"""

import dataclasses
import logging
from typing import Dict, List, Optional, Sequence, Set, Tuple

from .models import IndentLine, QuoteLine

logger = logging.getLogger(__name__)

MIN_TOKEN_LENGTH = 3


def tokenize(text: str) -> Set[str]:
    """Lowercase whitespace tokens longer than two characters."""
    return {word for word in (text or '').lower().split() if len(word) >= MIN_TOKEN_LENGTH}


def token_overlap(left: str, right: str) -> float:
    left_tokens = tokenize(left)
    right_tokens = tokenize(right)
    total = max(len(left_tokens), len(right_tokens))
    if total == 0:
        return 0.0
    return len(left_tokens & right_tokens) / total


def match_score(quote_line: QuoteLine, indent_line: IndentLine) -> float:
    """Similarity in [0, 1] between a quote line and an indent line."""
    return token_overlap(quote_line.description, indent_line.raw_description)


def best_match(quote_line: QuoteLine, indent_lines: Sequence[IndentLine],
               min_score: float = 0.0, scorer=match_score) -> Tuple[Optional[IndentLine], float]:
    """
    Pick the indent line a quote line most likely answers.

    Ties go to the lowest indent line number. A zero score, or one below
    min_score, leaves the quote line unmatched.

    Returns:
        (matched indent line or None, best score seen)
    """
    best: Optional[IndentLine] = None
    best_score = 0.0
    for indent_line in sorted(indent_lines, key=lambda line: line.line_number):
        score = scorer(quote_line, indent_line)
        if best is None or score > best_score:
            best, best_score = indent_line, score

    if best is None or best_score <= 0.0 or best_score < min_score:
        return None, best_score
    return best, best_score


def match_quote_lines(quote_lines: Sequence[QuoteLine], indent_lines: Sequence[IndentLine],
                      min_score: float = 0.0, scorer=match_score) -> List[QuoteLine]:
    """
    Associate one vendor submission's quote lines with indent lines.

    Each indent line keeps at most one quote line from the submission: the
    highest scoring one, earlier quote lines winning ties. Displaced lines
    come back unmatched with their score preserved.
    """
    proposals: List[Tuple[QuoteLine, Optional[IndentLine], float]] = [
        (quote_line, *best_match(quote_line, indent_lines, min_score, scorer))
        for quote_line in quote_lines
    ]

    winners: Dict[str, int] = {}
    for index, (_, indent_line, score) in enumerate(proposals):
        if indent_line is None:
            continue
        current = winners.get(indent_line.id)
        if current is None or score > proposals[current][2]:
            winners[indent_line.id] = index

    matched: List[QuoteLine] = []
    for index, (quote_line, indent_line, score) in enumerate(proposals):
        if indent_line is not None and winners.get(indent_line.id) == index:
            matched.append(dataclasses.replace(
                quote_line, matched_indent_line_id=indent_line.id, match_score=score))
        else:
            if indent_line is not None:
                logger.debug(f"Quote line {quote_line.line_number} displaced from indent line {indent_line.line_number}")
            matched.append(dataclasses.replace(
                quote_line, matched_indent_line_id=None, match_score=score))

    matched_count = sum(1 for line in matched if line.matched_indent_line_id is not None)
    logger.info(f"Matched {matched_count} of {len(matched)} quote lines to indent lines")
    return matched
