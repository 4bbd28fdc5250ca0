"""
Complexity scoring from word count and lexical diversity.

This is a heuristic proxy for how sophisticated a document is, not a
readability metric. A short text with few repeated words scores high
because its diversity ratio is high; that is a known approximation.
"""

import logging
from typing import Tuple

from intake.config import COMPLEXITY_THRESHOLDS
from intake.models.document import ComplexityLevel

logger = logging.getLogger(__name__)

COMPLEXITY_ORDER = [
    ComplexityLevel.BASIC,
    ComplexityLevel.INTERMEDIATE,
    ComplexityLevel.ADVANCED,
    ComplexityLevel.EXPERT,
]


def lexical_stats(text: str) -> Tuple[int, int]:
    """Return (word count, distinct lower-cased word count)."""
    words = text.split()
    return len(words), len({word.lower() for word in words})


def score_complexity(text: str) -> ComplexityLevel:
    """
    Compute the complexity tier of a text.

    Args:
        text: Raw document text

    Returns:
        ComplexityLevel, BASIC for empty text
    """
    word_count, unique_count = lexical_stats(text)
    if word_count == 0:
        return ComplexityLevel.BASIC

    ratio = unique_count / word_count
    for max_words, max_ratio, level in COMPLEXITY_THRESHOLDS:
        if word_count > max_words or ratio > max_ratio:
            logger.debug(f"Complexity {level}: words={word_count}, ratio={ratio:.2f}")
            return ComplexityLevel(level)

    return ComplexityLevel.BASIC


def complexity_rank(level) -> int:
    """Position of a level in the basic < intermediate < advanced < expert order."""
    return COMPLEXITY_ORDER.index(ComplexityLevel(level))
