"""
Narrative excerpt extraction.

For every detected business-context tag, each of the tag's narrative fields
is filled with the first sentence matching one of the field's patterns,
joined with the sentence that follows it.
"""

import re
import logging
from typing import Dict, Iterable, List, Sequence

from intake.config import (
    MIN_SENTENCE_LENGTH,
    NARRATIVE_MAX_SENTENCES,
    SENTENCE_TERMINATORS,
    PatternTables,
    DEFAULT_PATTERN_TABLES,
)

logger = logging.getLogger(__name__)

_terminator_re = re.compile(SENTENCE_TERMINATORS)


def split_sentences(text: str) -> List[str]:
    """Split on sentence terminators, dropping fragments shorter than the minimum length."""
    return [
        fragment for fragment in _terminator_re.split(text)
        if len(fragment.strip()) >= MIN_SENTENCE_LENGTH
    ]


def find_excerpt(sentences: Sequence[str], patterns: Iterable[str]) -> str:
    """
    Return the first matching sentence plus the one after it, or "" if none match.

    Sentences are scanned in document order; the first sentence matching
    any pattern wins.
    """
    compiled = [re.compile(pattern, re.IGNORECASE) for pattern in patterns]
    for i, sentence in enumerate(sentences):
        if any(regex.search(sentence) for regex in compiled):
            return ". ".join(s.strip() for s in sentences[i:i + NARRATIVE_MAX_SENTENCES])
    return ""


def extract_narratives(
    text: str,
    business_tags: Iterable[str],
    tables: PatternTables = DEFAULT_PATTERN_TABLES,
) -> Dict[str, str]:
    """
    Pull representative excerpts for the given business-context tags.

    Args:
        text: Raw document text
        business_tags: Tags from the tag detector
        tables: Pattern tables holding the narrative field definitions

    Returns:
        Mapping of narrative field name to excerpt; unmatched fields are omitted
    """
    sentences = split_sentences(text)
    narratives: Dict[str, str] = {}

    if not sentences:
        return narratives

    for tag in business_tags:
        for field_name, patterns in tables.narratives.get(tag, ()):
            excerpt = find_excerpt(sentences, patterns)
            if excerpt:
                narratives[field_name] = excerpt

    logger.debug(f"Extracted {len(narratives)} narrative fields")
    return narratives
