"""
Keyword Tag Detector

This module scans raw document text against the configured keyword tables
to produce business-context tags, context tags, content tags and a single
business domain label.
"""

import logging
from dataclasses import dataclass
from typing import List, Iterable

from intake.config import PatternTables, DEFAULT_PATTERN_TABLES

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TagDetectionResult:
    """All labels detected for one text."""
    business_tags: List[str]
    context_tags: List[str]
    content_tags: List[str]
    business_domain: str


def _contains_any(text_lower: str, patterns: Iterable[str]) -> bool:
    return any(pattern in text_lower for pattern in patterns)


def detect_business_context(text: str, tables: PatternTables = DEFAULT_PATTERN_TABLES) -> List[str]:
    """
    Detect which business lines a document pertains to.

    A category is included when any of its patterns occurs in the
    lower-cased text. When nothing matches, the default category is used.

    Args:
        text: Raw document text
        tables: Pattern tables to match against

    Returns:
        Non-empty list of business-context labels in table order
    """
    text_lower = text.lower()
    tags = [
        label for label, patterns in tables.business_context.items()
        if _contains_any(text_lower, patterns)
    ]

    if not tags:
        tags.append(tables.default_business_tag)

    return tags


def detect_context_tags(text: str, tables: PatternTables = DEFAULT_PATTERN_TABLES) -> List[str]:
    """Return every flat context keyword found in the text (may be empty)."""
    text_lower = text.lower()
    return [keyword for keyword in tables.context_keywords if keyword in text_lower]


def extract_content_tags(text: str, tables: PatternTables = DEFAULT_PATTERN_TABLES) -> List[str]:
    """Return content labels for the text, falling back to the catch-all label."""
    text_lower = text.lower()
    tags = []
    for keyword, label in tables.content_keywords:
        if keyword in text_lower and label not in tags:
            tags.append(label)

    return tags if tags else [tables.default_content_tag]


def detect_business_domain(text: str, tables: PatternTables = DEFAULT_PATTERN_TABLES) -> str:
    """
    Pick the business domain of the text.

    Rules are evaluated in priority order and the first rule with any
    keyword match wins.
    """
    text_lower = text.lower()
    for keywords, domain in tables.domain_rules:
        if _contains_any(text_lower, keywords):
            return domain

    return tables.default_domain


def detect_tags(text: str, tables: PatternTables = DEFAULT_PATTERN_TABLES) -> TagDetectionResult:
    """Run every tag detector over the text."""
    result = TagDetectionResult(
        business_tags=detect_business_context(text, tables),
        context_tags=detect_context_tags(text, tables),
        content_tags=extract_content_tags(text, tables),
        business_domain=detect_business_domain(text, tables),
    )

    logger.debug(
        f"Detected business tags {result.business_tags}, "
        f"{len(result.context_tags)} context tags, domain={result.business_domain}"
    )
    return result
