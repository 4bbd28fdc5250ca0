"""
Heading-based Section Splitter

This module splits raw multi-line text into flat, titled sections using
markdown-style heading markers. Heading depth is not tracked: every
heading closes the open section and starts a new one.
"""

import re
import logging
from typing import List, Tuple

from intake.config import (
    HEADING_PATTERN,
    DEFAULT_SECTION_TITLE,
    PatternTables,
    DEFAULT_PATTERN_TABLES,
)
from intake.models.document import Section
from intake.parser.insight_extractor import extract_insights
from intake.parser.tag_detector import detect_context_tags

logger = logging.getLogger(__name__)

_heading_re = re.compile(HEADING_PATTERN)


def split_sections(text: str) -> List[Tuple[str, str]]:
    """
    Split text into (title, content) pairs.

    Non-heading lines are appended verbatim, each followed by a newline, to
    the open section. A section is emitted only if its content has
    non-whitespace characters. When nothing is emitted the whole input
    becomes a single placeholder-titled section.

    Args:
        text: Raw document text

    Returns:
        Non-empty ordered list of (title, content) pairs
    """
    sections: List[Tuple[str, str]] = []
    current_title = DEFAULT_SECTION_TITLE
    current_lines: List[str] = []

    def close_current():
        content = "".join(current_lines)
        if content.strip():
            sections.append((current_title, content))

    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()

    for line in lines:
        match = _heading_re.match(line)
        if match:
            close_current()
            current_title = match.group(1).strip() or DEFAULT_SECTION_TITLE
            current_lines = []
        else:
            current_lines.append(line + "\n")

    close_current()

    if not sections:
        sections.append((DEFAULT_SECTION_TITLE, text))

    logger.debug(f"Split text into {len(sections)} sections")
    return sections


def section_tags(content: str, tables: PatternTables = DEFAULT_PATTERN_TABLES) -> List[str]:
    """Insight labels followed by context tags, recomputed over one section."""
    tags = extract_insights(content, tables)
    for tag in detect_context_tags(content, tables):
        if tag not in tags:
            tags.append(tag)
    return tags


def build_sections(text: str, tables: PatternTables = DEFAULT_PATTERN_TABLES) -> List[Section]:
    """Split text and wrap each part in a Section with order index and tags."""
    return [
        Section(
            title=title,
            content=content,
            order_index=index,
            tags=section_tags(content, tables),
        )
        for index, (title, content) in enumerate(split_sections(text))
    ]
