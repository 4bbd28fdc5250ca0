"""
Business insight extraction.
"""

import logging
from typing import List

from intake.config import PatternTables, DEFAULT_PATTERN_TABLES

logger = logging.getLogger(__name__)


def extract_insights(text: str, tables: PatternTables = DEFAULT_PATTERN_TABLES) -> List[str]:
    """
    Label the kinds of business intelligence a text contains.

    Categories are independent; a text can match any number of them.

    Args:
        text: Raw document or section text
        tables: Pattern tables holding the insight categories

    Returns:
        Non-empty list of insight labels in table order
    """
    text_lower = text.lower()
    insights = [
        label for label, keywords in tables.insights.items()
        if any(keyword in text_lower for keyword in keywords)
    ]

    if not insights:
        return [tables.default_insight]

    logger.debug(f"Extracted insights: {insights}")
    return insights
