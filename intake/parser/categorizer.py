"""
Document Categorizer

This module runs every detector over a document's text and collects the
results into one analysis. It is a pure function of the text and the
pattern tables: the same input always yields the same analysis.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from intake.config import PatternTables, DEFAULT_PATTERN_TABLES
from intake.models.document import ComplexityLevel, DocumentMetadata, Section
from intake.parser.complexity import lexical_stats, score_complexity
from intake.parser.insight_extractor import extract_insights
from intake.parser.narrative_extractor import extract_narratives
from intake.parser.section_detector import build_sections
from intake.parser.tag_detector import detect_tags

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentAnalysis:
    """Everything the detectors derive from one text."""
    business_tags: List[str]
    context_tags: List[str]
    content_tags: List[str]
    business_domain: str
    complexity_level: ComplexityLevel
    business_insights: List[str]
    narratives: Dict[str, str]
    sections: List[Section]
    metadata: DocumentMetadata

    def document_fields(self) -> Dict[str, Any]:
        """Fields to copy onto a Document record."""
        return {
            "business_tags": self.business_tags,
            "context_tags": self.context_tags,
            "content_tags": self.content_tags,
            "business_domain": self.business_domain,
            "complexity_level": self.complexity_level,
            "business_insights": self.business_insights,
            "narratives": self.narratives,
            "metadata": self.metadata,
        }


def build_metadata(text: str, section_count: int) -> DocumentMetadata:
    """Build the counts block stored with a document."""
    word_count, _ = lexical_stats(text)
    return DocumentMetadata(
        word_count=word_count,
        character_count=len(text),
        section_count=section_count,
        has_structured_content=section_count > 1,
    )


def analyze_text(text: str, tables: PatternTables = DEFAULT_PATTERN_TABLES) -> DocumentAnalysis:
    """
    Classify a document's text.

    Args:
        text: Raw document text
        tables: Pattern tables used by every detector

    Returns:
        DocumentAnalysis with tags, domain, complexity, insights,
        narratives, sections and metadata
    """
    tags = detect_tags(text, tables)
    sections = build_sections(text, tables)

    analysis = DocumentAnalysis(
        business_tags=tags.business_tags,
        context_tags=tags.context_tags,
        content_tags=tags.content_tags,
        business_domain=tags.business_domain,
        complexity_level=score_complexity(text),
        business_insights=extract_insights(text, tables),
        narratives=extract_narratives(text, tags.business_tags, tables),
        sections=sections,
        metadata=build_metadata(text, len(sections)),
    )

    logger.info(
        f"Analyzed text: {analysis.metadata.word_count} words, {len(sections)} sections, "
        f"domain={analysis.business_domain}, complexity={analysis.complexity_level.value}"
    )
    return analysis
