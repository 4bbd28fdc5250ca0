"""
Text classification and section extraction.
"""
from intake.parser.tag_detector import (
    TagDetectionResult,
    detect_tags,
    detect_business_context,
    detect_context_tags,
    detect_business_domain,
    extract_content_tags,
)
from intake.parser.complexity import score_complexity, complexity_rank
from intake.parser.insight_extractor import extract_insights
from intake.parser.section_detector import split_sections, build_sections
from intake.parser.narrative_extractor import split_sentences, extract_narratives
from intake.parser.categorizer import DocumentAnalysis, analyze_text

__all__ = [
    "TagDetectionResult",
    "detect_tags",
    "detect_business_context",
    "detect_context_tags",
    "detect_business_domain",
    "extract_content_tags",
    "score_complexity",
    "complexity_rank",
    "extract_insights",
    "split_sections",
    "build_sections",
    "split_sentences",
    "extract_narratives",
    "DocumentAnalysis",
    "analyze_text",
]
