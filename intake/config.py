import os
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv


# Business Context Config (category -> substring patterns)
BUSINESS_CONTEXT_PATTERNS = {
    "JMS3": ["jms", "john spence", "executive coaching"],
    "ai4coaches": ["ai4coaches", "ai for coaches", "coaching ai"],
    "SubjectMatterElders": ["subject matter elders", "knowledge preservation", "expert knowledge"],
    "bizCore360": ["bizcore", "business intelligence", "strategic framework"],
}
DEFAULT_BUSINESS_TAG = "JMS3"

CONTEXT_TAG_KEYWORDS = [
    "sales", "marketing", "leadership", "coaching", "strategy", "psychology",
    "communication", "negotiation", "training", "process", "automation", "ai",
]

# Content tags (keyword -> label)
CONTENT_TAG_KEYWORDS = [
    ("onboarding", "onboarding"),
    ("sales", "sales"),
    ("project", "project-management"),
    ("team", "team-dynamics"),
    ("automation", "automation"),
    ("ai", "ai-training"),
    ("coaching", "coaching"),
    ("leadership", "leadership"),
    ("communication", "communication"),
]
DEFAULT_CONTENT_TAG = "business-operations"

# Business Domain Rules (Priority Order)
BUSINESS_DOMAIN_RULES = [
    (["financial", "budget", "revenue"], "finance"),
    (["marketing", "campaign", "brand"], "marketing"),
    (["sales", "client", "customer"], "sales"),
    (["hr", "employee", "recruitment"], "human_resources"),
    (["strategy", "planning", "vision"], "strategy"),
    (["technology", "software", "system"], "technology"),
]
DEFAULT_BUSINESS_DOMAIN = "operations"

# Insight Categories
INSIGHT_PATTERNS = {
    "products-services": ["product", "service", "offering"],
    "customer-analysis": ["customer", "client", "demographic"],
    "competitive-analysis": ["competitor", "competition", "market share"],
    "resource-planning": ["resource", "budget", "investment"],
    "business-process": ["process", "workflow", "procedure"],
    "psychological-framework": ["psychology", "behavior", "motivation"],
    "strategic-planning": ["strategy", "goal", "objective"],
    "risk-analysis": ["risk", "challenge", "issue"],
}
DEFAULT_INSIGHT = "general-business"

# Narrative Patterns (example data, tuned to one business's wording)
NARRATIVE_PATTERNS = {
    "JMS3": [
        ("jms3_description", [r"strategic concierge", r"solo.*?founders", r"getting.*?builders.*?unstuck"]),
        ("jms3_methodology", [r"coaching.*?approach", r"leadership.*?development", r"executive.*?coaching"]),
    ],
    "ai4coaches": [
        ("ai4coaches_description", [r"ai.*?coaching", r"automated.*?coaching", r"coaching.*?technology"]),
        ("ai4coaches_technology", [r"ai.*?assessment", r"coaching.*?automation", r"smart.*?coaching"]),
    ],
    "SubjectMatterElders": [
        ("sme_description", [r"subject.*?matter.*?elders", r"content.*?creation", r"thought.*?leadership"]),
        ("sme_content_strategy", [r"positioning.*?distribution", r"article.*?newsletter", r"persona.*?psychographic"]),
    ],
    "bizCore360": [
        ("bizcore360_description", [r"bizcore360", r"systems.*?automation", r"integrated.*?dashboards"]),
        ("bizcore360_systems", [r"automation.*?handoffs", r"crm.*?funnel", r"platform.*?connections"]),
    ],
}

# Detection Thresholds
MIN_SENTENCE_LENGTH = 20
NARRATIVE_MAX_SENTENCES = 2
SENTENCE_TERMINATORS = r"[.!?]+"

# Complexity Thresholds (Priority Order): (max words, max diversity ratio, level)
COMPLEXITY_THRESHOLDS = [
    (5000, 0.7, "expert"),
    (2000, 0.5, "advanced"),
    (500, 0.3, "intermediate"),
]

# Section Splitting
HEADING_PATTERN = r"^#{1,6}\s+(.+)$"
DEFAULT_SECTION_TITLE = "Document"

# File Upload Limits
MAX_FILE_SIZE_MB = 10
TEXT_EXTENSIONS = [".md", ".txt"]
ALLOWED_EXTENSIONS = [".md", ".txt", ".pdf", ".doc", ".docx"]


@dataclass(frozen=True)
class PatternTables:
    """Read-only keyword tables shared by every detector."""
    business_context: Mapping[str, Tuple[str, ...]]
    default_business_tag: str
    context_keywords: Tuple[str, ...]
    content_keywords: Tuple[Tuple[str, str], ...]
    default_content_tag: str
    domain_rules: Tuple[Tuple[Tuple[str, ...], str], ...]
    default_domain: str
    insights: Mapping[str, Tuple[str, ...]]
    default_insight: str
    narratives: Mapping[str, Tuple[Tuple[str, Tuple[str, ...]], ...]]


def build_pattern_tables(
    business_context: Optional[Mapping] = None,
    narratives: Optional[Mapping] = None,
) -> PatternTables:
    """
    Freeze the configured keyword lists into a PatternTables instance.

    Args:
        business_context: Override for the business-context table
        narratives: Override for the narrative pattern table

    Returns:
        Immutable PatternTables
    """
    business_context = business_context if business_context is not None else BUSINESS_CONTEXT_PATTERNS
    narratives = narratives if narratives is not None else NARRATIVE_PATTERNS

    return PatternTables(
        business_context=MappingProxyType(
            {label: tuple(patterns) for label, patterns in business_context.items()}
        ),
        default_business_tag=DEFAULT_BUSINESS_TAG,
        context_keywords=tuple(CONTEXT_TAG_KEYWORDS),
        content_keywords=tuple(CONTENT_TAG_KEYWORDS),
        default_content_tag=DEFAULT_CONTENT_TAG,
        domain_rules=tuple((tuple(keywords), label) for keywords, label in BUSINESS_DOMAIN_RULES),
        default_domain=DEFAULT_BUSINESS_DOMAIN,
        insights=MappingProxyType(
            {label: tuple(keywords) for label, keywords in INSIGHT_PATTERNS.items()}
        ),
        default_insight=DEFAULT_INSIGHT,
        narratives=MappingProxyType({
            tag: tuple((field_name, tuple(patterns)) for field_name, patterns in fields)
            for tag, fields in narratives.items()
        }),
    )


DEFAULT_PATTERN_TABLES = build_pattern_tables()


@dataclass(frozen=True)
class Settings:
    """Runtime settings read from the environment."""
    mongodb_uri: Optional[str]
    database_name: str
    host: str
    port: int
    workers: int
    log_level: str
    environment: str

    @property
    def reload(self) -> bool:
        return self.environment == "development"


@lru_cache()
def get_settings() -> Settings:
    """Load settings from environment variables (and .env if present)."""
    load_dotenv()
    return Settings(
        mongodb_uri=os.getenv("MONGODB_URI") or None,
        database_name=os.getenv("DATABASE_NAME", "document_intake"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        workers=int(os.getenv("WORKERS", "1")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        environment=os.getenv("ENVIRONMENT", "production"),
    )
