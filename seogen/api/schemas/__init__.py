"""Request and response schemas."""

from .generation import (
    COMPLIANCE_LABELS,
    ComplianceChecklist,
    ComplianceFlags,
    GenerationRequest,
    QuickChangeSet,
)
from .keyword_analysis import (
    SEARCH_INTENTS,
    KeywordAnalysis,
    KeywordAnalysisResponse,
)

__all__ = [
    # Request
    "GenerationRequest",
    "ComplianceChecklist",
    "ComplianceFlags",
    "QuickChangeSet",
    "COMPLIANCE_LABELS",
    # Keyword analysis
    "KeywordAnalysis",
    "KeywordAnalysisResponse",
    "SEARCH_INTENTS",
]
