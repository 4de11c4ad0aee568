"""Pure helpers for turning model output into validated content.

- OutputParser: JSON extraction cascade
- ContentMetrics: HTML structure counts
- score_eeat: E-E-A-T heuristic scoring
- ContentValidator: total raw-text -> GeneratedContent conversion
"""

from seogen.helpers.content_metrics import ContentMetrics, count_words, strip_html
from seogen.helpers.content_validator import ContentValidator, ParseContext, error_content
from seogen.helpers.eeat_scoring import classify_score, score_eeat
from seogen.helpers.output_parser import OutputParser
from seogen.helpers.schemas import (
    FaqItem,
    GeneratedContent,
    GoogleEEAT,
    GuidelineValidation,
    HtmlMetrics,
    ParseResult,
    QualityReport,
    ScoreEntry,
)

__all__ = [
    # Parsing
    "OutputParser",
    "ParseResult",
    # Metrics
    "ContentMetrics",
    "HtmlMetrics",
    "count_words",
    "strip_html",
    # Scoring
    "score_eeat",
    "classify_score",
    # Validation
    "ContentValidator",
    "ParseContext",
    "error_content",
    # Schemas
    "GeneratedContent",
    "FaqItem",
    "QualityReport",
    "GuidelineValidation",
    "GoogleEEAT",
    "ScoreEntry",
]
