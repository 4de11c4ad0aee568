"""Pydantic schemas for parsed generation output.

Wire names are camelCase (``seoText``, ``metaDescription``, ``googleEEAT``);
serialize with ``model_dump(by_alias=True)``.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ScoreStatus = Literal["green", "yellow", "red"]
ReportStatus = Literal["green", "yellow", "red", "error"]


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Extraction
# =============================================================================


class ParseResult(BaseModel):
    """Outcome of the JSON extraction cascade."""

    success: bool
    data: dict[str, Any] | None = None
    raw: str = ""
    strategy: str = ""  # "whole_text", "fenced_block", "brace_scan", "wrapper_key", "html_fallback"
    fixes_applied: list[str] = Field(default_factory=list)


# =============================================================================
# Metrics and scores
# =============================================================================


class HtmlMetrics(_WireModel):
    """Structure counts computed from the generated HTML."""

    word_count: int = 0
    h1_count: int = 0
    h2_count: int = 0
    h3_count: int = 0
    list_count: int = 0
    strong_count: int = 0
    faq_count: int = 0
    paragraph_count: int = 0
    avg_paragraph_words: float = 0.0
    keyword_count: int = 0
    keyword_density: float = 0.0
    title_length: int = 0
    meta_description_length: int = 0


class ScoreEntry(_WireModel):
    score: int = Field(default=0, ge=0, le=100)
    status: ScoreStatus = "red"


class GoogleEEAT(_WireModel):
    experience: ScoreEntry = Field(default_factory=ScoreEntry)
    expertise: ScoreEntry = Field(default_factory=ScoreEntry)
    authoritativeness: ScoreEntry = Field(default_factory=ScoreEntry)
    trustworthiness: ScoreEntry = Field(default_factory=ScoreEntry)


class GuidelineValidation(_WireModel):
    overall_score: int = Field(default=0, ge=0, le=100)
    status: ScoreStatus = "red"
    google_eeat: GoogleEEAT = Field(default_factory=GoogleEEAT, alias="googleEEAT")
    metrics: HtmlMetrics = Field(default_factory=HtmlMetrics)


# =============================================================================
# Generated content
# =============================================================================


class FaqItem(_WireModel):
    question: str
    answer: str


class QualityReport(_WireModel):
    status: ReportStatus = "green"
    flags: list[dict[str, Any]] = Field(default_factory=list)
    evidence_table: list[dict[str, Any]] = Field(default_factory=list)


class GeneratedContent(_WireModel):
    """Final content object returned to the caller.

    Every field has a default, so an instance is always well-formed even when
    the model output could not be recovered.
    """

    title: str = ""
    meta_description: str = ""
    seo_text: str = ""
    faq: list[FaqItem] = Field(default_factory=list)
    internal_links: list[dict[str, Any] | str] = Field(default_factory=list)
    technical_hints: str = ""
    quality_report: QualityReport = Field(default_factory=QualityReport)
    guideline_validation: GuidelineValidation = Field(default_factory=GuidelineValidation)
    product_comparison: str | None = None

    @property
    def is_error(self) -> bool:
        return self.quality_report.status == "error"

    def to_wire(self) -> dict[str, Any]:
        """camelCase dict for the HTTP response."""
        return self.model_dump(by_alias=True, exclude_none=True)
