"""Inbound request schema for generate-seo-content.

Field names on the wire are camelCase; attributes are snake_case. Enum-like
fields (tone, formOfAddress, keywordDensity, ...) are accepted as free strings
and resolved with documented fallbacks by the config resolver, so only
structural constraints (required keyword, lengths, list sizes) reject a request.
"""

from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    StringConstraints,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

MAX_SECONDARY_KEYWORDS = 20
MAX_BRIEFING_FILES = 20
MAX_REFINEMENT_PROMPT_CHARS = 5000

FocusKeyword = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)
]

COMPLIANCE_LABELS: dict[str, str] = {
    "mdr": "MDR/MPDG",
    "hwg": "HWG",
    "studies": "Studien-Validierung",
}


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class ComplianceFlags(_CamelModel):
    """Nested ``complianceChecks`` object."""

    mdr: bool = False
    hwg: bool = False
    studies: bool = False


class ComplianceChecklist(BaseModel):
    """Canonical compliance selection after folding nested and flat flags."""

    model_config = ConfigDict(frozen=True)

    mdr: bool = False
    hwg: bool = False
    studies: bool = False

    @property
    def items(self) -> tuple[str, ...]:
        return tuple(name for name in ("mdr", "hwg", "studies") if getattr(self, name))

    @property
    def labels(self) -> list[str]:
        return [COMPLIANCE_LABELS[name] for name in self.items]

    @property
    def is_empty(self) -> bool:
        return not self.items

    @classmethod
    def fold(
        cls,
        enabled: bool,
        nested: ComplianceFlags | None,
        check_mdr: bool = False,
        check_hwg: bool = False,
        check_studies: bool = False,
    ) -> "ComplianceChecklist":
        """Union of nested and flat flags, empty unless ``enabled``."""
        if not enabled:
            return cls()
        nested = nested or ComplianceFlags()
        return cls(
            mdr=nested.mdr or check_mdr,
            hwg=nested.hwg or check_hwg,
            studies=nested.studies or check_studies,
        )


class QuickChangeSet(_CamelModel):
    """Parameter deltas requested by a quick change."""

    tonality: str | None = None
    form_of_address: str | None = None
    word_count: int | str | None = None
    keyword_density: str | None = None
    include_faq: bool | None = Field(default=None, alias="includeFAQ")
    add_examples: bool | None = None


class GenerationRequest(_CamelModel):
    """Body of POST /generate-seo-content."""

    mode: Literal["generate", "analyze-keyword"] = "generate"
    focus_keyword: FocusKeyword
    language: str = "de"
    page_type: str = "product"
    target_audience: str | None = None
    form_of_address: str | None = None

    # Tone / length / density (resolved with fallbacks)
    tone: str | None = None
    tonality: str | None = None
    content_length: str | None = None
    word_count: int | str | None = None
    keyword_density: str | None = None
    max_paragraph_length: int | str | None = None

    # Keywords and intent
    secondary_keywords: list[str] = Field(default_factory=list, max_length=MAX_SECONDARY_KEYWORDS)
    search_intent: list[str] = Field(default_factory=list)
    w_questions: list[str] = Field(default_factory=list)
    page_goal: str | None = None
    serp_context: str | None = None

    # Source material
    brand_name: str | None = None
    main_topic: str | None = None
    manufacturer_name: str | None = None
    manufacturer_website: str | None = None
    manufacturer_info: str | None = None
    additional_info: str | None = None
    internal_links: str | None = None
    faq_inputs: str | None = None
    briefing_files: list[str] = Field(default_factory=list, max_length=MAX_BRIEFING_FILES)

    # Compliance (nested and flat legacy variants)
    compliance_check: bool = False
    compliance_checks: ComplianceFlags | None = None
    check_mdr: bool = Field(default=False, alias="checkMDR")
    check_hwg: bool = Field(default=False, alias="checkHWG")
    check_studies: bool = False

    # Output switches
    prompt_version: str | None = None
    ai_model: str | None = None
    include_faq: bool = Field(default=True, alias="includeFAQ")
    add_examples: bool = False
    product_comparison_enabled: bool = False

    # Refinement
    existing_content: dict[str, Any] | None = None
    refinement_prompt: str | None = Field(default=None, max_length=MAX_REFINEMENT_PROMPT_CHARS)
    refinement_section: str | None = None
    quick_change: bool = False
    changes: QuickChangeSet | None = None

    _compliance: ComplianceChecklist = PrivateAttr(default_factory=ComplianceChecklist)

    @field_validator("secondary_keywords", "w_questions", "briefing_files", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("search_intent", mode="before")
    @classmethod
    def _wrap_single_intent(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("secondary_keywords", "w_questions")
    @classmethod
    def _drop_blank_entries(cls, value: list[str]) -> list[str]:
        return [item.strip() for item in value if item and item.strip()]

    @model_validator(mode="after")
    def _fold_compliance(self) -> "GenerationRequest":
        self._compliance = ComplianceChecklist.fold(
            enabled=self.compliance_check,
            nested=self.compliance_checks,
            check_mdr=self.check_mdr,
            check_hwg=self.check_hwg,
            check_studies=self.check_studies,
        )
        return self

    @property
    def compliance(self) -> ComplianceChecklist:
        """Compliance flags folded from nested and flat fields."""
        return self._compliance

    @property
    def topic(self) -> str:
        """Main topic, falling back to the focus keyword."""
        return (self.main_topic or "").strip() or self.focus_keyword

    @property
    def is_quick_change(self) -> bool:
        return self.quick_change and self.existing_content is not None

    @property
    def is_refinement(self) -> bool:
        return bool(self.refinement_prompt and self.refinement_prompt.strip()) and (
            self.existing_content is not None
        )
