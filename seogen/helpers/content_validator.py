"""Response validation: raw model text -> GeneratedContent.

``ContentValidator.parse`` is total. Whatever the model returned, the caller
gets a structurally valid GeneratedContent; unusable output yields the
error-flagged empty object (``qualityReport.status == "error"``).
"""

import json
import logging
from dataclasses import dataclass
from typing import Any

from seogen.helpers.content_metrics import ContentMetrics, first_h1_text, strip_html
from seogen.helpers.eeat_scoring import score_eeat
from seogen.helpers.output_parser import OutputParser
from seogen.helpers.schemas import FaqItem, GeneratedContent, QualityReport

logger = logging.getLogger(__name__)

MIN_SEO_TEXT_CHARS = 100
TITLE_MAX_CHARS = 60
META_DESCRIPTION_MAX_CHARS = 155

PRODUCT_TECHNICAL_HINTS = "Empfohlene Schema.org Typen: Product, Offer, AggregateRating"
DEFAULT_TECHNICAL_HINTS = "Empfohlene Schema.org Typen: BreadcrumbList, ItemList"

_REPORT_STATUSES = ("green", "yellow", "red")


def _dict_list(value: Any) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


@dataclass(frozen=True)
class ParseContext:
    """Request facts the defaults are derived from."""

    main_topic: str
    focus_keyword: str = ""
    page_type: str = "product"

    @property
    def technical_hints(self) -> str:
        if self.page_type == "product":
            return PRODUCT_TECHNICAL_HINTS
        return DEFAULT_TECHNICAL_HINTS


def error_content(context: ParseContext, issue: str) -> GeneratedContent:
    """The explicit error-flagged empty object."""
    return GeneratedContent(
        title=context.main_topic[:TITLE_MAX_CHARS],
        meta_description="",
        seo_text="",
        faq=[],
        internal_links=[],
        technical_hints=context.technical_hints,
        quality_report=QualityReport(
            status="error",
            flags=[{"type": "parse", "severity": "high", "issue": issue}],
        ),
    )


class ContentValidator:
    """Extract, validate and enrich generated content."""

    def __init__(
        self,
        parser: OutputParser | None = None,
        metrics: ContentMetrics | None = None,
    ) -> None:
        self.parser = parser or OutputParser()
        self.metrics = metrics or ContentMetrics()

    def parse(self, raw: str, context: ParseContext) -> GeneratedContent:
        """
        Convert raw model text into GeneratedContent.

        Args:
            raw: Model output (any string)
            context: Main topic, focus keyword and page type for defaults

        Returns:
            GeneratedContent, error-flagged when nothing usable was found
        """
        if not isinstance(raw, str):
            raw = "" if raw is None else str(raw)

        try:
            result = self.parser.extract(raw)
            if not result.success or result.data is None:
                logger.warning(
                    "No JSON or HTML content recovered from model output (%d chars)", len(raw)
                )
                return error_content(context, "Model output could not be parsed")

            logger.debug(
                "Extracted content via %s (fixes=%s)", result.strategy, result.fixes_applied
            )
            return self.build(result.data, context)
        except Exception:
            # The pipeline must always receive a usable object
            logger.exception("Unexpected error while parsing model output")
            return error_content(context, "Model output could not be parsed")

    def build(self, data: dict[str, Any], context: ParseContext) -> GeneratedContent:
        """Validate an extracted object and fill every missing field."""
        seo_text = data.get("seoText") or data.get("text")
        if not isinstance(seo_text, str) or len(seo_text.strip()) < MIN_SEO_TEXT_CHARS:
            logger.warning(
                "Rejected model output: seoText missing or shorter than %d chars",
                MIN_SEO_TEXT_CHARS,
            )
            return error_content(context, "seoText missing or too short")

        faq = self._normalize_faq(data.get("faq"))
        title = self._string(data.get("title")) or self._default_title(seo_text, context)
        meta_description = self._string(data.get("metaDescription")) or strip_html(seo_text)[
            :META_DESCRIPTION_MAX_CHARS
        ]

        metrics = self.metrics.html_metrics(
            seo_text,
            faq_count=len(faq),
            focus_keyword=context.focus_keyword,
            title=title,
            meta_description=meta_description,
        )
        validation = score_eeat(metrics)

        return GeneratedContent(
            title=title,
            meta_description=meta_description,
            seo_text=seo_text,
            faq=faq,
            internal_links=self._normalize_links(data.get("internalLinks")),
            technical_hints=self._technical_hints(data.get("technicalHints"), context),
            quality_report=self._normalize_report(data.get("qualityReport"), validation.status),
            guideline_validation=validation,
            product_comparison=self._string(data.get("productComparison")) or None,
        )

    @staticmethod
    def _string(value: Any) -> str:
        return value.strip() if isinstance(value, str) else ""

    def _default_title(self, seo_text: str, context: ParseContext) -> str:
        title = first_h1_text(seo_text) or context.main_topic or context.focus_keyword
        return title[:TITLE_MAX_CHARS]

    def _normalize_faq(self, value: Any) -> list[FaqItem]:
        if not isinstance(value, list):
            return []
        items: list[FaqItem] = []
        for entry in value:
            if not isinstance(entry, dict):
                continue
            question = self._string(entry.get("question"))
            answer = self._string(entry.get("answer"))
            if question and answer:
                items.append(FaqItem(question=question, answer=answer))
        return items

    def _normalize_links(self, value: Any) -> list[dict[str, Any] | str]:
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, (dict, str)) and item]

    def _technical_hints(self, value: Any, context: ParseContext) -> str:
        if isinstance(value, str) and value.strip():
            return value.strip()
        if isinstance(value, (dict, list)) and value:
            return json.dumps(value, ensure_ascii=False)
        return context.technical_hints

    def _normalize_report(self, value: Any, computed_status: str) -> QualityReport:
        if not isinstance(value, dict):
            return QualityReport(status=computed_status)
        status = value.get("status")
        if status not in _REPORT_STATUSES:
            status = computed_status
        return QualityReport(
            status=status,
            flags=_dict_list(value.get("flags")),
            evidence_table=_dict_list(value.get("evidenceTable")),
        )
