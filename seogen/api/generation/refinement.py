"""Quick-change and free-text refinement of previously generated content.

Both paths bypass strategy selection: they send a two-message exchange that
embeds the prior content verbatim plus a delta instruction.
"""

import json
from dataclasses import dataclass
from typing import Any, Literal

from seogen.api.generation.config_resolver import (
    ResolvedConfig,
    resolve_address,
    resolve_keyword_density,
    resolve_tonality,
    resolve_word_count,
)
from seogen.api.llm.sanitizer import UserInputSanitized
from seogen.api.llm.schemas import LLMMessage
from seogen.api.prompts.blocks import output_format_block
from seogen.api.schemas.generation import GenerationRequest, QuickChangeSet

EDITOR_SYSTEM_PROMPT = (
    "Du bist ein erfahrener SEO-Content-Editor. Du überarbeitest bestehende Texte "
    "gezielt und behältst alles bei, was nicht geändert werden soll."
)

SECTION_INSTRUCTION = (
    'WICHTIG: Überarbeite NUR den folgenden Abschnitt: "{section}". '
    "Lasse alle anderen Teile des Textes UNVERÄNDERT."
)


@dataclass(frozen=True)
class QuickChangeDelta:
    """One parameter that differs from the current form state."""

    field: str
    instruction: str


@dataclass(frozen=True)
class RefinementInstruction:
    kind: Literal["quick-change", "refine"]
    text: str
    deltas: tuple[QuickChangeDelta, ...] = ()


@dataclass(frozen=True)
class RefinementContext:
    """Prior content plus what to change about it."""

    base: dict[str, Any]
    instruction: RefinementInstruction
    product_comparison: bool = False

    def to_messages(self, config: ResolvedConfig) -> list[LLMMessage]:
        base_json = json.dumps(self.base, ensure_ascii=False, indent=2)
        user = "\n\n".join(
            [
                f"# BESTEHENDER CONTENT (JSON)\n{base_json}",
                self.instruction.text,
                output_format_block(config, self.product_comparison),
            ]
        )
        return [LLMMessage.system(EDITOR_SYSTEM_PROMPT), LLMMessage.user(user)]


# =============================================================================
# Quick change
# =============================================================================


def diff_quick_changes(
    changes: QuickChangeSet | None,
    request: GenerationRequest,
    config: ResolvedConfig,
) -> list[QuickChangeDelta]:
    """Fields in ``changes`` whose resolved value differs from the current state."""
    if changes is None:
        return []
    deltas: list[QuickChangeDelta] = []

    if changes.tonality is not None:
        key, label = resolve_tonality(changes.tonality, changes.tonality)
        if key != config.tonality_key:
            deltas.append(QuickChangeDelta("tonality", f"Tonalität ändern zu: {label}"))

    if changes.form_of_address is not None:
        key, style = resolve_address(changes.form_of_address)
        if key != config.address_form:
            deltas.append(QuickChangeDelta("formOfAddress", f"Anrede ändern: {style}"))

    if changes.word_count is not None:
        words = resolve_word_count(None, changes.word_count)
        if words != config.target_word_count:
            deltas.append(
                QuickChangeDelta("wordCount", f"Textlänge anpassen auf ca. {words} Wörter")
            )

    if changes.keyword_density is not None:
        density = resolve_keyword_density(changes.keyword_density)
        if density.key != config.keyword_density.key:
            deltas.append(
                QuickChangeDelta("keywordDensity", f"Keyword-Dichte anpassen: {density.label}")
            )

    if changes.include_faq is not None and changes.include_faq != request.include_faq:
        text = (
            "FAQ-Bereich ergänzen (mind. 5 relevante Fragen)"
            if changes.include_faq
            else "FAQ-Bereich entfernen, \"faq\" bleibt eine leere Liste"
        )
        deltas.append(QuickChangeDelta("includeFAQ", text))

    if changes.add_examples is not None and changes.add_examples != request.add_examples:
        text = (
            "Pro Hauptabschnitt ein konkretes Praxisbeispiel ergänzen"
            if changes.add_examples
            else "Praxisbeispiele entfernen"
        )
        deltas.append(QuickChangeDelta("addExamples", text))

    return deltas


def build_quick_change_context(
    request: GenerationRequest,
    config: ResolvedConfig,
) -> RefinementContext | None:
    """Context for a quick change, or None when no field actually differs."""
    deltas = diff_quick_changes(request.changes, request, config)
    if not deltas or request.existing_content is None:
        return None
    lines = "\n".join(f"- {delta.instruction}" for delta in deltas)
    text = (
        "# ÄNDERUNGEN (nur diese umsetzen)\n"
        f"{lines}\n"
        "Alle übrigen Inhalte, Fakten und die Struktur bleiben erhalten."
    )
    return RefinementContext(
        base=request.existing_content,
        instruction=RefinementInstruction(kind="quick-change", text=text, deltas=tuple(deltas)),
        product_comparison=request.product_comparison_enabled,
    )


# =============================================================================
# Free-text refinement
# =============================================================================


def build_refine_context(request: GenerationRequest) -> RefinementContext:
    """Context for a free-text refinement of ``existingContent``."""
    if request.existing_content is None or not request.refinement_prompt:
        raise ValueError("Refinement requires existingContent and refinementPrompt")

    parts = []
    section = (request.refinement_section or "").strip()
    if section:
        parts.append(SECTION_INSTRUCTION.format(section=section))
    parts.append(
        "# ÜBERARBEITUNGSANWEISUNG\n" + UserInputSanitized(request.refinement_prompt).to_prompt()
    )
    return RefinementContext(
        base=request.existing_content,
        instruction=RefinementInstruction(kind="refine", text="\n\n".join(parts)),
        product_comparison=request.product_comparison_enabled,
    )
