"""User prompt assembly.

Shared by every strategy. Each section is rendered only when its input is
non-empty.
"""

from seogen.api.generation.config_resolver import SEARCH_INTENT_GUIDANCE, ResolvedConfig
from seogen.api.llm.sanitizer import sanitize_user_input
from seogen.api.prompts.blocks import join_blocks
from seogen.api.schemas.generation import GenerationRequest

MANUFACTURER_INFO_MAX_CHARS = 3000

_PAGE_TYPE_LABELS = {
    "product": "PRODUKTSEITE",
    "category": "KATEGORIESEITE",
    "guide": "RATGEBER",
}


def _clean(value: str | None) -> str:
    return sanitize_user_input(value or "").strip()


def _bullets(items: list[str]) -> str:
    return "\n".join(f"- {item}" for item in items)


def build_user_prompt(
    config: ResolvedConfig,
    request: GenerationRequest,
    briefing_text: str | None = None,
) -> str:
    """Assemble the task-specific user prompt."""
    audience = (
        "Fachpublikum (wissenschaftlich & praxisnah)"
        if config.expert_audience
        else "Endkunden (verständlich aber fundiert)"
    )
    header_lines = [
        "# AUFTRAG",
        f"**Seitentyp**: {_PAGE_TYPE_LABELS[config.page_type]}",
        f"**Zielgruppe**: {audience}",
    ]
    brand_name = _clean(request.brand_name)
    if brand_name:
        header_lines.append(f"**Marke**: {brand_name}")
    header_lines.append(f"**Hauptthema**: {_clean(request.topic)}")
    header_lines.append(
        f"**Fokus-Keyword**: {_clean(request.focus_keyword)} "
        "(PFLICHT in H1, ersten 100 Wörtern, mind. 1x H2)"
    )
    if request.secondary_keywords:
        keywords = ", ".join(_clean(k) for k in request.secondary_keywords)
        header_lines.append(f"**Sekundär-Keywords (LSI)**: {keywords}")
    header_lines.append(f"**Textlänge**: ca. {config.target_word_count} Wörter")
    if config.page_goal:
        header_lines.append(f"**Seitenziel**: {config.page_goal}")

    return join_blocks(
        "\n".join(header_lines),
        _manufacturer_section(request),
        _section("ZUSÄTZLICHE INFORMATIONEN / USPs", _clean(request.additional_info)),
        _section("INTERNE LINKZIELE", _clean(request.internal_links)),
        _faq_section(request),
        _search_intent_section(config),
        _w_questions_section(request),
        _section("SERP-KONTEXT (Wettbewerb)", _clean(request.serp_context)),
        _section("BRIEFING (aus hochgeladenen Dokumenten)", (briefing_text or "").strip()),
        _examples_section(request),
    )


def _section(title: str, body: str) -> str:
    if not body:
        return ""
    return f"# {title}\n{body}"


def _manufacturer_section(request: GenerationRequest) -> str:
    lines = []
    name = _clean(request.manufacturer_name)
    website = _clean(request.manufacturer_website)
    info = _clean(request.manufacturer_info)[:MANUFACTURER_INFO_MAX_CHARS]
    if name:
        lines.append(f"**Hersteller**: {name}")
    if website:
        lines.append(f"**Website**: {website}")
    if info:
        lines.append(f"**Herstellerinfos**:\n{info}")
    if not lines:
        return ""
    return "# HERSTELLERINFORMATIONEN (NUR DIESE DATEN VERWENDEN!)\n" + "\n".join(lines)


def _faq_section(request: GenerationRequest) -> str:
    if not request.include_faq:
        return "# FAQ\nKeinen FAQ-Bereich erstellen, \"faq\" bleibt eine leere Liste."
    questions = [q.strip() for q in _clean(request.faq_inputs).splitlines() if q.strip()]
    if not questions:
        return ""
    return (
        "# PFLICHT-FAQ (diese Fragen MÜSSEN beantwortet werden)\n" + _bullets(questions)
    )


def _search_intent_section(config: ResolvedConfig) -> str:
    if not config.search_intents:
        return ""
    guidance = [SEARCH_INTENT_GUIDANCE[intent] for intent in config.search_intents]
    return "# SUCHINTENTION\n" + _bullets(guidance)


def _w_questions_section(request: GenerationRequest) -> str:
    if not request.w_questions:
        return ""
    questions = [_clean(q) for q in request.w_questions]
    return (
        "# PFLICHT W-FRAGEN (im Text oder in der FAQ beantworten)\n" + _bullets(questions)
    )


def _examples_section(request: GenerationRequest) -> str:
    if not request.add_examples:
        return ""
    return "# PRAXISBEISPIELE\nBaue pro Hauptabschnitt ein konkretes Praxisbeispiel ein."
