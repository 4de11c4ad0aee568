"""Keyword analysis mode.

One gateway call with a dedicated prompt; the answer is parsed defensively and
never fails the request. An absent or unknown search intent becomes "know".
"""

import logging
from typing import Any

from seogen.api.generation.config_resolver import EXPERT_AUDIENCES
from seogen.api.llm.sanitizer import sanitize_user_input
from seogen.api.llm.schemas import LLMMessage
from seogen.api.schemas.generation import GenerationRequest
from seogen.api.schemas.keyword_analysis import SEARCH_INTENTS, KeywordAnalysis
from seogen.helpers.output_parser import OutputParser

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "Du bist ein SEO-Keyword-Analyse-Experte. Antworte nur mit validem JSON."

ANALYSIS_PROMPT = """Du bist ein SEO-Keyword-Experte. Analysiere das folgende Fokus-Keyword \
und generiere passende Vorschläge.

FOKUS-KEYWORD: "{focus_keyword}"
ZIELGRUPPE: {audience}
SPRACHE: {language}

AUFGABEN:

1. **Sekundäre Keywords (8-12)**: Semantisch verwandte Begriffe, Long-Tail-Varianten und \
LSI-Keywords, die sich natürlich in einen SEO-Text einbauen lassen.

2. **W-Fragen (5-8)**: Typische Fragen, die Nutzer zu diesem Thema stellen. Beginne mit \
"Was", "Wie", "Warum", "Wann", "Welche", "Wo". Die Fragen sollen für FAQ-Abschnitte taugen.

3. **Suchintention**: Bestimme die wahrscheinlichste Suchintention:
   - "know": Informationssuche (Nutzer will etwas lernen/verstehen)
   - "do": Transaktional (Nutzer will eine Aktion durchführen)
   - "buy": Kaufabsicht (Nutzer will kaufen/bestellen)
   - "go": Navigation (Nutzer sucht eine bestimmte Website)

4. **Themen-Vorschläge (3-5)**: Hauptthemen bzw. Abschnitte, die ein umfassender Text zu \
diesem Keyword behandeln sollte.

Antworte NUR mit validem JSON in diesem Format:
{{
  "secondaryKeywords": ["keyword1", "keyword2"],
  "wQuestions": ["Wie funktioniert...?", "Was ist...?"],
  "searchIntent": "know",
  "suggestedTopics": ["Thema 1", "Thema 2"]
}}"""


def build_analysis_messages(request: GenerationRequest) -> list[LLMMessage]:
    audience = (
        "B2B-Zielgruppe (Fachpersonal, Therapeuten, medizinische Fachkräfte)"
        if (request.target_audience or "").strip().lower() in EXPERT_AUDIENCES
        else "B2C-Zielgruppe (Endkunden, Verbraucher)"
    )
    prompt = ANALYSIS_PROMPT.format(
        focus_keyword=sanitize_user_input(request.focus_keyword),
        audience=audience,
        language="Deutsch" if request.language == "de" else "Englisch",
    )
    return [LLMMessage.system(SYSTEM_PROMPT), LLMMessage.user(prompt)]


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def parse_keyword_analysis(content: str, parser: OutputParser | None = None) -> KeywordAnalysis:
    """Recover a KeywordAnalysis from model output. Never raises."""
    parser = parser or OutputParser()
    data = parser.extract_json_object(content)
    if data is None:
        logger.warning("Keyword analysis response contained no JSON object")
        return KeywordAnalysis()

    intent = data.get("searchIntent")
    if intent not in SEARCH_INTENTS:
        logger.info(f"Invalid search intent {intent!r}, defaulting to 'know'")
        intent = "know"

    return KeywordAnalysis(
        secondary_keywords=_string_list(data.get("secondaryKeywords")),
        w_questions=_string_list(data.get("wQuestions")),
        search_intent=intent,
        suggested_topics=_string_list(data.get("suggestedTopics")),
    )
