"""Config resolver.

Pure mapping from raw request fields to a frozen ResolvedConfig. Never raises:
every unknown enum value falls back to a documented default.

Defaults:
    formOfAddress  -> du
    tone/tonality  -> Balanced-Mix
    contentLength  -> 800 words
    keywordDensity -> normal (0.5-1.5%)
    maxParagraphLength -> 300 words
    pageType       -> product
"""

import math
from dataclasses import dataclass

from seogen.api.schemas.generation import ComplianceChecklist, GenerationRequest

# =============================================================================
# Mapping tables
# =============================================================================

ADDRESS_STYLES: dict[str, str] = {
    "du": (
        "Verwende durchgehend die Du-Form (du, dich, dein). "
        "Sprich den Leser direkt und persönlich an."
    ),
    "sie": (
        "Verwende durchgehend die Sie-Form (Sie, Ihnen, Ihr). "
        "Bleibe höflich und förmlich."
    ),
    "neutral": (
        "Vermeide direkte Anrede. Schreibe neutral und sachlich ohne 'du' oder 'Sie'."
    ),
}
DEFAULT_ADDRESS = "du"

TONE_TO_TONALITY: dict[str, str] = {
    "factual": "Sachlich & Informativ",
    "advisory": "Beratend & Nutzenorientiert",
    "sales": "Aktivierend & Überzeugend",
    # Legacy German values
    "sachlich": "Sachlich & Informativ",
    "beratend": "Beratend & Nutzenorientiert",
    "aktivierend": "Aktivierend & Überzeugend",
}

TONALITY_MIX: dict[str, str] = {
    "expert-mix": "Expertenmix",
    "consultant-mix": "Beratermix",
    "storytelling-mix": "Storytelling-Mix",
    "conversion-mix": "Conversion-Mix",
    "balanced-mix": "Balanced-Mix",
}
DEFAULT_TONALITY = "balanced-mix"

CONTENT_LENGTH_TO_WORDS: dict[str, int] = {
    "short": 400,
    "medium": 800,
    "long": 1200,
}
DEFAULT_WORD_COUNT = 800
MAX_WORD_COUNT = 10_000

DEFAULT_MAX_PARAGRAPH_WORDS = 300

PAGE_TYPES: tuple[str, ...] = ("product", "category", "guide")
DEFAULT_PAGE_TYPE = "product"

EXPERT_AUDIENCES: frozenset[str] = frozenset(
    {"physiotherapists", "physiotherapeuten", "experts", "fachpublikum", "b2b"}
)

PAGE_GOALS: dict[str, str] = {
    "inform": "INFORMIEREN - Wissen vermitteln, Fragen umfassend beantworten",
    "advise": "BERATEN - Entscheidungshilfe geben, Optionen aufzeigen, Empfehlungen",
    "preparePurchase": (
        "KAUF VORBEREITEN - Vertrauen aufbauen, Bedenken ausräumen, Vorteile zeigen"
    ),
    "triggerPurchase": "KAUF AUSLÖSEN - Dringlichkeit erzeugen, CTAs, zum Handeln motivieren",
}

SEARCH_INTENT_GUIDANCE: dict[str, str] = {
    "know": "Know (Informationssuche) → Mehr Erklärungen, Definitionen, How-Tos",
    "do": "Do (Transaktional) → Mehr Anleitungen, Schritte, Aktionen",
    "buy": "Buy (Kaufabsicht) → Mehr Vergleiche, Vorteile, CTAs",
    "go": "Go (Navigation) → Marke prominent, direkte Infos",
}


@dataclass(frozen=True)
class KeywordDensityRange:
    key: str
    min: float
    max: float
    label: str


_DENSITY_MINIMAL = KeywordDensityRange(
    "minimal", 0.003, 0.008, "Minimal (0.3-0.8%) - sehr natürlich"
)
_DENSITY_NORMAL = KeywordDensityRange(
    "normal", 0.005, 0.015, "Normal (0.5-1.5%) - SEO-optimiert"
)
_DENSITY_HIGH = KeywordDensityRange("high", 0.015, 0.025, "Hoch (1.5-2.5%) - aggressiv")

KEYWORD_DENSITY: dict[str, KeywordDensityRange] = {
    "minimal": _DENSITY_MINIMAL,
    "low": _DENSITY_MINIMAL,
    "normal": _DENSITY_NORMAL,
    "medium": _DENSITY_NORMAL,
    "high": _DENSITY_HIGH,
}
DEFAULT_DENSITY = "normal"


@dataclass(frozen=True)
class ResolvedConfig:
    """Typed generation parameters, created once per request."""

    address_form: str
    address_style: str
    tonality_key: str
    tonality_label: str
    target_word_count: int
    keyword_density: KeywordDensityRange
    min_keywords: int
    max_keywords: int
    compliance: ComplianceChecklist
    max_paragraph_words: int
    page_type: str
    expert_audience: bool
    page_goal: str | None
    search_intents: tuple[str, ...]


# =============================================================================
# Field resolvers
# =============================================================================


def _norm(value: object) -> str:
    return value.strip().lower() if isinstance(value, str) else ""


def resolve_address(form_of_address: str | None) -> tuple[str, str]:
    """Return (address key, instruction)."""
    key = _norm(form_of_address)
    if key not in ADDRESS_STYLES:
        key = DEFAULT_ADDRESS
    return key, ADDRESS_STYLES[key]


def resolve_tonality(tone: str | None, tonality: str | None) -> tuple[str, str]:
    """Return (tonality key, label). ``tone`` wins over the ``tonality`` mix id."""
    tone_key = _norm(tone)
    if tone_key in TONE_TO_TONALITY:
        return tone_key, TONE_TO_TONALITY[tone_key]

    mix_key = _norm(tonality)
    if mix_key and not mix_key.endswith("-mix"):
        mix_key = f"{mix_key}-mix"
    if mix_key in TONALITY_MIX:
        return mix_key, TONALITY_MIX[mix_key]

    return DEFAULT_TONALITY, TONALITY_MIX[DEFAULT_TONALITY]


def resolve_word_count(content_length: str | None, word_count: int | str | None = None) -> int:
    """Target word count from contentLength, else a numeric or named wordCount."""
    length_key = _norm(content_length)
    if length_key in CONTENT_LENGTH_TO_WORDS:
        return CONTENT_LENGTH_TO_WORDS[length_key]

    if isinstance(word_count, bool):
        return DEFAULT_WORD_COUNT
    if isinstance(word_count, int):
        return word_count if 0 < word_count <= MAX_WORD_COUNT else DEFAULT_WORD_COUNT

    count_key = _norm(word_count)
    if count_key in CONTENT_LENGTH_TO_WORDS:
        return CONTENT_LENGTH_TO_WORDS[count_key]
    if count_key.isdigit() and 0 < int(count_key) <= MAX_WORD_COUNT:
        return int(count_key)
    return DEFAULT_WORD_COUNT


def resolve_keyword_density(keyword_density: str | None) -> KeywordDensityRange:
    return KEYWORD_DENSITY.get(_norm(keyword_density), KEYWORD_DENSITY[DEFAULT_DENSITY])


def keyword_bounds(word_count: int, density: KeywordDensityRange) -> tuple[int, int]:
    """(minKeywords, maxKeywords) = ceil(words x range)."""
    # round() first so float noise (800 * 0.015 = 12.000000000000002) does not add one
    low = math.ceil(round(word_count * density.min, 6))
    high = math.ceil(round(word_count * density.max, 6))
    return low, high


def resolve_max_paragraph_words(value: int | str | None) -> int:
    if isinstance(value, bool):
        return DEFAULT_MAX_PARAGRAPH_WORDS
    if isinstance(value, int):
        return value if value > 0 else DEFAULT_MAX_PARAGRAPH_WORDS
    text = _norm(value)
    if text.isdigit() and int(text) > 0:
        return int(text)
    return DEFAULT_MAX_PARAGRAPH_WORDS


def resolve_page_type(page_type: str | None) -> str:
    key = _norm(page_type)
    return key if key in PAGE_TYPES else DEFAULT_PAGE_TYPE


def resolve_search_intents(intents: list[str]) -> tuple[str, ...]:
    seen: list[str] = []
    for intent in intents:
        key = _norm(intent)
        if key in SEARCH_INTENT_GUIDANCE and key not in seen:
            seen.append(key)
    return tuple(seen)


# =============================================================================
# Entry point
# =============================================================================


def resolve_config(request: GenerationRequest) -> ResolvedConfig:
    """Resolve every generation parameter for ``request``."""
    address_form, address_style = resolve_address(request.form_of_address)
    tonality_key, tonality_label = resolve_tonality(request.tone, request.tonality)
    target_word_count = resolve_word_count(request.content_length, request.word_count)
    density = resolve_keyword_density(request.keyword_density)
    min_keywords, max_keywords = keyword_bounds(target_word_count, density)

    return ResolvedConfig(
        address_form=address_form,
        address_style=address_style,
        tonality_key=tonality_key,
        tonality_label=tonality_label,
        target_word_count=target_word_count,
        keyword_density=density,
        min_keywords=min_keywords,
        max_keywords=max_keywords,
        compliance=request.compliance,
        max_paragraph_words=resolve_max_paragraph_words(request.max_paragraph_length),
        page_type=resolve_page_type(request.page_type),
        expert_audience=_norm(request.target_audience) in EXPERT_AUDIENCES,
        page_goal=PAGE_GOALS.get((request.page_goal or "").strip()),
        search_intents=resolve_search_intents(request.search_intent),
    )
