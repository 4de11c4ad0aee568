"""Tests for the config resolver."""

import pytest

from seogen.api.generation.config_resolver import (
    ADDRESS_STYLES,
    DEFAULT_MAX_PARAGRAPH_WORDS,
    KEYWORD_DENSITY,
    keyword_bounds,
    resolve_config,
    resolve_tonality,
    resolve_word_count,
)
from seogen.api.schemas.generation import GenerationRequest


def make_request(**fields) -> GenerationRequest:
    return GenerationRequest.model_validate({"focusKeyword": "Kinesio Tape", **fields})


class TestKeywordBounds:
    """Density math."""

    def test_medium_normal(self) -> None:
        """800 words at 0.5-1.5% -> 4..12 keywords."""
        config = resolve_config(make_request(contentLength="medium", keywordDensity="normal"))
        assert config.target_word_count == 800
        assert (config.min_keywords, config.max_keywords) == (4, 12)

    @pytest.mark.parametrize(
        ("words", "density", "expected"),
        [
            (400, "minimal", (2, 4)),
            (1200, "high", (18, 30)),
            (800, "minimal", (3, 7)),
            (333, "normal", (2, 5)),
        ],
    )
    def test_ceil(self, words: int, density: str, expected: tuple[int, int]) -> None:
        assert keyword_bounds(words, KEYWORD_DENSITY[density]) == expected


class TestDefaults:
    """Unrecognized values never raise."""

    def test_empty_request(self) -> None:
        config = resolve_config(make_request())
        assert config.address_form == "du"
        assert config.address_style == ADDRESS_STYLES["du"]
        assert config.tonality_label == "Balanced-Mix"
        assert config.target_word_count == 800
        assert config.keyword_density.key == "normal"
        assert config.max_paragraph_words == DEFAULT_MAX_PARAGRAPH_WORDS
        assert config.page_type == "product"
        assert config.compliance.is_empty

    def test_unknown_values(self) -> None:
        config = resolve_config(
            make_request(
                formOfAddress="ihr",
                tone="poetic",
                contentLength="epic",
                keywordDensity="extreme",
                maxParagraphLength="viele",
                pageType="landing",
            )
        )
        assert config.address_form == "du"
        assert config.tonality_label == "Balanced-Mix"
        assert config.target_word_count == 800
        assert config.keyword_density.key == "normal"
        assert config.max_paragraph_words == DEFAULT_MAX_PARAGRAPH_WORDS
        assert config.page_type == "product"

    def test_config_is_frozen(self) -> None:
        config = resolve_config(make_request())
        with pytest.raises(AttributeError):
            config.target_word_count = 1  # type: ignore[misc]


class TestMappings:
    """Known values map through the fixed tables."""

    @pytest.mark.parametrize("form", ["du", "sie", "neutral", "SIE "])
    def test_address(self, form: str) -> None:
        config = resolve_config(make_request(formOfAddress=form))
        assert config.address_style == ADDRESS_STYLES[form.strip().lower()]

    @pytest.mark.parametrize(
        ("tone", "label"),
        [
            ("factual", "Sachlich & Informativ"),
            ("advisory", "Beratend & Nutzenorientiert"),
            ("sales", "Aktivierend & Überzeugend"),
            ("sachlich", "Sachlich & Informativ"),
        ],
    )
    def test_tone(self, tone: str, label: str) -> None:
        assert resolve_tonality(tone, "expert-mix")[1] == label

    @pytest.mark.parametrize(
        ("tonality", "label"),
        [
            ("expert-mix", "Expertenmix"),
            ("consultant", "Beratermix"),
            ("storytelling-mix", "Storytelling-Mix"),
            ("conversion-mix", "Conversion-Mix"),
            ("balanced-mix", "Balanced-Mix"),
        ],
    )
    def test_tonality_mix(self, tonality: str, label: str) -> None:
        assert resolve_tonality(None, tonality)[1] == label

    @pytest.mark.parametrize(("length", "words"), [("short", 400), ("medium", 800), ("long", 1200)])
    def test_content_length(self, length: str, words: int) -> None:
        assert resolve_word_count(length) == words

    @pytest.mark.parametrize(
        ("word_count", "words"), [(1500, 1500), ("650", 650), ("long", 1200), (0, 800), (True, 800)]
    )
    def test_word_count_fallback(self, word_count, words: int) -> None:
        assert resolve_word_count(None, word_count) == words

    def test_content_length_wins_over_word_count(self) -> None:
        assert resolve_word_count("short", 1500) == 400

    def test_expert_audience(self) -> None:
        assert resolve_config(make_request(targetAudience="physiotherapists")).expert_audience
        assert not resolve_config(make_request(targetAudience="endCustomers")).expert_audience

    def test_search_intents_deduplicated(self) -> None:
        config = resolve_config(make_request(searchIntent=["buy", "know", "buy", "browse"]))
        assert config.search_intents == ("buy", "know")

    def test_page_goal(self) -> None:
        config = resolve_config(make_request(pageGoal="advise"))
        assert config.page_goal is not None and config.page_goal.startswith("BERATEN")


class TestCompliance:
    """Nested and flat flags fold into one checklist."""

    def test_requires_master_flag(self) -> None:
        config = resolve_config(make_request(checkMDR=True, complianceChecks={"hwg": True}))
        assert config.compliance.is_empty

    def test_union_of_nested_and_flat(self) -> None:
        config = resolve_config(
            make_request(complianceCheck=True, checkMDR=True, complianceChecks={"studies": True})
        )
        assert config.compliance.items == ("mdr", "studies")
        assert config.compliance.labels == ["MDR/MPDG", "Studien-Validierung"]
