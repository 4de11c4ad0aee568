"""Tests for keyword analysis prompt and parsing."""

import json

import pytest

from seogen.api.generation.keyword_analysis import (
    SYSTEM_PROMPT,
    build_analysis_messages,
    parse_keyword_analysis,
)
from seogen.api.schemas.generation import GenerationRequest


class TestBuildMessages:
    """Prompt rendering."""

    def test_consumer_audience(self) -> None:
        request = GenerationRequest.model_validate(
            {"mode": "analyze-keyword", "focusKeyword": "Kinesio Tape"}
        )
        system, user = build_analysis_messages(request)
        assert system.content == SYSTEM_PROMPT
        assert 'FOKUS-KEYWORD: "Kinesio Tape"' in user.content
        assert "B2C-Zielgruppe" in user.content
        assert "SPRACHE: Deutsch" in user.content

    def test_expert_audience_english(self) -> None:
        request = GenerationRequest.model_validate(
            {
                "mode": "analyze-keyword",
                "focusKeyword": "Kinesio Tape",
                "targetAudience": "physiotherapists",
                "language": "en",
            }
        )
        _, user = build_analysis_messages(request)
        assert "B2B-Zielgruppe" in user.content
        assert "SPRACHE: Englisch" in user.content


class TestParseKeywordAnalysis:
    """Defensive parsing of the model answer."""

    def test_invalid_intent_defaults_to_know(self) -> None:
        """searchIntent "purchase" is not one of the four intents."""
        content = json.dumps(
            {"secondaryKeywords": ["a"], "wQuestions": ["b?"], "searchIntent": "purchase"}
        )
        analysis = parse_keyword_analysis(content)
        assert analysis.search_intent == "know"
        assert analysis.secondary_keywords == ["a"]
        assert analysis.w_questions == ["b?"]
        assert analysis.suggested_topics == []

    def test_narrated_json(self) -> None:
        content = (
            "Hier die Analyse:\n```json\n"
            + json.dumps(
                {
                    "secondaryKeywords": ["Tape Anleitung", " ", 3],
                    "wQuestions": ["Wie klebt man Kinesio Tape?"],
                    "searchIntent": "buy",
                    "suggestedTopics": ["Anwendung", "Wirkung"],
                }
            )
            + "\n```"
        )
        analysis = parse_keyword_analysis(content)
        assert analysis.search_intent == "buy"
        assert analysis.secondary_keywords == ["Tape Anleitung"]
        assert analysis.suggested_topics == ["Anwendung", "Wirkung"]

    @pytest.mark.parametrize("content", ["", "keine Daten", "[1, 2]", '{"searchIntent": 4}'])
    def test_never_raises(self, content: str) -> None:
        analysis = parse_keyword_analysis(content)
        assert analysis.search_intent == "know"

    @pytest.mark.parametrize(
        "content",
        ["[" * 100_000 + "]" * 100_000, '{"a": ' * 5_000 + "1" + "}" * 5_000],
    )
    def test_deeply_nested_output_uses_defaults(self, content: str) -> None:
        analysis = parse_keyword_analysis(content)
        assert analysis.search_intent == "know"
        assert analysis.secondary_keywords == []

    def test_wire_shape(self) -> None:
        analysis = parse_keyword_analysis(json.dumps({"searchIntent": "go"}))
        assert analysis.model_dump(by_alias=True) == {
            "secondaryKeywords": [],
            "wQuestions": [],
            "searchIntent": "go",
            "suggestedTopics": [],
        }
