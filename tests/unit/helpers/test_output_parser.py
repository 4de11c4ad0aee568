"""Tests for the JSON extraction cascade."""

import json

import pytest

from seogen.helpers.output_parser import OutputParser

SEO_TEXT = "<h1>Kinesio Tape</h1><p>" + "Inhalt " * 30 + "</p>"


@pytest.fixture
def parser() -> OutputParser:
    return OutputParser()


class TestExtractionCascade:
    """Each extractor in precedence order."""

    def test_whole_text_json(self, parser: OutputParser) -> None:
        """Bare JSON is parsed directly."""
        result = parser.extract(json.dumps({"seoText": SEO_TEXT}))
        assert result.success is True
        assert result.strategy == "whole_text"
        assert result.data["seoText"] == SEO_TEXT

    def test_json_fenced_block(self, parser: OutputParser) -> None:
        """```json fences are unwrapped."""
        content = f"Hier ist der Text:\n```json\n{json.dumps({'seoText': SEO_TEXT})}\n```\nFertig."
        result = parser.extract(content)
        assert result.success is True
        assert result.strategy == "fenced_block"
        assert "code_block_removed" in result.fixes_applied

    def test_generic_fenced_block(self, parser: OutputParser) -> None:
        """Bare ``` fences are accepted too."""
        content = f"```\n{json.dumps({'seoText': SEO_TEXT})}\n```"
        result = parser.extract(content)
        assert result.strategy == "fenced_block"
        assert result.data["seoText"] == SEO_TEXT

    def test_fenced_block_preferred_over_stray_braces(self, parser: OutputParser) -> None:
        """A fenced block wins over larger brace matches outside it."""
        outside = json.dumps({"seoText": "<h1>Falsch</h1>" + "x" * 400, "title": "outside"})
        inside = json.dumps({"seoText": SEO_TEXT, "title": "inside"})
        content = f"Entwurf {outside} und final:\n```json\n{inside}\n```\n{{ stray }}"
        result = parser.extract(content)
        assert result.strategy == "fenced_block"
        assert result.data["title"] == "inside"

    def test_brace_scan_picks_largest_with_text_key(self, parser: OutputParser) -> None:
        """Narration around JSON: the largest balanced object carrying seoText wins."""
        payload = json.dumps({"seoText": SEO_TEXT, "faq": [{"question": "a", "answer": "b"}]})
        content = f"Gerne! {{\"note\": 1}} Hier das Ergebnis: {payload} Viel Erfolg."
        result = parser.extract(content)
        assert result.success is True
        assert result.strategy == "brace_scan"
        assert result.data["faq"][0]["question"] == "a"

    def test_brace_scan_accepts_text_key(self, parser: OutputParser) -> None:
        """Objects with ``text`` instead of ``seoText`` are accepted."""
        content = "Antwort: " + json.dumps({"text": SEO_TEXT})
        result = parser.extract(content)
        assert result.data["text"] == SEO_TEXT

    def test_wrapper_key_unwrapped(self, parser: OutputParser) -> None:
        """An object nested under ``content`` is returned unwrapped."""
        content = json.dumps({"content": {"seoText": SEO_TEXT, "title": "T"}})
        result = parser.extract(content)
        assert result.success is True
        assert result.data == {"seoText": SEO_TEXT, "title": "T"}

    def test_wrapper_key_in_narration(self, parser: OutputParser) -> None:
        """Wrapper keys are found even when the outer object is broken."""
        inner = json.dumps({"title": "Nur Titel"})
        content = 'Ergebnis: {"result": ' + inner + ", kaputt"
        result = parser.extract(content)
        assert result.success is True
        assert result.data["title"] == "Nur Titel"

    def test_html_fallback(self, parser: OutputParser) -> None:
        """Long bare HTML with an <h1> becomes seoText."""
        html = "<h1>Kinesio Tape</h1>" + "<p>Absatz mit Text.</p>" * 40
        result = parser.extract(html)
        assert result.success is True
        assert result.strategy == "html_fallback"
        assert result.data == {"seoText": html}

    def test_short_html_is_not_wrapped(self, parser: OutputParser) -> None:
        """HTML at or below 500 characters is not accepted."""
        result = parser.extract("<h1>Kurz</h1><p>zu kurz</p>")
        assert result.success is False

    def test_plain_prose_fails(self, parser: OutputParser) -> None:
        """Prose without JSON or <h1> yields no candidate."""
        result = parser.extract("Leider kann ich diese Anfrage nicht bearbeiten. " * 20)
        assert result.success is False
        assert result.data is None


class TestDeterministicFixes:
    """Trailing comma repair."""

    def test_trailing_commas_removed(self, parser: OutputParser) -> None:
        content = '{"seoText": "abc", "faq": [1, 2,],}'
        result = parser.extract(content)
        assert result.success is True
        assert result.data["faq"] == [1, 2]
        assert "trailing_comma_removed" in result.fixes_applied

    def test_no_fix_needed_returns_none(self, parser: OutputParser) -> None:
        fixed, fixes = parser.apply_deterministic_fixes('{"a": 1}')
        assert fixed is None
        assert fixes == []


class TestTotality:
    """The parser never raises."""

    @pytest.mark.parametrize(
        "content",
        [
            "",
            "   ",
            "{",
            "}{",
            "```json\n{broken\n```",
            '{"seoText": "unterminated',
            "\x00\x01�￾",
            "[1, 2, 3]",
            '"nur ein String"',
            "{" * 500,
        ],
    )
    def test_arbitrary_input(self, parser: OutputParser, content: str) -> None:
        result = parser.extract(content)
        assert result.success in (True, False)

    def test_deep_nesting_is_not_fatal(self, parser: OutputParser) -> None:
        content = "[" * 100_000 + "]" * 100_000
        assert parser.extract(content).success is False
        assert parser.extract_json_object(content) is None

    def test_balanced_spans_ignore_braces_in_strings(self, parser: OutputParser) -> None:
        content = '{"seoText": "a } b { c"}'
        assert (0, len(content) - 1) in parser._balanced_spans(content)


class TestExtractJsonObject:
    """Generic object extraction (keyword analysis)."""

    def test_object_without_text_key(self, parser: OutputParser) -> None:
        content = 'Analyse: {"searchIntent": "buy", "wQuestions": []} Ende'
        assert parser.extract_json_object(content) == {"searchIntent": "buy", "wQuestions": []}

    def test_no_object(self, parser: OutputParser) -> None:
        assert parser.extract_json_object("keine Daten") is None
