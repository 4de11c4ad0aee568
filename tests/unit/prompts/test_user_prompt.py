"""Tests for user prompt assembly and writing-style blocks."""

from seogen.api.generation.config_resolver import resolve_config
from seogen.api.prompts import WRITING_STYLES, build_user_prompt, writing_style_block
from seogen.api.prompts.user_prompt import MANUFACTURER_INFO_MAX_CHARS
from seogen.api.schemas.generation import GenerationRequest


def render(briefing_text: str | None = None, **fields) -> str:
    request = GenerationRequest.model_validate({"focusKeyword": "Kinesio Tape", **fields})
    return build_user_prompt(resolve_config(request), request, briefing_text)


class TestBuildUserPrompt:
    """Sections appear only when their input is present."""

    def test_minimal(self) -> None:
        prompt = render()
        assert prompt.startswith("# AUFTRAG")
        assert "**Seitentyp**: PRODUKTSEITE" in prompt
        assert "**Hauptthema**: Kinesio Tape" in prompt
        assert "**Textlänge**: ca. 800 Wörter" in prompt
        for heading in ("HERSTELLERINFORMATIONEN", "SUCHINTENTION", "BRIEFING", "SERP-KONTEXT"):
            assert heading not in prompt

    def test_full_request(self) -> None:
        prompt = render(
            briefing_text="Kurzfassung",
            brandName="K-Active",
            mainTopic="Kinesiologisches Tapen",
            secondaryKeywords=["Tape Anleitung", "  ", "Physio Tape"],
            manufacturerName="Nitto",
            additionalInfo="Latexfrei",
            searchIntent=["buy", "know"],
            wQuestions=["Wie lange hält Kinesio Tape?"],
            faqInputs="Ist es wasserfest?\n\nKann man damit duschen?",
            serpContext="Top 3 sind Ratgeber",
            pageGoal="advise",
            addExamples=True,
        )
        assert "**Marke**: K-Active" in prompt
        assert "**Hauptthema**: Kinesiologisches Tapen" in prompt
        assert "**Sekundär-Keywords (LSI)**: Tape Anleitung, Physio Tape" in prompt
        assert "**Seitenziel**: BERATEN" in prompt
        assert "**Hersteller**: Nitto" in prompt
        assert "# ZUSÄTZLICHE INFORMATIONEN / USPs\nLatexfrei" in prompt
        assert "- Buy (Kaufabsicht)" in prompt
        assert prompt.index("Buy (Kaufabsicht)") < prompt.index("Know (Informationssuche)")
        assert "- Wie lange hält Kinesio Tape?" in prompt
        assert "- Ist es wasserfest?\n- Kann man damit duschen?" in prompt
        assert "# BRIEFING (aus hochgeladenen Dokumenten)\nKurzfassung" in prompt
        assert "# PRAXISBEISPIELE" in prompt

    def test_faq_disabled(self) -> None:
        prompt = render(includeFAQ=False, faqInputs="Frage?")
        assert "Keinen FAQ-Bereich erstellen" in prompt
        assert "PFLICHT-FAQ" not in prompt

    def test_manufacturer_info_truncated(self) -> None:
        prompt = render(manufacturerInfo="x" * (MANUFACTURER_INFO_MAX_CHARS + 100))
        assert "x" * MANUFACTURER_INFO_MAX_CHARS in prompt
        assert "x" * (MANUFACTURER_INFO_MAX_CHARS + 1) not in prompt


class TestWritingStyleBlock:
    """Tonality selects the writing-style block."""

    def test_default(self) -> None:
        request = GenerationRequest.model_validate({"focusKeyword": "x"})
        assert writing_style_block(resolve_config(request)) == WRITING_STYLES["balanced-mix"]

    def test_legacy_tone(self) -> None:
        request = GenerationRequest.model_validate({"focusKeyword": "x", "tone": "beratend"})
        assert writing_style_block(resolve_config(request)) == WRITING_STYLES["advisory"]

    def test_tonality_mix(self) -> None:
        request = GenerationRequest.model_validate(
            {"focusKeyword": "x", "tonality": "storytelling-mix"}
        )
        assert "STORYTELLING-MIX" in writing_style_block(resolve_config(request))
