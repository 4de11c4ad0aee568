"""Keyword analysis output schema."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SearchIntent = Literal["know", "do", "buy", "go"]
SEARCH_INTENTS: tuple[str, ...] = ("know", "do", "buy", "go")


class KeywordAnalysis(BaseModel):
    """Suggestions for a focus keyword."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    secondary_keywords: list[str] = Field(default_factory=list)
    w_questions: list[str] = Field(default_factory=list)
    search_intent: SearchIntent = "know"
    suggested_topics: list[str] = Field(default_factory=list)


class KeywordAnalysisResponse(BaseModel):
    """``{success, focusKeyword, analysis}`` envelope."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    focus_keyword: str
    analysis: KeywordAnalysis

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)
