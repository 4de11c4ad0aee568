"""Gateway request/response types.

Chat messages, token usage estimates and the normalized gateway response.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class TokenUsage(BaseModel):
    """Estimated token usage."""

    model_config = ConfigDict(frozen=True)

    input: int = Field(..., ge=0, description="Input tokens")
    output: int = Field(..., ge=0, description="Output tokens")

    @property
    def total(self) -> int:
        return self.input + self.output


class LLMMessage(BaseModel):
    """One chat message."""

    model_config = ConfigDict(frozen=True)

    role: str = Field(..., pattern="^(system|user|assistant)$", description="Message role")
    content: str = Field(..., description="Message text")

    @classmethod
    def system(cls, content: str) -> "LLMMessage":
        return cls(role="system", content=content)

    @classmethod
    def user(cls, content: str) -> "LLMMessage":
        return cls(role="user", content=content)


class LLMResponse(BaseModel):
    """Normalized gateway response."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(..., description="Raw model text (choices[0].message.content)")
    model: str = Field(..., description="Underlying model name sent to the gateway")
    provider: str = Field(..., description="Provider behind the model")
    token_usage: TokenUsage = Field(..., description="Estimated token usage")
    cost_usd: float = Field(default=0.0, ge=0, description="Estimated cost in USD")
    attempts: int = Field(default=1, ge=1, description="Attempts needed for this response")
    finish_reason: str | None = Field(default=None, description="stop, length, content_filter, ...")
    latency_ms: float | None = Field(default=None, ge=0, description="Wall time incl. retries")
    created_at: datetime = Field(default_factory=datetime.now)
