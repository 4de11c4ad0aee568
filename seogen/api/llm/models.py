"""Model registry.

Static table of the models the gateway may be asked for, with the per-million
token rates used for informational cost estimates.
"""

import math

from pydantic import BaseModel, ConfigDict, Field

from seogen.api import config

# Characters per token used for estimates (no tokenizer round-trip)
CHARS_PER_TOKEN = 3.5


class ModelConfig(BaseModel):
    """One selectable model."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Public id sent by clients (aiModel)")
    model_name: str = Field(..., description="Model name sent to the gateway")
    provider: str = Field(..., description="Provider behind the gateway")
    label: str = Field(..., description="Human readable name")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    input_cost_per_million: float = Field(..., ge=0, description="USD per 1M input tokens")
    output_cost_per_million: float = Field(..., ge=0, description="USD per 1M output tokens")

    def estimate_cost(self, input_tokens: int, output_tokens: int) -> float:
        """Estimated USD cost for the given token counts."""
        cost = (
            input_tokens / 1_000_000 * self.input_cost_per_million
            + output_tokens / 1_000_000 * self.output_cost_per_million
        )
        return round(cost, 6)


MODEL_REGISTRY: dict[str, ModelConfig] = {
    "gemini-flash": ModelConfig(
        id="gemini-flash",
        model_name="google/gemini-2.5-flash",
        provider="google",
        label="Gemini 2.5 Flash",
        temperature=0.7,
        input_cost_per_million=0.30,
        output_cost_per_million=2.50,
    ),
    "gemini-pro": ModelConfig(
        id="gemini-pro",
        model_name="google/gemini-2.5-pro",
        provider="google",
        label="Gemini 2.5 Pro",
        temperature=0.7,
        input_cost_per_million=1.25,
        output_cost_per_million=10.00,
    ),
    "claude-sonnet": ModelConfig(
        id="claude-sonnet",
        model_name="anthropic/claude-3.5-sonnet",
        provider="anthropic",
        label="Claude 3.5 Sonnet",
        temperature=0.7,
        input_cost_per_million=3.00,
        output_cost_per_million=15.00,
    ),
}

FALLBACK_MODEL_ID = "gemini-flash"


def get_model_config(model_id: str | None, default_id: str | None = None) -> ModelConfig:
    """Look up a model, falling back to the configured default.

    Unknown or empty ids never raise; they resolve to ``default_id``
    (``DEFAULT_AI_MODEL`` when omitted), and an unknown default resolves to
    ``gemini-flash``.
    """
    if model_id and model_id in MODEL_REGISTRY:
        return MODEL_REGISTRY[model_id]
    default_id = default_id or config.DEFAULT_AI_MODEL
    return MODEL_REGISTRY.get(default_id, MODEL_REGISTRY[FALLBACK_MODEL_ID])


def estimate_tokens(text_length: int) -> int:
    """Estimate token count from a character length."""
    if text_length <= 0:
        return 0
    return math.ceil(text_length / CHARS_PER_TOKEN)
