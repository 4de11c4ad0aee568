"""Tests for the model registry."""

import pytest

from seogen.api.llm import MODEL_REGISTRY, estimate_tokens, get_model_config


class TestGetModelConfig:
    """Lookup with fallbacks."""

    @pytest.mark.parametrize("model_id", sorted(MODEL_REGISTRY))
    def test_known(self, model_id: str) -> None:
        assert get_model_config(model_id).id == model_id

    @pytest.mark.parametrize("model_id", [None, "", "gpt-17"])
    def test_unknown_uses_default(self, model_id) -> None:
        assert get_model_config(model_id, default_id="gemini-pro").id == "gemini-pro"

    def test_unknown_default_uses_flash(self) -> None:
        assert get_model_config("gpt-17", default_id="nope").id == "gemini-flash"

    def test_claude_sonnet_not_replaced_by_default(self) -> None:
        model = get_model_config("claude-sonnet", default_id="gemini-flash")
        assert model.model_name == "anthropic/claude-3.5-sonnet"
        assert model.provider == "anthropic"
        assert model.estimate_cost(1_000_000, 1_000_000) == pytest.approx(18.00)


class TestCost:
    """Informational cost estimates."""

    def test_estimate_cost(self) -> None:
        model = get_model_config("gemini-flash")
        assert model.estimate_cost(1_000_000, 1_000_000) == pytest.approx(2.80)
        assert model.estimate_cost(0, 0) == 0.0

    @pytest.mark.parametrize(("length", "tokens"), [(0, 0), (-1, 0), (7, 2), (8, 3)])
    def test_estimate_tokens(self, length: int, tokens: int) -> None:
        assert estimate_tokens(length) == tokens
