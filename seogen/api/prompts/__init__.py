"""Prompt composition: strategies, shared blocks, user prompt."""

from .blocks import WRITING_STYLES, writing_style_block
from .composer import (
    DEFAULT_STRATEGY_ID,
    STRATEGY_REGISTRY,
    PromptBundle,
    PromptStrategy,
    compose_prompts,
    get_strategy,
    resolve_strategy_id,
)
from .user_prompt import build_user_prompt

__all__ = [
    # Composer
    "PromptBundle",
    "PromptStrategy",
    "STRATEGY_REGISTRY",
    "DEFAULT_STRATEGY_ID",
    "compose_prompts",
    "get_strategy",
    "resolve_strategy_id",
    # Blocks
    "WRITING_STYLES",
    "writing_style_block",
    "build_user_prompt",
]
