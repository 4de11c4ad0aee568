"""Prompt composer.

Selects a prompt strategy by ``promptVersion`` and renders the PromptBundle.
Unknown ids never raise; they resolve to the default strategy.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial

from seogen.api.generation.config_resolver import ResolvedConfig
from seogen.api.schemas.generation import GenerationRequest

from . import strategies
from .user_prompt import build_user_prompt

logger = logging.getLogger(__name__)

SystemTemplate = Callable[[ResolvedConfig, GenerationRequest], str]

DEFAULT_STRATEGY_ID = "v9-master"
LEGACY_STRATEGY_ID = "v1-kompakt-seo"

# Ids used by older clients
_STRATEGY_ALIASES: dict[str, str] = {
    "v9-master-prompt": "v9-master",
    "v8": "v8-natural-seo",
    "v10": "v10-geo-optimized",
}


@dataclass(frozen=True)
class PromptBundle:
    """System and user prompt for one gateway call."""

    system_prompt: str
    user_prompt: str


@dataclass(frozen=True)
class PromptStrategy:
    """A named, swappable system prompt template."""

    id: str
    label: str
    system_template: SystemTemplate

    def __call__(
        self,
        config: ResolvedConfig,
        request: GenerationRequest,
        briefing_text: str | None = None,
    ) -> PromptBundle:
        return PromptBundle(
            system_prompt=self.system_template(config, request),
            user_prompt=build_user_prompt(config, request, briefing_text),
        )


STRATEGY_REGISTRY: dict[str, PromptStrategy] = {
    strategy.id: strategy
    for strategy in (
        PromptStrategy("v1-kompakt-seo", "Kompakt-SEO", strategies.kompakt_seo),
        PromptStrategy("v2-marketing-first", "Marketing-First", strategies.marketing_first),
        PromptStrategy("v6-quality-auditor", "Quality-Auditor", strategies.quality_auditor),
        PromptStrategy("v8-natural-seo", "Natural SEO", strategies.natural_seo),
        PromptStrategy(
            "v8.1-sachlich",
            "Natural SEO (sachlich)",
            partial(strategies.natural_seo, variant="v8.1-sachlich"),
        ),
        PromptStrategy(
            "v8.2-aktivierend",
            "Natural SEO (aktivierend)",
            partial(strategies.natural_seo, variant="v8.2-aktivierend"),
        ),
        PromptStrategy(
            "v8.3-nahbar",
            "Natural SEO (nahbar)",
            partial(strategies.natural_seo, variant="v8.3-nahbar"),
        ),
        PromptStrategy("v9-master", "Master Prompt", strategies.master),
        PromptStrategy("v10-geo-optimized", "GEO-optimiert", strategies.geo_optimized),
    )
}


def resolve_strategy_id(prompt_version: str | None) -> str:
    """Map a requested prompt version onto a registered id."""
    key = (prompt_version or "").strip()
    if not key:
        return DEFAULT_STRATEGY_ID
    key = _STRATEGY_ALIASES.get(key, key)
    if key in STRATEGY_REGISTRY:
        return key
    # Historical pre-release versions were folded into v1
    if key.startswith("v0-"):
        return LEGACY_STRATEGY_ID
    logger.info(f"Unknown prompt version {key!r}, using {DEFAULT_STRATEGY_ID}")
    return DEFAULT_STRATEGY_ID


def get_strategy(prompt_version: str | None) -> PromptStrategy:
    return STRATEGY_REGISTRY[resolve_strategy_id(prompt_version)]


def compose_prompts(
    config: ResolvedConfig,
    request: GenerationRequest,
    briefing_text: str | None = None,
) -> PromptBundle:
    """Render the prompt bundle for the strategy named by ``request.prompt_version``."""
    strategy = get_strategy(request.prompt_version)
    return strategy(config, request, briefing_text)
