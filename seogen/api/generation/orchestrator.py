"""Request orchestrator.

Routes a validated GenerationRequest to one of four modes and drives the
request lifecycle:

    validated -> mode:* -> dispatched-to-gateway -> parsed -> responded

Mode precedence: analyze-keyword, then quickChange, then refinementPrompt,
then fresh generation. A quick change with no effective delta responds with
``existingContent`` unchanged and never calls the gateway.
"""

import logging
from collections.abc import Sequence
from typing import Any

from seogen.api.core.errors import PipelineError
from seogen.api.core.state import RequestState, RequestTrace
from seogen.api.llm import AIGatewayClient, LLMError, LLMMessage, LLMResponse, ModelConfig
from seogen.api.llm.models import get_model_config
from seogen.api.observability.logger import get_logger, set_context
from seogen.api.prompts import compose_prompts, writing_style_block
from seogen.api.prompts.blocks import join_blocks
from seogen.api.schemas.generation import GenerationRequest
from seogen.api.schemas.keyword_analysis import KeywordAnalysisResponse
from seogen.helpers.content_validator import ContentValidator, ParseContext

from .briefing import BriefingAggregator
from .config_resolver import ResolvedConfig, resolve_config
from .keyword_analysis import build_analysis_messages, parse_keyword_analysis
from .refinement import RefinementContext, build_quick_change_context, build_refine_context

logger = logging.getLogger(__name__)
structured_logger = get_logger(__name__)


def select_mode(request: GenerationRequest) -> RequestState:
    """Pick the mode state for ``request``."""
    if request.mode == "analyze-keyword":
        return RequestState.MODE_KEYWORD_ANALYSIS
    if request.is_quick_change:
        return RequestState.MODE_QUICK_CHANGE
    if request.is_refinement:
        return RequestState.MODE_REFINE
    return RequestState.MODE_FRESH_GENERATE


class GenerationOrchestrator:
    """Top-level entry point for a validated request."""

    def __init__(
        self,
        gateway: AIGatewayClient,
        briefing_aggregator: BriefingAggregator | None = None,
        validator: ContentValidator | None = None,
    ):
        self.gateway = gateway
        self.briefing_aggregator = briefing_aggregator
        self.validator = validator or ContentValidator()

    async def run(self, request: GenerationRequest, trace: RequestTrace) -> dict[str, Any]:
        """Execute ``request`` and return the JSON response body.

        Raises:
            PipelineError: Upstream rate limit, payment or gateway failures
        """
        mode = select_mode(request)
        self._advance(trace, mode)
        set_context(mode=mode.value)
        model = get_model_config(request.ai_model)

        if mode == RequestState.MODE_KEYWORD_ANALYSIS:
            return await self._analyze_keyword(request, model, trace)

        config = resolve_config(request)
        if mode == RequestState.MODE_QUICK_CHANGE:
            return await self._quick_change(request, config, model, trace)
        if mode == RequestState.MODE_REFINE:
            return await self._refine(build_refine_context(request), request, config, model, trace)
        return await self._fresh_generate(request, config, model, trace)

    # ------------------------------------------------------------------
    # Modes
    # ------------------------------------------------------------------

    async def _analyze_keyword(
        self,
        request: GenerationRequest,
        model: ModelConfig,
        trace: RequestTrace,
    ) -> dict[str, Any]:
        messages = build_analysis_messages(request)
        response = await self._dispatch(messages, model, trace, purpose="analyze-keyword")
        analysis = parse_keyword_analysis(response.content, self.validator.parser)
        self._advance(trace, RequestState.PARSED)
        logger.info(
            "Keyword analysis completed: secondary=%d, questions=%d, intent=%s",
            len(analysis.secondary_keywords),
            len(analysis.w_questions),
            analysis.search_intent,
        )
        self._advance(trace, RequestState.RESPONDED)
        return KeywordAnalysisResponse(
            focus_keyword=request.focus_keyword, analysis=analysis
        ).to_wire()

    async def _quick_change(
        self,
        request: GenerationRequest,
        config: ResolvedConfig,
        model: ModelConfig,
        trace: RequestTrace,
    ) -> dict[str, Any]:
        context = build_quick_change_context(request, config)
        if context is None:
            logger.info("Quick change without effective delta, returning existing content")
            self._advance(trace, RequestState.RESPONDED)
            return request.existing_content or {}
        logger.info(
            "Quick change fields: %s", [delta.field for delta in context.instruction.deltas]
        )
        return await self._refine(context, request, config, model, trace)

    async def _refine(
        self,
        context: RefinementContext,
        request: GenerationRequest,
        config: ResolvedConfig,
        model: ModelConfig,
        trace: RequestTrace,
    ) -> dict[str, Any]:
        response = await self._dispatch(
            context.to_messages(config), model, trace, purpose=context.instruction.kind
        )
        return self._parse_and_respond(response, request, config, trace)

    async def _fresh_generate(
        self,
        request: GenerationRequest,
        config: ResolvedConfig,
        model: ModelConfig,
        trace: RequestTrace,
    ) -> dict[str, Any]:
        briefing_text = None
        if request.briefing_files and self.briefing_aggregator is not None:
            try:
                briefing_text = await self.briefing_aggregator.aggregate(
                    request.briefing_files, model
                )
            except LLMError as e:
                raise e.to_pipeline_error() from e

        bundle = compose_prompts(config, request, briefing_text)
        messages = [
            LLMMessage.system(bundle.system_prompt),
            LLMMessage.user(join_blocks(writing_style_block(config), bundle.user_prompt)),
        ]
        response = await self._dispatch(messages, model, trace, purpose="generate")
        return self._parse_and_respond(response, request, config, trace)

    # ------------------------------------------------------------------
    # Shared steps
    # ------------------------------------------------------------------

    async def _dispatch(
        self,
        messages: Sequence[LLMMessage],
        model: ModelConfig,
        trace: RequestTrace,
        purpose: str,
    ) -> LLMResponse:
        self._advance(trace, RequestState.DISPATCHED_TO_GATEWAY)
        try:
            return await self.gateway.chat(messages, model, purpose=purpose)
        except LLMError as e:
            error: PipelineError = e.to_pipeline_error()
            logger.error(f"Gateway call failed ({purpose}): {e.message}")
            raise error from e

    def _parse_and_respond(
        self,
        response: LLMResponse,
        request: GenerationRequest,
        config: ResolvedConfig,
        trace: RequestTrace,
    ) -> dict[str, Any]:
        context = ParseContext(
            main_topic=request.topic,
            focus_keyword=request.focus_keyword,
            page_type=config.page_type,
        )
        content = self.validator.parse(response.content, context)
        self._advance(trace, RequestState.PARSED)
        if content.is_error:
            logger.warning("Model output degraded to error-flagged content")
        self._advance(trace, RequestState.RESPONDED)
        return content.to_wire()

    @staticmethod
    def _advance(trace: RequestTrace, target: RequestState) -> None:
        previous = trace.current
        trace.advance(target)
        structured_logger.state_changed(previous.value, target.value, request_id=trace.request_id)
