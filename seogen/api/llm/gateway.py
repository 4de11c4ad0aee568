"""AI gateway client.

The only component that performs outbound network I/O to the AI provider.
Sends ``{model, messages, temperature}`` to an OpenAI-compatible
chat-completions endpoint and applies the RetryPolicy:

- 429 / 402: raised immediately, no retry
- 5xx and network errors: retried with exponential backoff
- any other non-2xx: raised immediately
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

import httpx

from seogen.api import config
from seogen.api.core.errors import ConfigurationError, ErrorCategory
from seogen.api.observability.logger import get_logger

from .exceptions import (
    LLMError,
    LLMGatewayError,
    LLMPaymentRequiredError,
    LLMRateLimitError,
    LLMResponseFormatError,
)
from .models import ModelConfig, estimate_tokens
from .retry import NETWORK_FAILURE, Classification, FailureKind, RetryDecision, RetryPolicy
from .schemas import LLMMessage, LLMResponse, TokenUsage

logger = logging.getLogger(__name__)
structured_logger = get_logger(__name__)

SleepFunc = Callable[[float], Awaitable[Any]]


class AIGatewayClient:
    """Chat-completion client for the hosted AI gateway."""

    def __init__(
        self,
        api_key: str | None = None,
        url: str | None = None,
        timeout: float | None = None,
        retry_policy: RetryPolicy | None = None,
        sleep: SleepFunc | None = None,
    ) -> None:
        """Initialize.

        Args:
            api_key: Bearer credential (defaults to AI_GATEWAY_API_KEY)
            url: Chat-completions endpoint (defaults to AI_GATEWAY_URL)
            timeout: Per-attempt timeout in seconds
            retry_policy: Attempt budget and backoff
            sleep: Awaitable used between attempts (asyncio.sleep)
        """
        self.api_key = api_key if api_key is not None else config.AI_GATEWAY_API_KEY
        self.url = url or config.AI_GATEWAY_URL
        self.timeout = timeout if timeout is not None else config.AI_GATEWAY_TIMEOUT
        self.retry_policy = retry_policy or RetryPolicy()
        self._sleep = sleep or asyncio.sleep

    async def chat(
        self,
        messages: Sequence[LLMMessage],
        model: ModelConfig,
        purpose: str = "generate",
    ) -> LLMResponse:
        """Send one chat-completion request.

        Args:
            messages: System/user messages in order
            model: Selected model (name, temperature, rates)
            purpose: Label used in logs (generate, refine, briefing, ...)

        Returns:
            LLMResponse with the raw text of ``choices[0].message.content``

        Raises:
            ConfigurationError: No gateway credential configured
            LLMRateLimitError: Gateway answered 429
            LLMPaymentRequiredError: Gateway answered 402
            LLMGatewayError: Other non-2xx, or retries exhausted
            LLMResponseFormatError: 2xx without usable choices
        """
        if not self.api_key:
            raise ConfigurationError("AI gateway API key is not configured")

        payload = {
            "model": model.model_name,
            "messages": [message.model_dump() for message in messages],
            "temperature": model.temperature,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        tokens_in = estimate_tokens(sum(len(message.content) for message in messages))
        structured_logger.llm_request(model.provider, model.model_name, tokens_in, purpose=purpose)

        policy = self.retry_policy
        started = time.monotonic()
        last_error: LLMError | None = None

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            for attempt in range(1, policy.max_attempts + 1):
                try:
                    response = await client.post(self.url, json=payload, headers=headers)
                except httpx.HTTPError as e:
                    logger.warning(
                        "AI gateway network error: model=%s, attempt=%d/%d, error=%s",
                        model.model_name,
                        attempt,
                        policy.max_attempts,
                        str(e),
                    )
                    last_error = LLMGatewayError(
                        message=f"AI Gateway network error: {e}",
                        category=ErrorCategory.RETRYABLE,
                        provider=model.provider,
                        model=model.model_name,
                        original_error=e,
                        attempt=attempt,
                    )
                    classification = NETWORK_FAILURE
                else:
                    classification = policy.classify(response.status_code)
                    if classification.decision == RetryDecision.SUCCESS:
                        return self._build_response(
                            response, model, tokens_in, attempt, started
                        )
                    if classification.decision == RetryDecision.FAIL_FAST:
                        raise self._terminal_error(classification, response, model, attempt)

                    logger.warning(
                        "AI gateway server error: model=%s, attempt=%d/%d, status=%d",
                        model.model_name,
                        attempt,
                        policy.max_attempts,
                        response.status_code,
                    )
                    last_error = LLMGatewayError(
                        message=f"AI Gateway error: {response.status_code}",
                        category=ErrorCategory.RETRYABLE,
                        provider=model.provider,
                        model=model.model_name,
                        status_code=response.status_code,
                        attempt=attempt,
                    )

                if classification.decision == RetryDecision.RETRY and policy.has_attempts_left(
                    attempt
                ):
                    await self._sleep(policy.delay_for(attempt))

        message = f"AI Gateway failed after {policy.max_attempts} attempts"
        if last_error is not None and last_error.status_code is not None:
            message = (
                f"AI Gateway error: {last_error.status_code} "
                f"after {policy.max_attempts} attempts"
            )
        logger.error("%s: model=%s", message, model.model_name)
        raise LLMGatewayError(
            message=message,
            category=ErrorCategory.RETRYABLE,
            provider=model.provider,
            model=model.model_name,
            status_code=last_error.status_code if last_error else None,
            original_error=last_error,
            attempt=policy.max_attempts,
        )

    def _terminal_error(
        self,
        classification: Classification,
        response: httpx.Response,
        model: ModelConfig,
        attempt: int,
    ) -> LLMError:
        logger.error(
            "AI gateway error: status=%d, model=%s, body=%s",
            response.status_code,
            model.model_name,
            response.text[:500],
        )
        if classification.kind == FailureKind.RATE_LIMITED:
            return LLMRateLimitError(model.provider, model.model_name, attempt)
        if classification.kind == FailureKind.PAYMENT_REQUIRED:
            return LLMPaymentRequiredError(model.provider, model.model_name, attempt)
        return LLMGatewayError(
            message=f"AI Gateway error: {response.status_code}",
            category=ErrorCategory.NON_RETRYABLE,
            provider=model.provider,
            model=model.model_name,
            status_code=response.status_code,
            attempt=attempt,
        )

    def _build_response(
        self,
        response: httpx.Response,
        model: ModelConfig,
        tokens_in: int,
        attempt: int,
        started: float,
    ) -> LLMResponse:
        try:
            data = response.json()
            choice = data["choices"][0]
            content = choice["message"]["content"] or ""
            if not isinstance(content, str):
                raise TypeError(f"content is {type(content).__name__}, expected str")
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise LLMResponseFormatError(
                message="AI Gateway returned an unexpected response shape",
                provider=model.provider,
                model=model.model_name,
                original_error=e,
                attempt=attempt,
            ) from e

        tokens_out = estimate_tokens(len(content))
        cost = model.estimate_cost(tokens_in, tokens_out)
        latency_ms = (time.monotonic() - started) * 1000

        structured_logger.llm_response(
            model.provider,
            model.model_name,
            tokens_out=tokens_out,
            latency_ms=int(latency_ms),
            cost_usd=cost,
            attempts=attempt,
        )

        return LLMResponse(
            content=content,
            model=model.model_name,
            provider=model.provider,
            token_usage=TokenUsage(input=tokens_in, output=tokens_out),
            cost_usd=cost,
            attempts=attempt,
            finish_reason=choice.get("finish_reason") if isinstance(choice, dict) else None,
            latency_ms=latency_ms,
        )
