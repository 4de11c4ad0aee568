"""Gateway exceptions.

These stay independent of the HTTP layer; ``to_pipeline_error`` maps them onto
the request-level taxonomy in ``seogen.api.core.errors``.
"""

from seogen.api.core.errors import (
    ErrorCategory,
    PipelineError,
    UpstreamGatewayError,
    UpstreamPaymentRequired,
    UpstreamRateLimited,
)


class LLMError(Exception):
    """Base class for AI gateway call failures."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory,
        provider: str,
        model: str | None = None,
        status_code: int | None = None,
        original_error: Exception | None = None,
        attempt: int = 1,
    ) -> None:
        """Initialize.

        Args:
            message: Error message
            category: RETRYABLE / NON_RETRYABLE / VALIDATION_FAIL
            provider: Provider name
            model: Model sent to the gateway
            status_code: Upstream HTTP status, if any
            original_error: Underlying exception
            attempt: Attempt that produced the error
        """
        super().__init__(message)
        self.message = message
        self.category = category
        self.provider = provider
        self.model = model
        self.status_code = status_code
        self.original_error = original_error
        self.attempt = attempt

    def is_retryable(self) -> bool:
        return self.category == ErrorCategory.RETRYABLE

    def to_pipeline_error(self) -> PipelineError:
        return UpstreamGatewayError(self.message)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, category={self.category.value}, "
            f"model={self.model!r}, status_code={self.status_code}, attempt={self.attempt})"
        )


class LLMRateLimitError(LLMError):
    """Gateway answered 429. Never retried."""

    def __init__(self, provider: str, model: str | None = None, attempt: int = 1) -> None:
        super().__init__(
            message=UpstreamRateLimited.default_message,
            category=ErrorCategory.NON_RETRYABLE,
            provider=provider,
            model=model,
            status_code=429,
            attempt=attempt,
        )

    def to_pipeline_error(self) -> PipelineError:
        return UpstreamRateLimited(self.message)


class LLMPaymentRequiredError(LLMError):
    """Gateway answered 402. Never retried."""

    def __init__(self, provider: str, model: str | None = None, attempt: int = 1) -> None:
        super().__init__(
            message=UpstreamPaymentRequired.default_message,
            category=ErrorCategory.NON_RETRYABLE,
            provider=provider,
            model=model,
            status_code=402,
            attempt=attempt,
        )

    def to_pipeline_error(self) -> PipelineError:
        return UpstreamPaymentRequired(self.message)


class LLMGatewayError(LLMError):
    """Any other gateway failure (5xx after retries, other non-2xx, network)."""


class LLMResponseFormatError(LLMError):
    """Gateway returned 2xx but without ``choices[0].message.content``."""

    def __init__(
        self,
        message: str,
        provider: str,
        model: str | None = None,
        original_error: Exception | None = None,
        attempt: int = 1,
    ) -> None:
        super().__init__(
            message=message,
            category=ErrorCategory.VALIDATION_FAIL,
            provider=provider,
            model=model,
            original_error=original_error,
            attempt=attempt,
        )
