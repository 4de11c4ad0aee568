"""Error taxonomy for the generation pipeline.

ErrorCategory determines retry behavior:
- RETRYABLE: Temporary upstream failures, retried inside the gateway client
- NON_RETRYABLE: Permanent failures, surfaced to the caller immediately
- VALIDATION_FAIL: Request did not satisfy the input schema

Every PipelineError knows the HTTP status and terminal request state it maps to,
so the HTTP layer never has to branch on exception types.
"""

from enum import Enum
from typing import Any

from seogen.api.core.state import RequestState


class ErrorCategory(str, Enum):
    """Classification of pipeline errors for retry decisions."""

    RETRYABLE = "retryable"
    NON_RETRYABLE = "non_retryable"
    VALIDATION_FAIL = "validation_fail"


class PipelineError(Exception):
    """Base class for errors that terminate a generation request."""

    status_code: int = 500
    error_state: RequestState = RequestState.INTERNAL_ERROR
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: str | None = None,
        category: ErrorCategory = ErrorCategory.NON_RETRYABLE,
    ) -> None:
        self.message = message or self.default_message
        self.category = category
        super().__init__(self.message)

    def is_retryable(self) -> bool:
        """Check if this error allows retry."""
        return self.category == ErrorCategory.RETRYABLE

    def to_body(self) -> dict[str, Any]:
        """Render the JSON error body returned to the caller."""
        return {"error": self.message}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, status_code={self.status_code})"


class AuthenticationError(PipelineError):
    """Missing or invalid bearer token."""

    status_code = 401
    error_state = RequestState.REJECTED_UNAUTHENTICATED
    default_message = "Authentication required"

    def __init__(self, message: str | None = None, reason: str = "unknown") -> None:
        super().__init__(message)
        self.reason = reason


class RequestValidationError(PipelineError):
    """Request body failed schema constraints."""

    status_code = 400
    error_state = RequestState.REJECTED_INVALID_INPUT
    default_message = "Invalid input"

    def __init__(
        self,
        details: dict[str, list[str]],
        message: str | None = None,
    ) -> None:
        super().__init__(message, ErrorCategory.VALIDATION_FAIL)
        self.details = details

    def to_body(self) -> dict[str, Any]:
        return {"error": self.message, "details": self.details}


class UpstreamRateLimited(PipelineError):
    """AI gateway answered 429."""

    status_code = 429
    error_state = RequestState.GATEWAY_RATE_LIMITED
    default_message = "Rate limit exceeded. Please try again later."


class UpstreamPaymentRequired(PipelineError):
    """AI gateway answered 402 (credits exhausted)."""

    status_code = 402
    error_state = RequestState.GATEWAY_PAYMENT_REQUIRED
    default_message = "Payment required. Please add funds to your AI workspace."


class UpstreamGatewayError(PipelineError):
    """AI gateway failed permanently or exhausted the retry budget."""

    status_code = 500
    error_state = RequestState.GATEWAY_FAILED
    default_message = "AI Gateway error"


class ConfigurationError(PipelineError):
    """Process configuration is incomplete (e.g. missing gateway credential)."""

    status_code = 500
    error_state = RequestState.INTERNAL_ERROR
    default_message = "Service is not configured"
