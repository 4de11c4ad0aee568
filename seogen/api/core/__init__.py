"""Core types: error taxonomy and request lifecycle."""

from .errors import (
    AuthenticationError,
    ConfigurationError,
    ErrorCategory,
    PipelineError,
    RequestValidationError,
    UpstreamGatewayError,
    UpstreamPaymentRequired,
    UpstreamRateLimited,
)
from .state import (
    ERROR_STATES,
    MODE_STATES,
    InvalidTransitionError,
    RequestState,
    RequestTrace,
    can_transition,
)

__all__ = [
    # Errors
    "ErrorCategory",
    "PipelineError",
    "AuthenticationError",
    "RequestValidationError",
    "UpstreamRateLimited",
    "UpstreamPaymentRequired",
    "UpstreamGatewayError",
    "ConfigurationError",
    # State
    "RequestState",
    "RequestTrace",
    "InvalidTransitionError",
    "can_transition",
    "ERROR_STATES",
    "MODE_STATES",
]
