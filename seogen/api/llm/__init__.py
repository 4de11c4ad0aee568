"""AI gateway access: client, retry policy, model registry.

Usage:
    from seogen.api.llm import AIGatewayClient, LLMMessage, get_model_config

    client = AIGatewayClient()
    response = await client.chat(
        [LLMMessage.system("..."), LLMMessage.user("...")],
        get_model_config("gemini-flash"),
    )
"""

from .exceptions import (
    LLMError,
    LLMGatewayError,
    LLMPaymentRequiredError,
    LLMRateLimitError,
    LLMResponseFormatError,
)
from .gateway import AIGatewayClient
from .models import MODEL_REGISTRY, ModelConfig, estimate_tokens, get_model_config
from .retry import Classification, FailureKind, RetryDecision, RetryPolicy
from .schemas import LLMMessage, LLMResponse, TokenUsage

__all__ = [
    # Client
    "AIGatewayClient",
    # Models
    "MODEL_REGISTRY",
    "ModelConfig",
    "get_model_config",
    "estimate_tokens",
    # Retry
    "RetryPolicy",
    "RetryDecision",
    "FailureKind",
    "Classification",
    # Schemas
    "LLMMessage",
    "LLMResponse",
    "TokenUsage",
    # Exceptions
    "LLMError",
    "LLMRateLimitError",
    "LLMPaymentRequiredError",
    "LLMGatewayError",
    "LLMResponseFormatError",
]
