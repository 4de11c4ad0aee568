"""Retry policy for gateway calls.

The policy is a plain value object: attempt budget, backoff function and a
status-code classification table. It does no I/O, so it is tested on its own.
"""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field

from seogen.api import config


class RetryDecision(str, Enum):
    """What the client does with an HTTP outcome."""

    SUCCESS = "success"
    RETRY = "retry"
    FAIL_FAST = "fail_fast"


class FailureKind(str, Enum):
    """Caller-visible failure kinds."""

    RATE_LIMITED = "rate_limited"
    PAYMENT_REQUIRED = "payment_required"
    GATEWAY = "gateway"


@dataclass(frozen=True)
class Classification:
    decision: RetryDecision
    kind: FailureKind | None = None


STATUS_CLASSIFICATION: dict[int, Classification] = {
    429: Classification(RetryDecision.FAIL_FAST, FailureKind.RATE_LIMITED),
    402: Classification(RetryDecision.FAIL_FAST, FailureKind.PAYMENT_REQUIRED),
}

# Network-level failures are retried like 5xx
NETWORK_FAILURE = Classification(RetryDecision.RETRY, FailureKind.GATEWAY)


class RetryPolicy(BaseModel):
    """Attempt budget and exponential backoff."""

    max_attempts: int = Field(
        default_factory=lambda: config.LLM_MAX_ATTEMPTS,
        ge=1,
        le=10,
        description="Total attempts including the first call",
    )
    base_delay: float = Field(
        default_factory=lambda: config.LLM_BACKOFF_BASE,
        ge=0.0,
        le=60.0,
        description="Delay after the first failed attempt (seconds)",
    )
    exponential_base: float = Field(
        default_factory=lambda: config.LLM_BACKOFF_MULTIPLIER,
        ge=1.0,
        le=10.0,
        description="Backoff multiplier per attempt",
    )
    max_delay: float = Field(default=30.0, ge=0.0, le=300.0)

    def delay_for(self, attempt: int) -> float:
        """Backoff before the attempt following ``attempt`` (1-based): 2s, 4s, 8s..."""
        delay = self.base_delay * self.exponential_base ** (attempt - 1)
        return min(delay, self.max_delay)

    def classify(self, status_code: int) -> Classification:
        """Map an HTTP status onto a retry decision."""
        if 200 <= status_code < 300:
            return Classification(RetryDecision.SUCCESS)
        if status_code in STATUS_CLASSIFICATION:
            return STATUS_CLASSIFICATION[status_code]
        if status_code >= 500:
            return Classification(RetryDecision.RETRY, FailureKind.GATEWAY)
        return Classification(RetryDecision.FAIL_FAST, FailureKind.GATEWAY)

    def has_attempts_left(self, attempt: int) -> bool:
        return attempt < self.max_attempts
