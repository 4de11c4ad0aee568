"""Request lifecycle states.

A request moves strictly forward through these states; the allowed edges are
listed in ``_TRANSITIONS``. Error states are terminal and reachable from any
non-terminal state.
"""

from dataclasses import dataclass, field
from enum import Enum


class RequestState(str, Enum):
    """States of a single generation request."""

    RECEIVED = "received"
    AUTHENTICATED = "authenticated"
    VALIDATED = "validated"
    MODE_KEYWORD_ANALYSIS = "mode:keyword-analysis"
    MODE_QUICK_CHANGE = "mode:quick-change"
    MODE_REFINE = "mode:refine"
    MODE_FRESH_GENERATE = "mode:fresh-generate"
    DISPATCHED_TO_GATEWAY = "dispatched-to-gateway"
    PARSED = "parsed"
    RESPONDED = "responded"

    # Terminal error states
    REJECTED_UNAUTHENTICATED = "rejected-unauthenticated"
    REJECTED_INVALID_INPUT = "rejected-invalid-input"
    GATEWAY_RATE_LIMITED = "gateway-rate-limited"
    GATEWAY_PAYMENT_REQUIRED = "gateway-payment-required"
    GATEWAY_FAILED = "gateway-failed"
    INTERNAL_ERROR = "internal-error"

    @property
    def is_error(self) -> bool:
        return self in ERROR_STATES

    @property
    def is_terminal(self) -> bool:
        return self == RequestState.RESPONDED or self in ERROR_STATES


ERROR_STATES: frozenset[RequestState] = frozenset(
    {
        RequestState.REJECTED_UNAUTHENTICATED,
        RequestState.REJECTED_INVALID_INPUT,
        RequestState.GATEWAY_RATE_LIMITED,
        RequestState.GATEWAY_PAYMENT_REQUIRED,
        RequestState.GATEWAY_FAILED,
        RequestState.INTERNAL_ERROR,
    }
)

MODE_STATES: frozenset[RequestState] = frozenset(
    {
        RequestState.MODE_KEYWORD_ANALYSIS,
        RequestState.MODE_QUICK_CHANGE,
        RequestState.MODE_REFINE,
        RequestState.MODE_FRESH_GENERATE,
    }
)

_TRANSITIONS: dict[RequestState, frozenset[RequestState]] = {
    RequestState.RECEIVED: frozenset({RequestState.AUTHENTICATED}),
    RequestState.AUTHENTICATED: frozenset({RequestState.VALIDATED}),
    RequestState.VALIDATED: MODE_STATES,
    RequestState.MODE_KEYWORD_ANALYSIS: frozenset({RequestState.DISPATCHED_TO_GATEWAY}),
    # Quick change with no effective delta responds without a gateway call
    RequestState.MODE_QUICK_CHANGE: frozenset(
        {RequestState.DISPATCHED_TO_GATEWAY, RequestState.RESPONDED}
    ),
    RequestState.MODE_REFINE: frozenset({RequestState.DISPATCHED_TO_GATEWAY}),
    RequestState.MODE_FRESH_GENERATE: frozenset({RequestState.DISPATCHED_TO_GATEWAY}),
    RequestState.DISPATCHED_TO_GATEWAY: frozenset({RequestState.PARSED}),
    RequestState.PARSED: frozenset({RequestState.RESPONDED}),
}


class InvalidTransitionError(Exception):
    """Raised when a request tries to skip or reorder lifecycle steps."""

    def __init__(self, current: RequestState, target: RequestState) -> None:
        self.current = current
        self.target = target
        super().__init__(f"Invalid request state transition: {current.value} -> {target.value}")


def can_transition(current: RequestState, target: RequestState) -> bool:
    """Check whether ``current -> target`` is a legal edge."""
    if current.is_terminal:
        return False
    if target in ERROR_STATES:
        return True
    return target in _TRANSITIONS.get(current, frozenset())


@dataclass
class RequestTrace:
    """Ordered record of the states one request has passed through."""

    request_id: str
    history: list[RequestState] = field(default_factory=lambda: [RequestState.RECEIVED])

    @property
    def current(self) -> RequestState:
        return self.history[-1]

    def advance(self, target: RequestState) -> None:
        """Move to ``target``.

        Raises:
            InvalidTransitionError: If the edge is not allowed
        """
        if not can_transition(self.current, target):
            raise InvalidTransitionError(self.current, target)
        self.history.append(target)

    def fail(self, error_state: RequestState) -> None:
        """Move to a terminal error state unless already terminal."""
        if not self.current.is_terminal:
            self.advance(error_state)
