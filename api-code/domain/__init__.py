from .chat_states import (
    ALLOWED_TRANSITIONS,
    ChatStrategy,
    ExchangeState,
    ExchangeTracker,
    is_valid_transition,
)
from .errors import (
    ChatProxyError,
    EmptyCompletionError,
    GatewayError,
    GatewayStatusError,
    InvalidRequestError,
    MalformedResponseError,
    RateLimitedError,
    TransportError,
    UnauthorizedError,
    UnconfiguredError,
)

__all__ = [
    "ALLOWED_TRANSITIONS",
    "ChatStrategy",
    "ExchangeState",
    "ExchangeTracker",
    "is_valid_transition",
    "ChatProxyError",
    "EmptyCompletionError",
    "GatewayError",
    "GatewayStatusError",
    "InvalidRequestError",
    "MalformedResponseError",
    "RateLimitedError",
    "TransportError",
    "UnauthorizedError",
    "UnconfiguredError",
]
