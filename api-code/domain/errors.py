from __future__ import annotations

from typing import Optional


class ChatProxyError(Exception):
    """Base class for every failure the chat pipeline knows how to classify."""

    kind = "chat_proxy_error"


class InvalidRequestError(ChatProxyError):
    """Raised when the inbound body is not a usable transcript."""

    kind = "invalid_request"


class UnconfiguredError(ChatProxyError):
    """Raised instead of calling the gateway when no API key is configured."""

    kind = "unconfigured"


class GatewayStatusError(ChatProxyError):
    kind = "gateway_status"

    def __init__(self, status_code: int, message: Optional[str] = None) -> None:
        self.status_code = status_code
        self.message = message or ""
        detail = f": {self.message}" if self.message else ""
        super().__init__(f"gateway responded with status {status_code}{detail}")


class UnauthorizedError(GatewayStatusError):
    kind = "unauthorized"


class RateLimitedError(GatewayStatusError):
    kind = "rate_limited"


class GatewayError(GatewayStatusError):
    kind = "gateway_error"


class MalformedResponseError(ChatProxyError):
    kind = "malformed_response"


class EmptyCompletionError(ChatProxyError):
    kind = "empty_completion"


class TransportError(ChatProxyError):
    """Network-level failure, including deadline expiry."""

    kind = "transport_error"
