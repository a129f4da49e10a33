from .chat import ChatMessage, ChatResponse, HealthResponse, Role

__all__ = [
    "ChatMessage",
    "ChatResponse",
    "HealthResponse",
    "Role",
]
