from .chat_service import ChatOutcome, ChatProxyService
from .completion_client import RemoteCompletionClient
from .dispatcher import ChatDispatcher, build_transcript
from .fallback import FallbackResponder, ScriptedResponder
from .normalizer import normalize_completion
from .transcript import HIRING_SYSTEM_PROMPT, inject_system_prompt, validate_transcript

__all__ = [
    "ChatOutcome",
    "ChatProxyService",
    "RemoteCompletionClient",
    "ChatDispatcher",
    "build_transcript",
    "FallbackResponder",
    "ScriptedResponder",
    "normalize_completion",
    "HIRING_SYSTEM_PROMPT",
    "inject_system_prompt",
    "validate_transcript",
]
