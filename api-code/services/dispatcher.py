from __future__ import annotations

import json
import logging
import random
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import httpx

from schemas import ChatMessage


logger = logging.getLogger("hiring-assistant.dispatcher")

CLIENT_FALLBACK_REPLIES: Tuple[str, ...] = (
    "I'm here to help with your hiring needs. Could you tell me more about what you're looking for?",
    "I can assist with job descriptions, resume screening, and interview questions. What would you like to know?",
    "Let me help you with your hiring process. What specific information do you need?",
    "I'm your hiring assistant. How can I help you today?",
)

MessageLike = Union[ChatMessage, Mapping[str, Any]]


class ChatDispatcher:
    """Client-side caller for POST /api/chat that always yields displayable text."""

    def __init__(
        self,
        base_url: str = "http://localhost:3001",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        rng: Optional[random.Random] = None,
        replies: Sequence[str] = CLIENT_FALLBACK_REPLIES,
    ):
        self.endpoint = f"{base_url.rstrip('/')}/api/chat"
        self.timeout = timeout
        self._transport = transport
        self.rng = rng or random.Random()
        self.replies = tuple(replies)

    def fallback_reply(self) -> str:
        return self.rng.choice(self.replies)

    async def send(self, messages: Sequence[MessageLike]) -> str:
        payload = {"messages": [_as_dict(message) for message in messages]}
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(self.endpoint, json=payload)
        except httpx.HTTPError as exc:
            logger.error("Chat request to %s failed: %s", self.endpoint, exc)
            return self.fallback_reply()

        if not response.is_success:
            logger.warning("Chat API responded with status %s", response.status_code)
            return self.fallback_reply()

        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning("Chat API returned a non-JSON body.")
            return self.fallback_reply()

        content = data.get("content") if isinstance(data, dict) else None
        if isinstance(content, str) and content:
            return content

        logger.warning("Unexpected chat API response format: %r", data)
        return self.fallback_reply()


def _as_dict(message: MessageLike) -> Dict[str, Any]:
    if isinstance(message, ChatMessage):
        return message.model_dump()
    return dict(message)


def build_transcript(history: Sequence[MessageLike], user_text: str) -> List[Dict[str, Any]]:
    """Append a new user turn to prior turns, the way the chat widget does."""
    return [*(_as_dict(message) for message in history), {"role": "user", "content": user_text}]
