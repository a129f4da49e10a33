from __future__ import annotations

import textwrap
from typing import Any, List, Sequence

from pydantic import ValidationError

from domain import InvalidRequestError
from schemas import ChatMessage


HIRING_SYSTEM_PROMPT = textwrap.dedent(
    """\
    You are a helpful hiring assistant. Provide concise, professional responses \
    focused on recruitment, hiring, and HR-related topics.
    If asked about anything outside this scope, politely redirect the \
    conversation back to hiring-related topics."""
)


def validate_transcript(body: Any) -> List[ChatMessage]:
    """Turn a decoded request body into an ordered list of ChatMessage.

    Every element is checked: role must be system, user or assistant and
    content must be a string. Nothing is coerced; the first bad element is
    reported by index.
    """
    if not isinstance(body, dict):
        raise InvalidRequestError("Request body must be a JSON object.")

    raw_messages = body.get("messages")
    if raw_messages is None:
        raise InvalidRequestError("Messages array is required.")
    if not isinstance(raw_messages, list):
        raise InvalidRequestError("Messages must be an array.")
    if not raw_messages:
        raise InvalidRequestError("Messages array must not be empty.")

    messages: List[ChatMessage] = []
    for index, raw in enumerate(raw_messages):
        if not isinstance(raw, dict):
            raise InvalidRequestError(f"messages[{index}] must be an object.")
        try:
            messages.append(ChatMessage.model_validate(raw))
        except ValidationError as exc:
            fields = sorted({str(err["loc"][0]) for err in exc.errors() if err.get("loc")})
            raise InvalidRequestError(
                f"messages[{index}] has an invalid {' and '.join(fields) or 'shape'}."
            ) from exc
    return messages


def inject_system_prompt(
    messages: Sequence[ChatMessage],
    prompt: str = HIRING_SYSTEM_PROMPT,
) -> List[ChatMessage]:
    # Not idempotent: call once per exchange.
    return [ChatMessage(role="system", content=prompt), *messages]


def latest_user_message(messages: Sequence[ChatMessage]) -> str:
    for message in reversed(messages):
        if message.role == "user":
            return message.content
    return ""
