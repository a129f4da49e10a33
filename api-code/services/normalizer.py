from __future__ import annotations

import json
from typing import Any, Optional

import httpx

from domain import (
    EmptyCompletionError,
    GatewayError,
    MalformedResponseError,
    RateLimitedError,
    UnauthorizedError,
)
from schemas import ChatResponse


MAX_ERROR_TEXT_CHARS = 300


def normalize_completion(response: httpx.Response) -> ChatResponse:
    """Extract choices[0].message.content from a gateway response.

    An empty string is a valid completion here; callers decide what to do
    with a blank reply.
    """
    if not response.is_success:
        raise _classify_status(response)

    try:
        envelope = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MalformedResponseError("gateway body is not valid JSON") from exc
    if not isinstance(envelope, dict):
        raise MalformedResponseError("gateway body is not a JSON object")

    choices = envelope.get("choices")
    if choices is None or choices == []:
        raise EmptyCompletionError("gateway returned no choices")
    if not isinstance(choices, list) or not isinstance(choices[0], dict):
        raise MalformedResponseError("choices is not a list of objects")

    message = choices[0].get("message")
    if message is None:
        raise EmptyCompletionError("first choice carries no message")
    if not isinstance(message, dict):
        raise MalformedResponseError("choices[0].message is not an object")

    content = message.get("content")
    if content is None:
        raise EmptyCompletionError("first choice message has no content")
    if not isinstance(content, str):
        raise MalformedResponseError("choices[0].message.content is not a string")

    return ChatResponse(content=content)


def _classify_status(response: httpx.Response) -> Exception:
    message = _extract_error_message(response)
    status_code = response.status_code
    if status_code == 401:
        return UnauthorizedError(status_code, message)
    if status_code == 429:
        return RateLimitedError(status_code, message)
    return GatewayError(status_code, message)


def _extract_error_message(response: httpx.Response) -> Optional[str]:
    try:
        body: Any = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        text = response.text.strip()
        return text[:MAX_ERROR_TEXT_CHARS] or None

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"][:MAX_ERROR_TEXT_CHARS]
        if isinstance(error, str):
            return error[:MAX_ERROR_TEXT_CHARS]
        if isinstance(body.get("message"), str):
            return body["message"][:MAX_ERROR_TEXT_CHARS]
    return None
