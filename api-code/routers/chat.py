from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse, Response

from domain import InvalidRequestError
from schemas import ChatMessage, ChatResponse
from services import ChatOutcome, ChatProxyService


logger = logging.getLogger("hiring-assistant.api")

DISCONNECT_POLL_SECONDS = 0.25
CLIENT_CLOSED_REQUEST = 499

CHAT_REQUEST_SCHEMA = {
    "type": "object",
    "required": ["messages"],
    "properties": {
        "messages": {
            "type": "array",
            "minItems": 1,
            "items": ChatMessage.model_json_schema(),
        }
    },
}


def build_chat_router(chat_service: ChatProxyService) -> APIRouter:
    """Create the chat router wired to the provided chat service."""
    router = APIRouter(prefix="/api", tags=["chat"])

    @router.post(
        "/chat",
        response_model=ChatResponse,
        responses={400: {"description": "Body is not a valid transcript."}},
        openapi_extra={
            "requestBody": {
                "content": {"application/json": {"schema": CHAT_REQUEST_SCHEMA}},
                "required": True,
            }
        },
        summary="Answer the latest turn of a hiring-assistant conversation.",
    )
    async def chat_endpoint(request: Request) -> Any:
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return _error_response("Request body must be valid JSON.")

        exchange = asyncio.create_task(chat_service.handle(body))
        try:
            outcome = await _await_unless_disconnected(request, exchange)
        except InvalidRequestError as exc:
            return _error_response(str(exc))

        if outcome is None:
            logger.info("Client disconnected; abandoned in-flight chat exchange.")
            return Response(status_code=CLIENT_CLOSED_REQUEST)

        logger.info(
            "Chat exchange answered (source=%s, failure=%s)",
            outcome.source,
            outcome.failure_kind,
        )
        return outcome.response

    return router


async def _await_unless_disconnected(
    request: Request, exchange: "asyncio.Task[ChatOutcome]"
) -> ChatOutcome | None:
    """Wait for the exchange, cancelling it if the caller goes away first."""
    watcher = asyncio.create_task(_wait_for_disconnect(request))
    try:
        done, _ = await asyncio.wait(
            {exchange, watcher}, return_when=asyncio.FIRST_COMPLETED
        )
    except asyncio.CancelledError:
        exchange.cancel()
        raise
    finally:
        watcher.cancel()

    if exchange in done:
        return exchange.result()

    exchange.cancel()
    try:
        await exchange
    except asyncio.CancelledError:
        pass
    return None


async def _wait_for_disconnect(request: Request) -> None:
    while not await request.is_disconnected():
        await asyncio.sleep(DISCONNECT_POLL_SECONDS)


def _error_response(message: str) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})
