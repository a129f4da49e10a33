from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional, Sequence

import httpx

from domain import TransportError, UnconfiguredError
from schemas import ChatMessage
from settings import Settings


logger = logging.getLogger("hiring-assistant.gateway")


class RemoteCompletionClient:
    """Issues one chat-completion POST per exchange to the configured gateway."""

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = settings.openrouter_api_key
        self.endpoint = f"{settings.openrouter_base_url.rstrip('/')}/chat/completions"
        self.model_name = settings.chat_model
        self.temperature = settings.chat_temperature
        self.max_tokens = settings.chat_max_tokens
        self.timeout_seconds = settings.chat_timeout_seconds
        self.referer = settings.frontend_url
        self.app_title = settings.app_title
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def build_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self.referer,
            "X-Title": self.app_title,
        }

    def build_payload(self, messages: Sequence[ChatMessage]) -> Dict[str, Any]:
        return {
            "model": self.model_name,
            "messages": [message.model_dump() for message in messages],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

    async def send(self, messages: Sequence[ChatMessage]) -> httpx.Response:
        """POST the composed transcript and return the raw gateway response.

        Raises UnconfiguredError before touching the network when no key is
        set, and TransportError on any httpx failure or deadline expiry. The
        HTTP status is left for the caller to interpret.
        """
        if not self.configured:
            raise UnconfiguredError("OPENROUTER_API_KEY is not configured.")

        logger.info(
            "Sending to gateway (model=%s, message_count=%d)",
            self.model_name,
            len(messages),
        )
        try:
            return await asyncio.wait_for(
                self._post(self.build_payload(messages)),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise TransportError(
                f"gateway call exceeded {self.timeout_seconds:.1f}s deadline"
            ) from exc
        except httpx.HTTPError as exc:
            # Covers connection faults as well as undecodable bodies and redirect loops.
            raise TransportError(f"gateway call failed: {exc!r}") from exc

    async def _post(self, payload: Dict[str, Any]) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout_seconds),
            transport=self._transport,
        ) as client:
            return await client.post(
                self.endpoint,
                headers=self.build_headers(),
                json=payload,
            )
