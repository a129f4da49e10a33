from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from domain import (
    ChatProxyError,
    ChatStrategy,
    ExchangeState,
    ExchangeTracker,
    InvalidRequestError,
    UnconfiguredError,
)
from schemas import ChatMessage, ChatResponse
from settings import Settings

from .completion_client import RemoteCompletionClient
from .fallback import FallbackResponder, ScriptedResponder
from .normalizer import normalize_completion
from .transcript import inject_system_prompt, validate_transcript


logger = logging.getLogger("hiring-assistant.chat")


@dataclass
class ChatOutcome:
    response: ChatResponse
    source: str
    failure_kind: Optional[str] = None
    path: List[ExchangeState] = field(default_factory=list)


class ChatProxyService:
    """Runs one chat exchange end to end and never lets a remote fault escape."""

    def __init__(
        self,
        settings: Settings,
        client: Optional[RemoteCompletionClient] = None,
        fallback: Optional[FallbackResponder] = None,
        scripted: Optional[ScriptedResponder] = None,
    ):
        self.strategy = settings.chat_strategy
        self.client = client or RemoteCompletionClient(settings)
        self.fallback = fallback or FallbackResponder(rng=random.Random(settings.fallback_seed))
        self.scripted = scripted or ScriptedResponder()
        self.model_name = self.client.model_name

        if self.strategy is ChatStrategy.REMOTE and not self.client.configured:
            logger.warning("OPENROUTER_API_KEY missing; every reply will come from the fallback pool.")
        logger.info(
            "ChatProxyService initialized (strategy=%s, model=%s, remote_configured=%s)",
            self.strategy.value,
            self.model_name,
            self.client.configured,
        )

    def describe(self) -> Dict[str, Any]:
        return {
            "strategy": self.strategy,
            "model": self.model_name,
            "remote_configured": self.client.configured,
        }

    async def handle(self, body: Any) -> ChatOutcome:
        """Validate a decoded request body and answer it.

        Only InvalidRequestError propagates; everything after validation ends
        in a ChatResponse.
        """
        tracker = ExchangeTracker()
        tracker.advance(ExchangeState.VALIDATING)
        try:
            messages = validate_transcript(body)
        except InvalidRequestError as exc:
            tracker.advance(ExchangeState.REJECTED)
            logger.info("Rejected chat request: %s", exc)
            raise
        return await self._answer(messages, tracker)

    async def complete(self, messages: Sequence[ChatMessage]) -> ChatOutcome:
        tracker = ExchangeTracker()
        tracker.advance(ExchangeState.VALIDATING)
        if not messages:
            tracker.advance(ExchangeState.REJECTED)
            raise InvalidRequestError("Messages array must not be empty.")
        return await self._answer(list(messages), tracker)

    async def _answer(self, messages: List[ChatMessage], tracker: ExchangeTracker) -> ChatOutcome:
        if self.strategy is ChatStrategy.SCRIPTED:
            tracker.advance(ExchangeState.RESPONDING)
            return self._finish(self.scripted.reply(messages), "scripted", None, tracker)

        tracker.advance(ExchangeState.COMPOSING)
        composed = inject_system_prompt(messages)

        tracker.advance(ExchangeState.CALLING)
        try:
            raw = await self.client.send(composed)
            reply = normalize_completion(raw)
        except UnconfiguredError:
            tracker.advance(ExchangeState.UNCONFIGURED)
            logger.debug("Remote path unconfigured; using fallback reply.")
            return self._fall_back(UnconfiguredError.kind, tracker)
        except ChatProxyError as exc:
            tracker.advance(ExchangeState.REMOTE_FAILED)
            logger.warning("Gateway call failed (kind=%s): %s", exc.kind, exc)
            return self._fall_back(exc.kind, tracker)

        tracker.advance(ExchangeState.SUCCEEDED)
        if not reply.content.strip():
            logger.warning("Gateway returned a blank completion; using fallback reply.")
            return self._fall_back("empty_completion", tracker)

        tracker.advance(ExchangeState.RESPONDING)
        return self._finish(reply, "remote", None, tracker)

    def _fall_back(self, kind: str, tracker: ExchangeTracker) -> ChatOutcome:
        tracker.advance(ExchangeState.FALLBACK)
        reply = self.fallback.respond()
        tracker.advance(ExchangeState.RESPONDING)
        return self._finish(reply, "fallback", kind, tracker)

    @staticmethod
    def _finish(
        reply: ChatResponse,
        source: str,
        failure_kind: Optional[str],
        tracker: ExchangeTracker,
    ) -> ChatOutcome:
        return ChatOutcome(
            response=reply,
            source=source,
            failure_kind=failure_kind,
            path=list(tracker.path),
        )
