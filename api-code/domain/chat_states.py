from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet, List


class ChatStrategy(str, Enum):
    REMOTE = "remote"
    SCRIPTED = "scripted"


class ExchangeState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    REJECTED = "rejected"
    COMPOSING = "composing"
    CALLING = "calling"
    SUCCEEDED = "succeeded"
    UNCONFIGURED = "unconfigured"
    REMOTE_FAILED = "remote_failed"
    FALLBACK = "fallback"
    RESPONDING = "responding"

    @property
    def is_terminal(self) -> bool:
        return self in {ExchangeState.REJECTED, ExchangeState.RESPONDING}


ALLOWED_TRANSITIONS: Dict[ExchangeState, FrozenSet[ExchangeState]] = {
    ExchangeState.IDLE: frozenset({ExchangeState.VALIDATING}),
    ExchangeState.VALIDATING: frozenset(
        {ExchangeState.REJECTED, ExchangeState.COMPOSING, ExchangeState.RESPONDING}
    ),
    ExchangeState.COMPOSING: frozenset({ExchangeState.CALLING}),
    ExchangeState.CALLING: frozenset(
        {ExchangeState.SUCCEEDED, ExchangeState.UNCONFIGURED, ExchangeState.REMOTE_FAILED}
    ),
    # A blank successful completion still goes through the fallback pool.
    ExchangeState.SUCCEEDED: frozenset({ExchangeState.RESPONDING, ExchangeState.FALLBACK}),
    ExchangeState.UNCONFIGURED: frozenset({ExchangeState.FALLBACK}),
    ExchangeState.REMOTE_FAILED: frozenset({ExchangeState.FALLBACK}),
    ExchangeState.FALLBACK: frozenset({ExchangeState.RESPONDING}),
    ExchangeState.RESPONDING: frozenset({ExchangeState.IDLE}),
    ExchangeState.REJECTED: frozenset({ExchangeState.IDLE}),
}


def is_valid_transition(current: ExchangeState, new: ExchangeState) -> bool:
    return new in ALLOWED_TRANSITIONS.get(current, frozenset())


class ExchangeTracker:
    """Records the states walked by a single chat exchange."""

    def __init__(self) -> None:
        self.path: List[ExchangeState] = [ExchangeState.IDLE]

    @property
    def state(self) -> ExchangeState:
        return self.path[-1]

    def advance(self, new: ExchangeState) -> None:
        if not is_valid_transition(self.state, new):
            raise RuntimeError(
                f"Invalid exchange transition: {self.state.value} -> {new.value}"
            )
        self.path.append(new)
