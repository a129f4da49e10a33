from __future__ import annotations

import random
from typing import Optional, Sequence, Tuple

from schemas import ChatMessage, ChatResponse

from .transcript import latest_user_message


FALLBACK_REPLIES: Tuple[str, ...] = (
    "I'm having trouble connecting to the AI service. Could you try rephrasing your question?",
    "I apologize, but I'm experiencing some technical difficulties. Could you ask me something else?",
    "I'm still learning! Could you try asking me about hiring, recruitment, or HR-related topics?",
)

# Declaration order is match priority.
KEYWORD_REPLIES: Tuple[Tuple[str, str], ...] = (
    ("hello", "Hello! How can I assist you with your hiring needs today?"),
    (
        "interview",
        "For interviews, prepare a structured set of role-specific questions, "
        "score every candidate against the same rubric, and leave time for "
        "their questions. Want a sample question list?",
    ),
    (
        "resume",
        "When screening resumes, start from the must-have skills in the job "
        "description and look for concrete, measurable outcomes.",
    ),
    (
        "job description",
        "A good job description covers the role summary, key responsibilities, "
        "required and nice-to-have skills, and what the team offers.",
    ),
    (
        "salary",
        "Salary ranges depend on role, seniority and location. Benchmark against "
        "recent market data and publish the range to attract better-fit applicants.",
    ),
    (
        "help",
        "I can help with job descriptions, resume screening, and interview questions. "
        "What do you need?",
    ),
    ("hi", "Hi there! I'm here to help with your recruitment questions."),
)

DEFAULT_SCRIPTED_REPLY = "I'm your hiring assistant. How can I help you today?"


class FallbackResponder:
    """Picks a canned apology when the remote completion path cannot finish."""

    def __init__(
        self,
        replies: Sequence[str] = FALLBACK_REPLIES,
        rng: Optional[random.Random] = None,
    ):
        if not replies:
            raise ValueError("Fallback responder needs at least one reply.")
        self.replies = tuple(replies)
        self.rng = rng or random.Random()

    def respond(self) -> ChatResponse:
        return ChatResponse(content=self.rng.choice(self.replies))


class ScriptedResponder:
    """Offline responder that matches the latest user message against a keyword table."""

    def __init__(
        self,
        table: Sequence[Tuple[str, str]] = KEYWORD_REPLIES,
        default: str = DEFAULT_SCRIPTED_REPLY,
    ):
        self.table = tuple((keyword.lower(), reply) for keyword, reply in table)
        self.default = default

    def match(self, text: str) -> Optional[str]:
        lowered = text.lower()
        for keyword, reply in self.table:
            if keyword in lowered:
                return reply
        return None

    def reply(self, messages: Sequence[ChatMessage]) -> ChatResponse:
        matched = self.match(latest_user_message(messages))
        return ChatResponse(content=matched if matched is not None else self.default)
