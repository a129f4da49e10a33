from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from domain import ChatStrategy


Role = Literal["system", "user", "assistant"]


class ChatMessage(BaseModel):
    role: Role = Field(..., description="Author of the message.")
    content: str = Field(..., description="Message text, passed through untrimmed.")

    model_config = {"frozen": True, "extra": "ignore"}


class ChatResponse(BaseModel):
    role: Literal["assistant"] = Field(default="assistant")
    content: str = Field(..., description="Assistant reply shown to the user.")


class HealthResponse(BaseModel):
    status: str = Field(..., description="Liveness indicator.")
    message: str
    timestamp: datetime = Field(..., description="UTC time the check was served.")
    remote_configured: bool = Field(
        ..., description="True when a gateway API key is present."
    )
    strategy: ChatStrategy
    model: str
