from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter

from domain import ChatStrategy
from schemas import HealthResponse
from services import ChatProxyService


def build_health_router(chat_service: ChatProxyService) -> APIRouter:
    router = APIRouter(prefix="/api", tags=["health"])

    @router.get("/health", response_model=HealthResponse)
    @router.get("/test", response_model=HealthResponse, include_in_schema=False)
    async def healthcheck() -> HealthResponse:
        details = chat_service.describe()
        if details["strategy"] is ChatStrategy.SCRIPTED:
            message = "Chat proxy is up in scripted mode."
        elif details["remote_configured"]:
            message = "Chat proxy is up and the gateway key is configured."
        else:
            message = "Chat proxy is up; gateway key missing, serving fallback replies."
        return HealthResponse(
            status="ok",
            message=message,
            timestamp=datetime.now(timezone.utc),
            **details,
        )

    return router
