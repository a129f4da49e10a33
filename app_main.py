from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware


PROJECT_ROOT = Path(__file__).resolve().parent
API_CODE_PATH = PROJECT_ROOT / "api-code"
if str(API_CODE_PATH) not in sys.path:
    sys.path.insert(0, str(API_CODE_PATH))

from env_loader import load_local_env  # noqa: E402
from routers import build_chat_router, build_health_router  # noqa: E402
from services import ChatProxyService  # noqa: E402
from settings import Settings, get_settings  # noqa: E402


logger = logging.getLogger("hiring-assistant")


def create_app(
    settings: Settings,
    chat_service: Optional[ChatProxyService] = None,
) -> FastAPI:
    app = FastAPI(
        title="Hiring Assistant API",
        version="0.1.0",
        description="Chat proxy between the hiring platform UI and an LLM gateway.",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    chat_service = chat_service or ChatProxyService(settings)
    app.include_router(build_chat_router(chat_service))
    app.include_router(build_health_router(chat_service))
    return app


load_local_env(PROJECT_ROOT / ".env")
settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s | %(levelname)-8s | %(name)-26s | %(message)s",
)

app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app_main:app", host=settings.host, port=settings.port, reload=True)
