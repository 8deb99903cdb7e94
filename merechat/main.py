"""Merechat Service Main Application.

FastAPI 앱 팩토리 및 라이프사이클 관리.

- REST: /api/v1/chats, /api/v1/messages
- WebSocket: /ws/chat
- 첨부 파일 정적 서빙: {upload_public_prefix}
- 운영: /health, /ready, /metrics
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Callable

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from merechat.infrastructure.persistence_postgres.mappings import start_mappers
from merechat.metrics import register_metrics
from merechat.presentation.http.controllers import chat_router, messages_router
from merechat.presentation.http.errors import register_exception_handlers
from merechat.presentation.websocket import websocket_router
from merechat.setup.config import Settings, get_settings
from merechat.setup.dependencies import Container, create_container
from merechat.setup.logging import setup_logging
from merechat.setup.tracing import (
    configure_tracing,
    instrument_fastapi,
    instrument_redis,
    shutdown_tracing,
)

logger = logging.getLogger(__name__)

ContainerFactory = Callable[[Settings], Container]


def create_app(
    settings: Settings | None = None,
    container_factory: ContainerFactory = create_container,
) -> FastAPI:
    """FastAPI 앱 팩토리.

    Args:
        settings: 설정 (기본: get_settings())
        container_factory: Container 생성 함수 (테스트에서 fake 주입)

    Returns:
        설정된 FastAPI 앱 인스턴스
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """앱 라이프사이클 관리.

        Startup:
          - ORM Mapper 초기화
          - Container 초기화 (registry, store, cache, router, session handler)

        Shutdown:
          - live 연결 drain, Redis/DB 정리
        """
        logger.info(
            "Merechat service starting",
            extra={"environment": settings.environment, "version": settings.service_version},
        )

        start_mappers()
        logger.info("ORM mappers initialized")

        container = container_factory(settings)
        app.state.container = container

        yield

        logger.info("Merechat service shutting down")
        await container.close()
        app.state.container = None
        shutdown_tracing()

    app = FastAPI(
        title="Merechat API",
        description="실시간 채팅 서비스",
        version=settings.service_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.container = None

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    instrument_fastapi(app)
    register_metrics(app)
    register_exception_handlers(app)

    app.include_router(chat_router, prefix="/api/v1")
    app.include_router(messages_router, prefix="/api/v1")
    app.include_router(websocket_router)

    # 업로드된 첨부 파일
    app.mount(
        settings.upload_public_prefix,
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="attachments",
    )

    @app.get("/health")
    async def health():
        return {
            "status": "healthy",
            "service": settings.service_name,
            "environment": settings.environment,
        }

    @app.get("/ready")
    async def ready(request: Request):
        container = request.app.state.container
        if container is None:
            return JSONResponse(status_code=503, content={"status": "not ready"})
        return {"status": "ready", "connections": len(container.registry)}

    return app


def build_app() -> FastAPI:
    """uvicorn용 앱 (로깅/트레이싱 포함)."""
    setup_logging()
    configure_tracing()
    instrument_redis()
    return create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "merechat.main:build_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
