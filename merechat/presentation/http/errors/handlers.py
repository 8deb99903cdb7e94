"""Exception Handlers.

도메인/애플리케이션 예외를 HTTP 응답으로 변환합니다.
응답 형식: {"detail": ..., "code": ...}
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from merechat.application.common.exceptions.auth import UnauthorizedError
from merechat.application.common.exceptions.base import ApplicationError
from merechat.application.common.exceptions.infrastructure import (
    AttachmentStorageError,
    StoreError,
)
from merechat.application.common.exceptions.validation import ValidationError
from merechat.domain.exceptions.base import DomainError
from merechat.domain.exceptions.chat import ChatNotFoundError, InvalidParticipantsError
from merechat.domain.exceptions.message import MessageNotFoundError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """예외 핸들러 등록."""

    @app.exception_handler(UnauthorizedError)
    async def unauthorized_handler(request: Request, exc: UnauthorizedError):
        return JSONResponse(
            status_code=401,
            content={"detail": exc.message, "code": "UNAUTHORIZED"},
        )

    @app.exception_handler(ChatNotFoundError)
    async def chat_not_found_handler(request: Request, exc: ChatNotFoundError):
        return JSONResponse(
            status_code=404,
            content={"detail": exc.message, "code": "CHAT_NOT_FOUND"},
        )

    @app.exception_handler(MessageNotFoundError)
    async def message_not_found_handler(request: Request, exc: MessageNotFoundError):
        return JSONResponse(
            status_code=404,
            content={"detail": exc.message, "code": "MESSAGE_NOT_FOUND"},
        )

    @app.exception_handler(InvalidParticipantsError)
    async def invalid_participants_handler(request: Request, exc: InvalidParticipantsError):
        return JSONResponse(
            status_code=400,
            content={"detail": exc.message, "code": "INVALID_PARTICIPANTS"},
        )

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=400,
            content={"detail": exc.message, "code": "VALIDATION_ERROR"},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        # 잘못된 요청 본문은 422가 아닌 400
        return JSONResponse(
            status_code=400,
            content={"detail": "invalid request body", "code": "INVALID_REQUEST"},
        )

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        logger.error(
            "store_error",
            extra={"operation": exc.operation, "path": request.url.path},
        )
        return JSONResponse(
            status_code=500,
            content={"detail": exc.message, "code": "STORE_ERROR"},
        )

    @app.exception_handler(AttachmentStorageError)
    async def attachment_storage_handler(request: Request, exc: AttachmentStorageError):
        return JSONResponse(
            status_code=500,
            content={"detail": exc.message, "code": "ATTACHMENT_STORAGE_ERROR"},
        )

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        return JSONResponse(
            status_code=400,
            content={"detail": exc.message, "code": "DOMAIN_ERROR"},
        )

    @app.exception_handler(ApplicationError)
    async def application_error_handler(request: Request, exc: ApplicationError):
        return JSONResponse(
            status_code=400,
            content={"detail": exc.message, "code": "APPLICATION_ERROR"},
        )
