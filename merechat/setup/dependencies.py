"""Merechat Dependencies - DI 컨테이너 및 FastAPI Depends 팩토리.

Container는 lifespan에서 생성되어 app.state.container에 보관된다.
ConnectionRegistry는 Container가 소유한다 (모듈 전역 없음).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Annotated

from fastapi import Depends
from starlette.requests import HTTPConnection

from merechat.application.chat.commands import (
    DeleteMessageCommand,
    EditMessageCommand,
    MarkReadCommand,
    PersistMessageCommand,
    SendMessageCommand,
    StartChatCommand,
    UploadAttachmentCommand,
)
from merechat.application.chat.queries import (
    GetChatQuery,
    GetMessagesQuery,
    ListChatsQuery,
    SearchMessagesQuery,
    UnreadCountsQuery,
)
from merechat.application.realtime.broadcast import BroadcastRouter
from merechat.application.realtime.registry import ConnectionRegistry
from merechat.application.realtime.session import SessionHandler
from merechat.infrastructure.cache import (
    ParticipantCacheRedis,
    close_cache_redis,
    create_cache_redis,
)
from merechat.infrastructure.persistence_postgres import create_engine, create_session_factory
from merechat.infrastructure.persistence_postgres.adapters import ChatRepositorySQLA
from merechat.infrastructure.storage import LocalAttachmentStorage

if TYPE_CHECKING:
    from redis.asyncio import Redis
    from sqlalchemy.ext.asyncio import AsyncEngine

    from merechat.application.chat.ports import (
        AttachmentStoragePort,
        ChatRepositoryPort,
        ParticipantCachePort,
    )
    from merechat.setup.config import Settings

logger = logging.getLogger(__name__)


# ============================================================
# Container (Lifecycle)
# ============================================================


class Container:
    """리소스 및 Use Case 컨테이너.

    Ports 구현체를 받아 Command/Query/실시간 컴포넌트를 조립한다.
    테스트에서는 fake 구현체로 직접 생성할 수 있다.
    """

    def __init__(
        self,
        settings: "Settings",
        repository: "ChatRepositoryPort",
        storage: "AttachmentStoragePort",
        participant_cache: "ParticipantCachePort | None" = None,
        engine: "AsyncEngine | None" = None,
        redis: "Redis | None" = None,
    ) -> None:
        self.settings = settings
        self.repository = repository
        self.storage = storage
        self.participant_cache = participant_cache
        self._engine = engine
        self._redis = redis

        # Realtime
        self.registry = ConnectionRegistry()
        self.router = BroadcastRouter(
            registry=self.registry,
            repository=repository,
            participant_cache=participant_cache,
            send_timeout_seconds=settings.ws_send_timeout_seconds,
        )

        # Commands
        self.persist_message = PersistMessageCommand(repository)
        self.send_message = SendMessageCommand(self.persist_message, self.router)
        self.start_chat = StartChatCommand(repository)
        self.edit_message = EditMessageCommand(repository)
        self.delete_message = DeleteMessageCommand(repository)
        self.mark_read = MarkReadCommand(repository)
        self.upload_attachment = UploadAttachmentCommand(repository, storage)

        # Queries
        self.list_chats = ListChatsQuery(repository)
        self.get_chat = GetChatQuery(repository)
        self.get_messages = GetMessagesQuery(
            repository,
            default_limit=settings.default_page_size,
            max_limit=settings.max_page_size,
        )
        self.search_messages = SearchMessagesQuery(
            repository,
            default_limit=settings.default_page_size,
            max_limit=settings.max_page_size,
        )
        self.unread_counts = UnreadCountsQuery(repository)

        self.session_handler = SessionHandler(
            registry=self.registry,
            router=self.router,
            send_message=self.send_message,
            idle_timeout_seconds=settings.ws_idle_timeout_seconds,
            typing_exclude_sender=settings.typing_exclude_sender,
        )

    async def close(self) -> None:
        """리소스 정리.

        순서: live 연결 drain → Redis → DB 엔진
        """
        closed = await self.registry.close_all()
        logger.info("Connection registry drained", extra={"connections": closed})

        if self._redis is not None:
            await close_cache_redis(self._redis)
            self._redis = None

        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            logger.info("Database engine disposed")


def create_container(settings: "Settings") -> Container:
    """설정으로부터 실제 인프라 구현체를 연결한 Container 생성."""
    engine = create_engine(settings)
    repository = ChatRepositorySQLA(create_session_factory(engine))
    storage = LocalAttachmentStorage(settings.upload_dir, settings.upload_public_prefix)

    redis = None
    participant_cache = None
    if settings.participant_cache_enabled:
        redis = create_cache_redis(settings)
        participant_cache = ParticipantCacheRedis(redis, settings.participant_cache_ttl_seconds)

    return Container(
        settings=settings,
        repository=repository,
        storage=storage,
        participant_cache=participant_cache,
        engine=engine,
        redis=redis,
    )


# ============================================================
# FastAPI Depends
# ============================================================


def get_container(conn: HTTPConnection) -> Container:
    """app.state의 Container (HTTP / WebSocket 공용)."""
    return conn.app.state.container


ContainerDep = Annotated[Container, Depends(get_container)]


def get_start_chat_command(container: ContainerDep) -> StartChatCommand:
    return container.start_chat


def get_send_message_command(container: ContainerDep) -> SendMessageCommand:
    return container.send_message


def get_edit_message_command(container: ContainerDep) -> EditMessageCommand:
    return container.edit_message


def get_delete_message_command(container: ContainerDep) -> DeleteMessageCommand:
    return container.delete_message


def get_mark_read_command(container: ContainerDep) -> MarkReadCommand:
    return container.mark_read


def get_upload_attachment_command(container: ContainerDep) -> UploadAttachmentCommand:
    return container.upload_attachment


def get_list_chats_query(container: ContainerDep) -> ListChatsQuery:
    return container.list_chats


def get_chat_query(container: ContainerDep) -> GetChatQuery:
    return container.get_chat


def get_messages_query(container: ContainerDep) -> GetMessagesQuery:
    return container.get_messages


def get_search_messages_query(container: ContainerDep) -> SearchMessagesQuery:
    return container.search_messages


def get_unread_counts_query(container: ContainerDep) -> UnreadCountsQuery:
    return container.unread_counts


def get_session_handler(container: ContainerDep) -> SessionHandler:
    return container.session_handler


# Type aliases for FastAPI Depends
StartChatCommandDep = Annotated[StartChatCommand, Depends(get_start_chat_command)]
SendMessageCommandDep = Annotated[SendMessageCommand, Depends(get_send_message_command)]
EditMessageCommandDep = Annotated[EditMessageCommand, Depends(get_edit_message_command)]
DeleteMessageCommandDep = Annotated[DeleteMessageCommand, Depends(get_delete_message_command)]
MarkReadCommandDep = Annotated[MarkReadCommand, Depends(get_mark_read_command)]
UploadAttachmentCommandDep = Annotated[
    UploadAttachmentCommand, Depends(get_upload_attachment_command)
]
ListChatsQueryDep = Annotated[ListChatsQuery, Depends(get_list_chats_query)]
GetChatQueryDep = Annotated[GetChatQuery, Depends(get_chat_query)]
GetMessagesQueryDep = Annotated[GetMessagesQuery, Depends(get_messages_query)]
SearchMessagesQueryDep = Annotated[SearchMessagesQuery, Depends(get_search_messages_query)]
UnreadCountsQueryDep = Annotated[UnreadCountsQuery, Depends(get_unread_counts_query)]
SessionHandlerDep = Annotated[SessionHandler, Depends(get_session_handler)]
