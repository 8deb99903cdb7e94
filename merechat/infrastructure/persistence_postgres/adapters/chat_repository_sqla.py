"""Chat Repository SQLAlchemy Adapter.

ChatRepositoryPort의 PostgreSQL 구현체.

연산마다 독립된 세션/트랜잭션을 사용한다 (단일 행 단위 원자성).
SQLAlchemyError는 StoreError로 변환한다.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import TYPE_CHECKING, AsyncIterator
from uuid import UUID

from sqlalchemy import Text, case, func, not_, select, update
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import SQLAlchemyError

from merechat.application.chat.ports.chat_repository import ChatRepositoryPort
from merechat.application.common.exceptions.infrastructure import StoreError
from merechat.domain.entities.chat import Chat
from merechat.domain.entities.message import Message
from merechat.infrastructure.persistence_postgres.mappings.chat import chats_table
from merechat.infrastructure.persistence_postgres.mappings.message import messages_table

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


def escape_like(term: str) -> str:
    """LIKE 패턴 문자(%, _)를 리터럴로 취급하도록 이스케이프."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


class ChatRepositorySQLA(ChatRepositoryPort):
    """Chat Repository SQLAlchemy 구현체."""

    def __init__(self, session_factory: "async_sessionmaker[AsyncSession]") -> None:
        """초기화.

        Args:
            session_factory: AsyncSession 팩토리
        """
        self._session_factory = session_factory

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator["AsyncSession"]:
        try:
            async with self._session_factory() as session, session.begin():
                yield session
        except SQLAlchemyError as e:
            logger.error(
                "store_operation_failed",
                extra={"operation": operation, "error": str(e)},
            )
            raise StoreError(operation) from e

    # ─────────────────────────────────────────────────────────────
    # Chat 관련
    # ─────────────────────────────────────────────────────────────

    async def list_chats_by_participant(self, identity: str) -> list[Chat]:
        stmt = (
            select(Chat)
            .where(chats_table.c.participants.contains([identity]))
            .order_by(chats_table.c.updated_at.desc(), chats_table.c.id)
        )
        async with self._transaction("list_chats_by_participant") as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def get_chat_by_id(self, chat_id: UUID) -> Chat | None:
        stmt = select(Chat).where(chats_table.c.id == chat_id)
        async with self._transaction("get_chat_by_id") as session:
            result = await session.execute(stmt)
            return result.scalar_one_or_none()

    async def get_chat_by_participant_key(self, participant_key: str) -> Chat | None:
        stmt = select(Chat).where(chats_table.c.participant_key == participant_key)
        async with self._transaction("get_chat_by_participant_key") as session:
            result = await session.execute(stmt)
            return result.scalar_one_or_none()

    async def get_or_create_chat(self, chat: Chat) -> Chat:
        """INSERT ... ON CONFLICT (participant_key) DO NOTHING 후 키로 재조회.

        동시 요청이 경합해도 먼저 커밋된 채팅 하나만 남는다.
        """
        insert_stmt = (
            pg_insert(chats_table)
            .values(
                id=chat.id,
                participants=chat.participants,
                participant_key=chat.participant_key,
                created_at=chat.created_at,
                updated_at=chat.updated_at,
            )
            .on_conflict_do_nothing(index_elements=["participant_key"])
        )
        select_stmt = select(Chat).where(chats_table.c.participant_key == chat.participant_key)

        async with self._transaction("get_or_create_chat") as session:
            await session.execute(insert_stmt)
            result = await session.execute(select_stmt)
            return result.scalar_one()

    async def touch_chat(self, chat_id: UUID, updated_at: datetime) -> bool:
        stmt = (
            update(chats_table)
            .where(chats_table.c.id == chat_id)
            .values(updated_at=updated_at)
        )
        async with self._transaction("touch_chat") as session:
            result = await session.execute(stmt)
            return result.rowcount > 0

    async def get_participants(self, chat_id: UUID) -> list[str] | None:
        stmt = select(chats_table.c.participants).where(chats_table.c.id == chat_id)
        async with self._transaction("get_participants") as session:
            result = await session.execute(stmt)
            participants = result.scalar_one_or_none()
        return list(participants) if participants is not None else None

    # ─────────────────────────────────────────────────────────────
    # Message 관련
    # ─────────────────────────────────────────────────────────────

    async def create_message(self, message: Message) -> Message:
        async with self._transaction("create_message") as session:
            session.add(message)
            await session.flush()
        return message

    async def get_messages_by_chat(
        self,
        chat_id: UUID,
        limit: int,
        skip: int,
        term: str | None = None,
    ) -> list[Message]:
        stmt = select(Message).where(messages_table.c.chat_id == chat_id)
        if term:
            stmt = stmt.where(
                messages_table.c.content.ilike(f"%{escape_like(term)}%", escape=LIKE_ESCAPE)
            )
        stmt = (
            stmt.order_by(messages_table.c.created_at.asc(), messages_table.c.id.asc())
            .offset(skip)
            .limit(limit)
        )
        async with self._transaction("get_messages_by_chat") as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def update_message_content(
        self,
        message_id: UUID,
        sender: str,
        content: str,
        edited_at: datetime,
    ) -> bool:
        stmt = (
            update(messages_table)
            .where(
                messages_table.c.id == message_id,
                messages_table.c.sender == sender,
            )
            .values(content=content, edited_at=edited_at)
        )
        async with self._transaction("update_message_content") as session:
            result = await session.execute(stmt)
            return result.rowcount > 0

    async def soft_delete_message(self, message_id: UUID, sender: str) -> bool:
        stmt = (
            update(messages_table)
            .where(
                messages_table.c.id == message_id,
                messages_table.c.sender == sender,
            )
            .values(deleted=True)
        )
        async with self._transaction("soft_delete_message") as session:
            result = await session.execute(stmt)
            return result.rowcount > 0

    async def add_reader(self, message_id: UUID, identity: str) -> bool:
        """집합 semantics의 array append.

        이미 포함된 경우에도 행은 매칭되므로 rowcount는 존재 여부를 뜻한다.
        """
        read_by = messages_table.c.read_by
        stmt = (
            update(messages_table)
            .where(messages_table.c.id == message_id)
            .values(
                read_by=case(
                    (read_by.contains([identity]), read_by),
                    else_=func.array_append(read_by, identity, type_=ARRAY(Text)),
                )
            )
        )
        async with self._transaction("add_reader") as session:
            result = await session.execute(stmt)
            return result.rowcount > 0

    async def count_unread_by_chat(
        self,
        identity: str,
        chat_ids: list[UUID],
    ) -> dict[UUID, int]:
        if not chat_ids:
            return {}

        stmt = (
            select(messages_table.c.chat_id, func.count(messages_table.c.id))
            .where(
                messages_table.c.chat_id.in_(chat_ids),
                not_(messages_table.c.read_by.contains([identity])),
            )
            .group_by(messages_table.c.chat_id)
        )
        async with self._transaction("count_unread_by_chat") as session:
            result = await session.execute(stmt)
            return {chat_id: count for chat_id, count in result.all()}
