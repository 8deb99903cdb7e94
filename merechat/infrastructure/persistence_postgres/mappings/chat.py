"""Chat ORM Mapping - Imperative mapping for merechat.chats table."""

from __future__ import annotations

from sqlalchemy import Column, DateTime, Index, Table, Text, func
from sqlalchemy.dialects.postgresql import ARRAY, UUID

from merechat.domain.entities.chat import Chat
from merechat.infrastructure.persistence_postgres.constants import CHATS_TABLE
from merechat.infrastructure.persistence_postgres.registry import (
    mapper_registry,
    metadata,
)

chats_table = Table(
    CHATS_TABLE,
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("participants", ARRAY(Text), nullable=False),
    # 참여자 집합 정규 키 - 같은 집합의 채팅은 하나만 존재
    Column("participant_key", Text, nullable=False, unique=True),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column("updated_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Index("ix_chats_participants", "participants", postgresql_using="gin"),
)


def start_chat_mapper() -> None:
    """Chat 엔티티를 merechat.chats 테이블에 매핑합니다."""
    if hasattr(Chat, "__mapper__"):
        return

    mapper_registry.map_imperatively(
        Chat,
        chats_table,
        properties={
            "id": chats_table.c.id,
            "participants": chats_table.c.participants,
            "participant_key": chats_table.c.participant_key,
            "created_at": chats_table.c.created_at,
            "updated_at": chats_table.c.updated_at,
        },
    )
