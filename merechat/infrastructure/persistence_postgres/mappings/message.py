"""Message ORM Mapping - Imperative mapping for merechat.messages table."""

from __future__ import annotations

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Table, Text, func
from sqlalchemy.dialects.postgresql import ARRAY, UUID

from merechat.domain.entities.message import Message
from merechat.infrastructure.persistence_postgres.constants import MESSAGES_TABLE
from merechat.infrastructure.persistence_postgres.mappings.chat import chats_table
from merechat.infrastructure.persistence_postgres.registry import (
    mapper_registry,
    metadata,
)

messages_table = Table(
    MESSAGES_TABLE,
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("chat_id", UUID(as_uuid=True), ForeignKey(chats_table.c.id), nullable=False),
    Column("sender", Text, nullable=False),
    Column("content", Text, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column("edited_at", DateTime(timezone=True), nullable=True),
    Column("deleted", Boolean, nullable=False, server_default="false"),
    Column("read_by", ARRAY(Text), nullable=False, server_default="{}"),
    Index("ix_messages_chat_created", "chat_id", "created_at", "id"),
)


def start_message_mapper() -> None:
    """Message 엔티티를 merechat.messages 테이블에 매핑합니다."""
    if hasattr(Message, "__mapper__"):
        return

    mapper_registry.map_imperatively(
        Message,
        messages_table,
        properties={
            "id": messages_table.c.id,
            "chat_id": messages_table.c.chat_id,
            "sender": messages_table.c.sender,
            "content": messages_table.c.content,
            "created_at": messages_table.c.created_at,
            "edited_at": messages_table.c.edited_at,
            "deleted": messages_table.c.deleted,
            "read_by": messages_table.c.read_by,
        },
    )
