"""Chat 응답 DTO.

REST 응답과 WebSocket outbound 이벤트가 같은 직렬화 형식을 공유한다.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from merechat.application.common.schema import CamelModel
from merechat.domain.entities.chat import Chat
from merechat.domain.entities.message import Message


class ChatView(CamelModel):
    """채팅."""

    id: str = Field(description="채팅 ID")
    participants: list[str] = Field(description="참여자 목록")
    created_at: datetime = Field(description="생성 시각")
    updated_at: datetime = Field(description="마지막 활동 시각")

    @classmethod
    def from_entity(cls, chat: Chat) -> "ChatView":
        return cls(
            id=str(chat.id),
            participants=list(chat.participants),
            created_at=chat.created_at,
            updated_at=chat.updated_at,
        )


class MessageView(CamelModel):
    """메시지."""

    id: str = Field(description="메시지 ID")
    chat_id: str = Field(description="채팅 ID")
    sender: str = Field(description="작성자")
    content: str = Field(description="내용")
    created_at: datetime = Field(description="생성 시각")
    edited_at: datetime | None = Field(default=None, description="수정 시각")
    deleted: bool = Field(default=False, description="삭제 여부 (soft delete)")
    read_by: list[str] = Field(default_factory=list, description="읽음 확인한 참여자")

    @classmethod
    def from_entity(cls, message: Message) -> "MessageView":
        return cls(
            id=str(message.id),
            chat_id=str(message.chat_id),
            sender=message.sender,
            content=message.content,
            created_at=message.created_at,
            edited_at=message.edited_at,
            deleted=message.deleted,
            read_by=list(message.read_by or []),
        )


class UnreadCountView(CamelModel):
    """채팅별 안 읽은 메시지 수."""

    chat_id: str
    count: int


class AttachmentView(CamelModel):
    """업로드된 첨부 파일 descriptor."""

    id: str
    url: str
    type: str
