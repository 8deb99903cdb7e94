"""Chat Repository Port - 채팅/메시지 저장소 추상화.

Clean Architecture의 Port로서 Application Layer에서 정의.
Infrastructure Layer에서 구현.

각 메서드는 단일 문서(행) 단위로 원자적이라고 가정한다.
구현체는 저장소 실패를 StoreError로 변환해야 한다.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from merechat.domain.entities.chat import Chat
    from merechat.domain.entities.message import Message


class ChatRepositoryPort(ABC):
    """채팅 저장소 Port."""

    # ─────────────────────────────────────────────────────────────
    # Chat 관련
    # ─────────────────────────────────────────────────────────────

    @abstractmethod
    async def list_chats_by_participant(self, identity: str) -> list["Chat"]:
        """identity가 참여한 채팅 목록 (최근 활동 순)."""
        ...

    @abstractmethod
    async def get_chat_by_id(self, chat_id: UUID) -> "Chat | None":
        """채팅 조회."""
        ...

    @abstractmethod
    async def get_chat_by_participant_key(self, participant_key: str) -> "Chat | None":
        """참여자 집합이 정확히 일치하는 채팅 조회."""
        ...

    @abstractmethod
    async def get_or_create_chat(self, chat: "Chat") -> "Chat":
        """같은 참여자 집합의 채팅이 있으면 반환, 없으면 생성.

        동시 생성 시에도 하나의 채팅만 남아야 한다.
        """
        ...

    @abstractmethod
    async def touch_chat(self, chat_id: UUID, updated_at: datetime) -> bool:
        """채팅의 updated_at 갱신.

        Returns:
            대상 채팅 존재 여부
        """
        ...

    @abstractmethod
    async def get_participants(self, chat_id: UUID) -> list[str] | None:
        """채팅 참여자 목록. 채팅이 없으면 None."""
        ...

    # ─────────────────────────────────────────────────────────────
    # Message 관련
    # ─────────────────────────────────────────────────────────────

    @abstractmethod
    async def create_message(self, message: "Message") -> "Message":
        """새 메시지 저장."""
        ...

    @abstractmethod
    async def get_messages_by_chat(
        self,
        chat_id: UUID,
        limit: int,
        skip: int,
        term: str | None = None,
    ) -> list["Message"]:
        """채팅의 메시지 목록 (created_at 오름차순).

        Args:
            chat_id: 채팅 ID
            limit: 조회 개수
            skip: 건너뛸 개수
            term: 내용 부분 일치 검색어 (대소문자 무시)
        """
        ...

    @abstractmethod
    async def update_message_content(
        self,
        message_id: UUID,
        sender: str,
        content: str,
        edited_at: datetime,
    ) -> bool:
        """작성자 본인의 메시지 내용 수정.

        Returns:
            일치하는 메시지가 있었는지 여부
        """
        ...

    @abstractmethod
    async def soft_delete_message(self, message_id: UUID, sender: str) -> bool:
        """작성자 본인의 메시지 soft delete.

        Returns:
            일치하는 메시지가 있었는지 여부
        """
        ...

    @abstractmethod
    async def add_reader(self, message_id: UUID, identity: str) -> bool:
        """read_by에 identity 추가 (이미 있으면 변화 없음).

        Returns:
            메시지 존재 여부
        """
        ...

    @abstractmethod
    async def count_unread_by_chat(
        self,
        identity: str,
        chat_ids: list[UUID],
    ) -> dict[UUID, int]:
        """채팅별로 identity가 읽지 않은 메시지 수.

        메시지가 없는 채팅은 결과에 없을 수 있다.
        """
        ...


__all__ = ["ChatRepositoryPort"]
