"""Message Entity - 메시지 도메인 엔티티.

각 채팅 내의 개별 메시지.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from merechat.domain.clock import utcnow


@dataclass
class Message:
    """메시지 엔티티.

    Attributes:
        chat_id: 채팅 ID (FK)
        sender: 작성자 identity
        content: 메시지 내용
        id: 메시지 ID (UUID)
        created_at: 저장 시간 (불변)
        edited_at: 마지막 수정 시간
        deleted: soft delete 여부
        read_by: 읽음 확인한 identity 목록 (집합 semantics)
    """

    chat_id: UUID
    sender: str
    content: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    edited_at: datetime | None = None
    deleted: bool = False
    read_by: list[str] = field(default_factory=list)

    def edit(self, content: str, at: datetime | None = None) -> None:
        """내용 수정. created_at은 변경하지 않는다."""
        self.content = content
        self.edited_at = at or utcnow()

    def soft_delete(self) -> None:
        """Soft delete 처리. 내용은 보존."""
        self.deleted = True

    def mark_read(self, identity: str) -> bool:
        """읽음 처리 (idempotent).

        Returns:
            새로 추가되었으면 True
        """
        if identity in self.read_by:
            return False
        self.read_by.append(identity)
        return True

    def is_read_by(self, identity: str) -> bool:
        return identity in self.read_by
