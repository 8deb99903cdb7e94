"""Mark Read Command - 읽음 처리 (idempotent)."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from merechat.domain.exceptions.message import MessageNotFoundError

if TYPE_CHECKING:
    from merechat.application.chat.ports.chat_repository import ChatRepositoryPort


class MarkReadCommand:
    """read_by에 identity를 추가. 여러 번 호출해도 한 번만 기록된다."""

    def __init__(self, repository: "ChatRepositoryPort") -> None:
        self._repository = repository

    async def execute(self, message_id: UUID, identity: str) -> None:
        found = await self._repository.add_reader(message_id, identity)
        if not found:
            raise MessageNotFoundError(str(message_id))
