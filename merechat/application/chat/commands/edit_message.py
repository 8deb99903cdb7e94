"""Edit / Delete Message Commands.

작성자 본인만 수정/삭제 가능.
대상이 없거나 권한이 없으면 구분 없이 MessageNotFoundError.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from uuid import UUID

from merechat.application.common.exceptions.validation import MessageRequiredError
from merechat.domain.clock import utcnow
from merechat.domain.exceptions.message import MessageNotFoundError

if TYPE_CHECKING:
    from merechat.application.chat.ports.chat_repository import ChatRepositoryPort

logger = logging.getLogger(__name__)


class EditMessageCommand:
    """메시지 수정 Command. created_at은 유지, edited_at 갱신."""

    def __init__(self, repository: "ChatRepositoryPort") -> None:
        self._repository = repository

    async def execute(self, message_id: UUID, editor: str, content: str) -> None:
        if not content:
            raise MessageRequiredError()

        updated = await self._repository.update_message_content(
            message_id=message_id,
            sender=editor,
            content=content,
            edited_at=utcnow(),
        )
        if not updated:
            raise MessageNotFoundError(str(message_id))

        logger.info("message_edited", extra={"message_id": str(message_id), "editor": editor})


class DeleteMessageCommand:
    """메시지 삭제 Command (soft delete, 내용 보존)."""

    def __init__(self, repository: "ChatRepositoryPort") -> None:
        self._repository = repository

    async def execute(self, message_id: UUID, actor: str) -> None:
        deleted = await self._repository.soft_delete_message(message_id, actor)
        if not deleted:
            raise MessageNotFoundError(str(message_id))

        logger.info("message_deleted", extra={"message_id": str(message_id), "actor": actor})
