"""Persist Message Command - 메시지 검증 및 저장.

순서:
1. 내용 검증 (저장소 호출 전, fail fast)
2. 부모 채팅 존재/참여자 확인
3. 메시지 저장
4. 부모 채팅 updated_at 갱신 (best-effort, 실패해도 성공 반환)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from uuid import UUID

from merechat.application.chat.access import load_member_chat
from merechat.application.common.exceptions.infrastructure import StoreError
from merechat.application.common.exceptions.validation import MessageRequiredError
from merechat.domain.clock import utcnow
from merechat.domain.entities.message import Message

if TYPE_CHECKING:
    from merechat.application.chat.ports.chat_repository import ChatRepositoryPort

logger = logging.getLogger(__name__)


class PersistMessageCommand:
    """메시지 저장 Command."""

    def __init__(self, repository: "ChatRepositoryPort") -> None:
        self._repository = repository

    async def execute(self, chat_id: UUID, sender: str, content: str) -> Message:
        """메시지 저장.

        Raises:
            MessageRequiredError: 내용이 비어 있음
            ChatNotFoundError: 채팅이 없거나 sender가 참여자가 아님
            StoreError: 메시지 저장 실패
        """
        if not content:
            raise MessageRequiredError()

        await load_member_chat(self._repository, chat_id, sender)

        message = Message(
            chat_id=chat_id,
            sender=sender,
            content=content,
            created_at=utcnow(),
        )
        saved = await self._repository.create_message(message)

        # 채팅 활동 시간 갱신은 부수 효과 - 실패해도 메시지 저장은 성공
        try:
            await self._repository.touch_chat(chat_id, saved.created_at)
        except StoreError as e:
            logger.warning(
                "chat_touch_failed",
                extra={"chat_id": str(chat_id), "message_id": str(saved.id), "error": e.message},
            )

        logger.info(
            "message_persisted",
            extra={"chat_id": str(chat_id), "message_id": str(saved.id), "sender": sender},
        )
        return saved
