"""Start Chat Command - 채팅 시작 (idempotent).

같은 참여자 집합(순서 무관, 정확히 일치)의 채팅이 있으면 그것을 반환한다.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from merechat.application.common.exceptions.validation import ParticipantsMustIncludeSelfError
from merechat.domain.entities.chat import Chat

if TYPE_CHECKING:
    from merechat.application.chat.ports.chat_repository import ChatRepositoryPort

logger = logging.getLogger(__name__)


class StartChatCommand:
    """채팅 시작 Command."""

    def __init__(self, repository: "ChatRepositoryPort") -> None:
        self._repository = repository

    async def execute(self, caller: str, participants: list[str]) -> Chat:
        """채팅 조회 또는 생성.

        Raises:
            ParticipantsMustIncludeSelfError: 요청자가 참여자 목록에 없음
            InvalidParticipantsError: 서로 다른 참여자가 2명 미만
        """
        if caller not in participants:
            raise ParticipantsMustIncludeSelfError()

        candidate = Chat(participants=participants)

        existing = await self._repository.get_chat_by_participant_key(candidate.participant_key)
        if existing is not None:
            return existing

        chat = await self._repository.get_or_create_chat(candidate)

        logger.info(
            "chat_started",
            extra={
                "chat_id": str(chat.id),
                "caller": caller,
                "participant_count": len(chat.participants),
                "is_new": chat.id == candidate.id,
            },
        )
        return chat
