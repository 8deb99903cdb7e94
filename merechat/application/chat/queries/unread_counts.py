"""Unread Counts Query - 채팅별 안 읽은 메시지 수."""

from __future__ import annotations

from typing import TYPE_CHECKING

from merechat.application.chat.dto import UnreadCountView

if TYPE_CHECKING:
    from merechat.application.chat.ports.chat_repository import ChatRepositoryPort


class UnreadCountsQuery:
    """identity가 참여한 모든 채팅에 대해 {chatId, count}.

    안 읽은 메시지가 없는 채팅도 count=0으로 포함한다.
    """

    def __init__(self, repository: "ChatRepositoryPort") -> None:
        self._repository = repository

    async def execute(self, identity: str) -> list[UnreadCountView]:
        chats = await self._repository.list_chats_by_participant(identity)
        if not chats:
            return []

        counts = await self._repository.count_unread_by_chat(identity, [chat.id for chat in chats])
        return [
            UnreadCountView(chat_id=str(chat.id), count=counts.get(chat.id, 0))
            for chat in chats
        ]
