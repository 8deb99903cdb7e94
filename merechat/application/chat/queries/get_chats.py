"""Chat 조회 Queries."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from merechat.application.chat.access import load_member_chat

if TYPE_CHECKING:
    from merechat.application.chat.ports.chat_repository import ChatRepositoryPort
    from merechat.domain.entities.chat import Chat


class ListChatsQuery:
    """identity가 참여한 채팅 목록 (최근 활동 순). 비어 있으면 빈 리스트."""

    def __init__(self, repository: "ChatRepositoryPort") -> None:
        self._repository = repository

    async def execute(self, identity: str) -> list["Chat"]:
        chats = await self._repository.list_chats_by_participant(identity)
        return list(chats or [])


class GetChatQuery:
    """채팅 단건 조회 (참여자만)."""

    def __init__(self, repository: "ChatRepositoryPort") -> None:
        self._repository = repository

    async def execute(self, chat_id: UUID, identity: str) -> "Chat":
        return await load_member_chat(self._repository, chat_id, identity)
