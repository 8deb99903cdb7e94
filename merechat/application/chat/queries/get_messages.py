"""Message 조회 Queries.

정렬: created_at 오름차순 (동률이면 id).
soft delete된 메시지도 포함한다 (deleted 플래그로 구분).
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from merechat.application.chat.access import load_member_chat
from merechat.application.chat.queries.pagination import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    normalize_page,
)

if TYPE_CHECKING:
    from merechat.application.chat.ports.chat_repository import ChatRepositoryPort
    from merechat.domain.entities.message import Message


class GetMessagesQuery:
    """채팅 메시지 목록."""

    def __init__(
        self,
        repository: "ChatRepositoryPort",
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int = MAX_LIMIT,
    ) -> None:
        self._repository = repository
        self._default_limit = default_limit
        self._max_limit = max_limit

    async def execute(
        self,
        chat_id: UUID,
        identity: str,
        limit: str | int | None = None,
        skip: str | int | None = None,
    ) -> list["Message"]:
        await load_member_chat(self._repository, chat_id, identity)
        page = normalize_page(limit, skip, self._default_limit, self._max_limit)
        return await self._repository.get_messages_by_chat(chat_id, page.limit, page.skip)


class SearchMessagesQuery:
    """메시지 내용 검색 (대소문자 무시 부분 일치).

    빈 검색어는 전체 목록과 같다.
    """

    def __init__(
        self,
        repository: "ChatRepositoryPort",
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int = MAX_LIMIT,
    ) -> None:
        self._repository = repository
        self._default_limit = default_limit
        self._max_limit = max_limit

    async def execute(
        self,
        chat_id: UUID,
        identity: str,
        term: str | None,
        limit: str | int | None = None,
        skip: str | int | None = None,
    ) -> list["Message"]:
        await load_member_chat(self._repository, chat_id, identity)
        page = normalize_page(limit, skip, self._default_limit, self._max_limit)
        return await self._repository.get_messages_by_chat(
            chat_id,
            page.limit,
            page.skip,
            term=term or None,
        )
