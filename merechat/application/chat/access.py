"""채팅 접근 확인."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from merechat.domain.exceptions.chat import ChatNotFoundError

if TYPE_CHECKING:
    from merechat.application.chat.ports.chat_repository import ChatRepositoryPort
    from merechat.domain.entities.chat import Chat


async def load_member_chat(
    repository: "ChatRepositoryPort",
    chat_id: UUID,
    identity: str,
) -> "Chat":
    """identity가 참여한 채팅 조회.

    채팅이 없는 경우와 참여자가 아닌 경우를 구분하지 않는다.

    Raises:
        ChatNotFoundError: 채팅이 없거나 참여자가 아님
    """
    chat = await repository.get_chat_by_id(chat_id)
    if chat is None or not chat.has_participant(identity):
        raise ChatNotFoundError(str(chat_id))
    return chat
