"""Send Message Command - 저장 후 브로드캐스트.

REST 전송과 WebSocket message 이벤트가 공유한다.
저장이 실패하면 브로드캐스트하지 않는다.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from uuid import UUID

from merechat.application.chat.dto import MessageView
from merechat.application.realtime.events import MessageEvent

if TYPE_CHECKING:
    from merechat.application.chat.commands.persist_message import PersistMessageCommand
    from merechat.application.realtime.broadcast import BroadcastRouter
    from merechat.domain.entities.message import Message

logger = logging.getLogger(__name__)


class SendMessageCommand:
    """메시지 전송 Command."""

    def __init__(
        self,
        persist: "PersistMessageCommand",
        router: "BroadcastRouter",
    ) -> None:
        self._persist = persist
        self._router = router

    async def execute(self, chat_id: UUID, sender: str, content: str) -> "Message":
        message = await self._persist.execute(chat_id, sender, content)

        event = MessageEvent(chat_id=str(chat_id), message=MessageView.from_entity(message))
        delivered = await self._router.broadcast_to_chat(chat_id, event)

        logger.info(
            "message_sent",
            extra={
                "chat_id": str(chat_id),
                "message_id": str(message.id),
                "delivered": delivered,
            },
        )
        return message
