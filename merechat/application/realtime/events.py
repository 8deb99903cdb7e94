"""WebSocket 이벤트 스키마.

Inbound (Client → Server):
    {"type": "message", "chatId": "...", "content": "..."}
    {"type": "typing", "chatId": "..."}
    {"type": "presence", "online": true}

Outbound (Server → Client):
    {"type": "message", "chatId": "...", "message": {...}}
    {"type": "typing", "from": "...", "chatId": "..."}
    {"type": "presence", "from": "...", "online": true}
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from merechat.application.chat.dto import MessageView
from merechat.application.common.schema import CamelModel

# ─────────────────────────────────────────────────────────────────────────────
# Inbound
# ─────────────────────────────────────────────────────────────────────────────


class InboundMessage(CamelModel):
    """메시지 전송 요청."""

    type: Literal["message"]
    chat_id: str = ""
    content: str = ""


class InboundTyping(CamelModel):
    """입력 중 표시."""

    type: Literal["typing"]
    chat_id: str = ""


class InboundPresence(CamelModel):
    """온라인 상태 변경."""

    type: Literal["presence"]
    online: bool = False


InboundEvent = Annotated[
    Union[InboundMessage, InboundTyping, InboundPresence],
    Field(discriminator="type"),
]

_inbound_adapter: TypeAdapter[InboundEvent] = TypeAdapter(InboundEvent)


def parse_inbound_frame(raw: str | bytes) -> InboundMessage | InboundTyping | InboundPresence | None:
    """inbound 프레임 디코딩.

    JSON 파싱 실패, 알 수 없는 type, 필드 타입 오류는 모두 None.
    """
    try:
        return _inbound_adapter.validate_json(raw)
    except PydanticValidationError:
        return None


# ─────────────────────────────────────────────────────────────────────────────
# Outbound
# ─────────────────────────────────────────────────────────────────────────────


class OutboundEventBase(CamelModel):
    """Outbound 이벤트 공통."""

    def to_payload(self) -> dict[str, Any]:
        """전송용 JSON dict."""
        return self.model_dump(mode="json", by_alias=True)


class MessageEvent(OutboundEventBase):
    """저장된 메시지 전체."""

    type: Literal["message"] = "message"
    chat_id: str
    message: MessageView


class TypingEvent(OutboundEventBase):
    """입력 중 표시."""

    type: Literal["typing"] = "typing"
    sender: str = Field(alias="from")
    chat_id: str


class PresenceEvent(OutboundEventBase):
    """온라인 상태."""

    type: Literal["presence"] = "presence"
    sender: str = Field(alias="from")
    online: bool


OutboundEvent = Union[MessageEvent, TypingEvent, PresenceEvent]

__all__ = [
    "InboundEvent",
    "InboundMessage",
    "InboundPresence",
    "InboundTyping",
    "MessageEvent",
    "OutboundEvent",
    "OutboundEventBase",
    "PresenceEvent",
    "TypingEvent",
    "parse_inbound_frame",
]
