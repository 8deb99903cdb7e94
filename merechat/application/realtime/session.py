"""Session Handler - 단일 WebSocket 연결의 생명주기.

상태 전이:
    CONNECTING → REGISTERED → ACTIVE → CLOSING → TERMINAL

- CONNECTING: 업그레이드 수락 (실패 시 등록 없이 TERMINAL)
- REGISTERED: registry에 identity 등록
- ACTIVE: 프레임을 순서대로 읽고 type별로 처리
- CLOSING: finally에서 정확히 한 번 실행 (unregister → close)
- TERMINAL: handle() 반환

이벤트 단위 오류(파싱 실패, 검증, not found, 저장소 오류)는 로그만 남기고
루프를 계속한다. 클라이언트에 error 프레임을 보내지 않는다.
"""

from __future__ import annotations

import asyncio
import enum
import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from merechat.application.common.exceptions.base import ApplicationError
from merechat.application.common.exceptions.infrastructure import TransportError
from merechat.application.common.ids import parse_id
from merechat.application.realtime.events import (
    InboundMessage,
    InboundPresence,
    InboundTyping,
    PresenceEvent,
    TypingEvent,
    parse_inbound_frame,
)
from merechat.domain.exceptions.base import DomainError
from merechat.metrics import (
    WS_CONNECTION_DURATION,
    WS_CONNECTIONS_ACTIVE,
    WS_CONNECTIONS_CLOSED,
    WS_CONNECTIONS_OPENED,
    WS_EVENTS_RECEIVED,
)

if TYPE_CHECKING:
    from merechat.application.chat.commands.send_message import SendMessageCommand
    from merechat.application.realtime.broadcast import BroadcastRouter
    from merechat.application.realtime.ports.connection import ConnectionPort
    from merechat.application.realtime.registry import ConnectionRegistry

logger = logging.getLogger(__name__)


class SessionState(str, enum.Enum):
    CONNECTING = "connecting"
    REGISTERED = "registered"
    ACTIVE = "active"
    CLOSING = "closing"
    TERMINAL = "terminal"


@dataclass
class ChatSession:
    """세션 상태 (handle() 반환값)."""

    identity: str
    connection: "ConnectionPort"
    state: SessionState = SessionState.CONNECTING
    events_handled: int = 0
    close_reason: str | None = None
    opened_at: float = field(default_factory=time.monotonic)


class SessionHandler:
    """WebSocket 세션 핸들러.

    Args:
        registry: 연결 레지스트리
        router: 브로드캐스트 라우터
        send_message: 메시지 저장 + 브로드캐스트 Command
        idle_timeout_seconds: 수신 대기 제한 (None이면 무제한)
        typing_exclude_sender: typing 이벤트를 발신자에게 되돌려 보내지 않음
    """

    def __init__(
        self,
        registry: "ConnectionRegistry",
        router: "BroadcastRouter",
        send_message: "SendMessageCommand",
        idle_timeout_seconds: float | None = None,
        typing_exclude_sender: bool = False,
    ) -> None:
        self._registry = registry
        self._router = router
        self._send_message = send_message
        self._idle_timeout_seconds = idle_timeout_seconds
        self._typing_exclude_sender = typing_exclude_sender

    async def handle(self, identity: str, connection: "ConnectionPort") -> ChatSession:
        session = ChatSession(identity=identity, connection=connection)

        try:
            await connection.accept()
        except Exception as e:
            logger.warning("ws_upgrade_failed", extra={"identity": identity, "error": str(e)})
            session.state = SessionState.TERMINAL
            session.close_reason = "upgrade_failed"
            return session

        await self._registry.register(identity, connection)
        session.state = SessionState.REGISTERED
        WS_CONNECTIONS_OPENED.inc()
        WS_CONNECTIONS_ACTIVE.inc()
        logger.info("ws_connected", extra={"identity": identity})

        try:
            session.state = SessionState.ACTIVE
            session.close_reason = await self._read_loop(session)
        except Exception:
            session.close_reason = "error"
            logger.exception("ws_session_error", extra={"identity": identity})
            raise
        finally:
            session.state = SessionState.CLOSING
            await self._registry.unregister(identity, connection)
            try:
                await connection.close()
            except Exception as e:
                logger.debug("ws_close_ignored", extra={"identity": identity, "error": str(e)})

            duration = time.monotonic() - session.opened_at
            WS_CONNECTIONS_ACTIVE.dec()
            WS_CONNECTIONS_CLOSED.labels(reason=session.close_reason or "error").inc()
            WS_CONNECTION_DURATION.observe(duration)
            session.state = SessionState.TERMINAL
            logger.info(
                "ws_disconnected",
                extra={
                    "identity": identity,
                    "reason": session.close_reason,
                    "events_handled": session.events_handled,
                    "duration_seconds": round(duration, 3),
                },
            )

        return session

    async def _read_loop(self, session: ChatSession) -> str:
        """프레임 수신 루프. 종료 사유를 반환."""
        while True:
            try:
                if self._idle_timeout_seconds is None:
                    raw = await session.connection.receive_text()
                else:
                    raw = await asyncio.wait_for(
                        session.connection.receive_text(),
                        timeout=self._idle_timeout_seconds,
                    )
            except asyncio.TimeoutError:
                logger.info("ws_idle_timeout", extra={"identity": session.identity})
                return "idle_timeout"
            except TransportError:
                return "client_disconnect"

            await self._dispatch(session, raw)

    async def _dispatch(self, session: ChatSession, raw: str) -> None:
        event = parse_inbound_frame(raw)
        if event is None:
            WS_EVENTS_RECEIVED.labels(type="unknown", result="ignored").inc()
            logger.debug("ws_frame_ignored", extra={"identity": session.identity})
            return

        try:
            if isinstance(event, InboundMessage):
                await self._on_message(session, event)
            elif isinstance(event, InboundTyping):
                await self._on_typing(session, event)
            elif isinstance(event, InboundPresence):
                await self._on_presence(session, event)
        except (ApplicationError, DomainError) as e:
            WS_EVENTS_RECEIVED.labels(type=event.type, result="rejected").inc()
            logger.info(
                "ws_event_rejected",
                extra={
                    "identity": session.identity,
                    "event_type": event.type,
                    "error": e.message,
                    "error_type": type(e).__name__,
                },
            )
            return

        session.events_handled += 1
        WS_EVENTS_RECEIVED.labels(type=event.type, result="handled").inc()

    async def _on_message(self, session: ChatSession, event: InboundMessage) -> None:
        chat_id = parse_id(event.chat_id, "chatId")
        await self._send_message.execute(chat_id, session.identity, event.content)

    async def _on_typing(self, session: ChatSession, event: InboundTyping) -> None:
        chat_id = parse_id(event.chat_id, "chatId")
        outbound = TypingEvent(sender=session.identity, chat_id=str(chat_id))
        exclude = session.identity if self._typing_exclude_sender else None
        await self._router.broadcast_to_chat(chat_id, outbound, exclude=exclude)

    async def _on_presence(self, session: ChatSession, event: InboundPresence) -> None:
        outbound = PresenceEvent(sender=session.identity, online=event.online)
        await self._router.broadcast_global(outbound)
