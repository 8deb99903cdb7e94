"""Starlette WebSocket → ConnectionPort 어댑터."""

from __future__ import annotations

import logging
from typing import Any

from starlette.websockets import WebSocket, WebSocketDisconnect, WebSocketState

from merechat.application.common.exceptions.infrastructure import TransportError
from merechat.application.realtime.ports.connection import ConnectionPort

logger = logging.getLogger(__name__)


class WebSocketConnection(ConnectionPort):
    """단일 WebSocket 연결.

    전송 계층 예외(WebSocketDisconnect, RuntimeError)는 TransportError로 변환한다.
    """

    def __init__(self, websocket: WebSocket) -> None:
        self._websocket = websocket

    async def accept(self) -> None:
        await self._websocket.accept()

    async def receive_text(self) -> str:
        try:
            message = await self._websocket.receive()
        except (WebSocketDisconnect, RuntimeError) as e:
            raise TransportError(f"receive failed: {e}") from e

        if message["type"] == "websocket.disconnect":
            raise TransportError(f"disconnected: {message.get('code')}")

        text = message.get("text")
        if text is not None:
            return text
        data = message.get("bytes")
        if data is not None:
            # 바이너리 프레임은 UTF-8 JSON으로 취급, 디코딩 실패는 파서가 무시
            return data.decode("utf-8", errors="replace")
        return ""

    async def send_json(self, payload: dict[str, Any]) -> None:
        try:
            await self._websocket.send_json(payload)
        except (WebSocketDisconnect, RuntimeError, OSError) as e:
            raise TransportError(f"send failed: {e}") from e

    async def close(self, code: int = 1000) -> None:
        if self._websocket.application_state == WebSocketState.DISCONNECTED:
            return
        try:
            await self._websocket.close(code=code)
        except (WebSocketDisconnect, RuntimeError, OSError) as e:
            logger.debug("ws_close_ignored", extra={"code": code, "error": str(e)})
