"""WebSocket Controller - /ws/chat.

identity는 X-User-ID 헤더로 전달된다. 없으면 업그레이드 없이 1008로 종료.
연결 이후의 생명주기는 SessionHandler가 담당한다.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket, status

from merechat.presentation.http.auth import USER_ID_HEADER, extract_identity
from merechat.presentation.websocket.connection import WebSocketConnection
from merechat.setup.dependencies import SessionHandlerDep

router = APIRouter(tags=["websocket"])
logger = logging.getLogger(__name__)


@router.websocket("/ws/chat")
async def chat_websocket(websocket: WebSocket, handler: SessionHandlerDep) -> None:
    identity = extract_identity(websocket.headers.get(USER_ID_HEADER))
    if identity is None:
        logger.info("ws_rejected_no_identity", extra={"client": str(websocket.client)})
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await handler.handle(identity, WebSocketConnection(websocket))
