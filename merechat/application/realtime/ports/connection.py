"""Connection Port - 양방향 실시간 연결 추상화.

WebSocket 구현체는 presentation 계층에 있다.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class ConnectionPort(ABC):
    """단일 클라이언트와의 양방향 연결.

    구현체는 전송 계층 실패를 TransportError로 변환해야 한다.
    """

    @abstractmethod
    async def accept(self) -> None:
        """업그레이드 수락."""
        ...

    @abstractmethod
    async def receive_text(self) -> str:
        """다음 inbound 프레임.

        Raises:
            TransportError: 연결 종료 또는 읽기 실패
        """
        ...

    @abstractmethod
    async def send_json(self, payload: dict[str, Any]) -> None:
        """구조화된 payload 전송.

        Raises:
            TransportError: 쓰기 실패
        """
        ...

    @abstractmethod
    async def close(self, code: int = 1000) -> None:
        """연결 해제. 이미 닫힌 연결이면 무시."""
        ...
