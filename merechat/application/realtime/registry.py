"""Connection Registry - participant identity → 실시간 연결.

서버 인스턴스당 하나를 생성해 SessionHandler와 BroadcastRouter에 주입한다.

동시성:
- 쓰기(register/unregister/close_all)는 asyncio.Lock으로 직렬화
- 읽기(lookup/lookup_all)는 await 없이 한 번에 수행되므로
  쓰기 도중의 중간 상태를 관찰하지 않는다
- lookup_all은 스냅샷(복사본)을 반환하므로 순회 중 변경에 안전
"""

from __future__ import annotations

import asyncio
import logging

from merechat.application.realtime.ports.connection import ConnectionPort
from merechat.metrics import WS_CONNECTIONS_SUPERSEDED, WS_REGISTERED_IDENTITIES

logger = logging.getLogger(__name__)

# 서버 종료 시 close code (Going Away)
SHUTDOWN_CLOSE_CODE = 1001


class ConnectionRegistry:
    """identity당 하나의 live 연결 (last-writer-wins)."""

    def __init__(self) -> None:
        self._connections: dict[str, ConnectionPort] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._connections)

    def __contains__(self, identity: object) -> bool:
        return identity in self._connections

    async def register(self, identity: str, connection: ConnectionPort) -> None:
        """연결 등록. 같은 identity의 기존 항목은 덮어쓴다."""
        async with self._lock:
            previous = self._connections.get(identity)
            self._connections[identity] = connection
            WS_REGISTERED_IDENTITIES.set(len(self._connections))

        if previous is not None and previous is not connection:
            # 이전 연결은 자신의 핸들러가 정리한다
            WS_CONNECTIONS_SUPERSEDED.inc()
            logger.info("ws_connection_superseded", extra={"identity": identity})

    async def unregister(self, identity: str, connection: ConnectionPort | None = None) -> bool:
        """연결 해제.

        Args:
            identity: 대상 identity
            connection: 지정하면 현재 항목이 이 연결일 때만 제거
                (재접속으로 덮어쓴 새 연결을 지우지 않기 위함)

        Returns:
            제거 여부
        """
        async with self._lock:
            current = self._connections.get(identity)
            if current is None:
                return False
            if connection is not None and current is not connection:
                return False
            del self._connections[identity]
            WS_REGISTERED_IDENTITIES.set(len(self._connections))
            return True

    def lookup(self, identity: str) -> ConnectionPort | None:
        """단일 identity 조회."""
        return self._connections.get(identity)

    def lookup_all(self) -> dict[str, ConnectionPort]:
        """전체 항목 스냅샷."""
        return dict(self._connections)

    async def close_all(self, code: int = SHUTDOWN_CLOSE_CODE) -> int:
        """모든 연결 종료 (서버 종료 시 drain).

        Returns:
            종료 시도한 연결 수
        """
        async with self._lock:
            entries = list(self._connections.items())
            self._connections.clear()
            WS_REGISTERED_IDENTITIES.set(0)

        results = await asyncio.gather(
            *(connection.close(code) for _, connection in entries),
            return_exceptions=True,
        )
        for (identity, _), result in zip(entries, results):
            if isinstance(result, Exception):
                logger.warning(
                    "ws_close_failed",
                    extra={"identity": identity, "error": str(result)},
                )

        logger.info("ws_registry_drained", extra={"count": len(entries)})
        return len(entries)
