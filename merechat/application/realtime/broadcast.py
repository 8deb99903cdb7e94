"""Broadcast Router - 이벤트를 live 연결 집합에 전달.

전달 정책 (fire-and-forget, at-most-once):
- 연결되지 않은 참여자는 건너뜀 (큐잉/재시도 없음)
- 각 peer 전송은 독립적으로 동시 수행 (asyncio.gather)
- peer별 전송 타임아웃 → 느린 peer가 다른 peer 전달을 막지 않음
- 전송 실패는 로그/메트릭만 남기고 호출자에게 전파하지 않음
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING, Any
from uuid import UUID

from merechat.application.common.exceptions.infrastructure import StoreError
from merechat.metrics import BROADCAST_DELIVERIES, PARTICIPANT_CACHE_LOOKUPS, WS_WRITE_LATENCY

if TYPE_CHECKING:
    from merechat.application.chat.ports.chat_repository import ChatRepositoryPort
    from merechat.application.chat.ports.participant_cache import ParticipantCachePort
    from merechat.application.realtime.events import OutboundEventBase
    from merechat.application.realtime.ports.connection import ConnectionPort
    from merechat.application.realtime.registry import ConnectionRegistry

logger = logging.getLogger(__name__)

DEFAULT_SEND_TIMEOUT_SECONDS = 5.0


class BroadcastRouter:
    """채팅 단위 / 전역 브로드캐스트.

    사용법:
        router = BroadcastRouter(registry, repository, participant_cache)
        await router.broadcast_to_chat(chat_id, TypingEvent(...))
    """

    def __init__(
        self,
        registry: "ConnectionRegistry",
        repository: "ChatRepositoryPort",
        participant_cache: "ParticipantCachePort | None" = None,
        send_timeout_seconds: float = DEFAULT_SEND_TIMEOUT_SECONDS,
    ) -> None:
        self._registry = registry
        self._repository = repository
        self._participant_cache = participant_cache
        self._send_timeout_seconds = send_timeout_seconds

    async def broadcast_to_chat(
        self,
        chat_id: UUID,
        event: "OutboundEventBase",
        exclude: str | None = None,
    ) -> int:
        """채팅 참여자 중 연결된 peer에게 전달.

        채팅을 찾을 수 없으면 아무것도 하지 않는다.

        Args:
            chat_id: 채팅 ID
            event: outbound 이벤트
            exclude: 제외할 identity (예: typing 발신자)

        Returns:
            전달 성공 수
        """
        participants = await self._resolve_participants(chat_id)
        if participants is None:
            logger.debug("broadcast_chat_not_found", extra={"chat_id": str(chat_id)})
            return 0

        targets: list[tuple[str, "ConnectionPort"]] = []
        for identity in participants:
            if exclude is not None and identity == exclude:
                continue
            connection = self._registry.lookup(identity)
            if connection is None:
                BROADCAST_DELIVERIES.labels(scope="chat", result="offline").inc()
                continue
            targets.append((identity, connection))

        return await self._deliver(targets, event.to_payload(), scope="chat")

    async def broadcast_global(self, event: "OutboundEventBase") -> int:
        """등록된 모든 연결에 전달 (presence 용)."""
        targets = list(self._registry.lookup_all().items())
        return await self._deliver(targets, event.to_payload(), scope="global")

    async def _deliver(
        self,
        targets: list[tuple[str, "ConnectionPort"]],
        payload: dict[str, Any],
        scope: str,
    ) -> int:
        if not targets:
            return 0

        results = await asyncio.gather(
            *(self._safe_send(identity, connection, payload, scope) for identity, connection in targets)
        )
        delivered = sum(1 for ok in results if ok)

        logger.debug(
            "broadcast_completed",
            extra={
                "scope": scope,
                "event_type": payload.get("type"),
                "targets": len(targets),
                "delivered": delivered,
            },
        )
        return delivered

    async def _safe_send(
        self,
        identity: str,
        connection: "ConnectionPort",
        payload: dict[str, Any],
        scope: str,
    ) -> bool:
        """단일 peer 전송. 실패는 격리된다."""
        start = time.perf_counter()
        try:
            await asyncio.wait_for(
                connection.send_json(payload),
                timeout=self._send_timeout_seconds,
            )
        except asyncio.TimeoutError:
            BROADCAST_DELIVERIES.labels(scope=scope, result="timeout").inc()
            logger.warning(
                "broadcast_send_timeout",
                extra={"identity": identity, "scope": scope, "timeout": self._send_timeout_seconds},
            )
            return False
        except Exception as e:
            BROADCAST_DELIVERIES.labels(scope=scope, result="failed").inc()
            logger.warning(
                "broadcast_send_failed",
                extra={"identity": identity, "scope": scope, "error": str(e)},
            )
            return False

        WS_WRITE_LATENCY.observe(time.perf_counter() - start)
        BROADCAST_DELIVERIES.labels(scope=scope, result="delivered").inc()
        return True

    async def _resolve_participants(self, chat_id: UUID) -> list[str] | None:
        """참여자 조회 (캐시 → 저장소, get-or-populate).

        캐시 오류는 무시하고 저장소로 fallback.
        저장소 오류는 채팅 없음과 같이 취급 (best-effort).
        """
        if self._participant_cache is not None:
            try:
                cached = await self._participant_cache.get(chat_id)
            except Exception as e:
                PARTICIPANT_CACHE_LOOKUPS.labels(result="error").inc()
                logger.warning(
                    "participant_cache_get_failed",
                    extra={"chat_id": str(chat_id), "error": str(e)},
                )
                cached = None
            else:
                PARTICIPANT_CACHE_LOOKUPS.labels(result="hit" if cached is not None else "miss").inc()
            if cached is not None:
                return cached

        try:
            participants = await self._repository.get_participants(chat_id)
        except StoreError as e:
            logger.warning(
                "broadcast_participants_lookup_failed",
                extra={"chat_id": str(chat_id), "error": e.message},
            )
            return None

        if participants is None:
            return None

        if self._participant_cache is not None:
            try:
                await self._participant_cache.set(chat_id, participants)
            except Exception as e:
                logger.warning(
                    "participant_cache_set_failed",
                    extra={"chat_id": str(chat_id), "error": str(e)},
                )

        return participants
