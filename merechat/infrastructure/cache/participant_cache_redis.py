"""Participant Cache Redis Adapter.

채팅 참여자 목록 get-or-populate 캐시.
참여자 집합은 생성 후 변하지 않으므로 TTL 만료만으로 충분하다.

Key: merechat:participants:{chat_id}
Value: JSON array
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING
from uuid import UUID

from merechat.application.chat.ports.participant_cache import ParticipantCachePort

if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = logging.getLogger(__name__)

KEY_PREFIX = "merechat:participants"
DEFAULT_TTL_SECONDS = 300


def participants_key(chat_id: UUID) -> str:
    return f"{KEY_PREFIX}:{chat_id}"


class ParticipantCacheRedis(ParticipantCachePort):
    """Redis 기반 participant 캐시."""

    def __init__(self, redis: "Redis", ttl_seconds: int = DEFAULT_TTL_SECONDS) -> None:
        self._redis = redis
        self._ttl_seconds = ttl_seconds

    async def get(self, chat_id: UUID) -> list[str] | None:
        raw = await self._redis.get(participants_key(chat_id))
        if raw is None:
            return None
        try:
            value = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("participant_cache_corrupt", extra={"chat_id": str(chat_id)})
            return None
        if not isinstance(value, list):
            return None
        return [str(identity) for identity in value]

    async def set(self, chat_id: UUID, participants: list[str]) -> None:
        await self._redis.setex(
            participants_key(chat_id),
            self._ttl_seconds,
            json.dumps(participants),
        )
