"""ParticipantCacheRedis Unit Tests."""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from merechat.infrastructure.cache.participant_cache_redis import (
    ParticipantCacheRedis,
    participants_key,
)


@pytest.fixture
def mock_redis() -> AsyncMock:
    redis = AsyncMock()
    redis.get = AsyncMock(return_value=None)
    redis.setex = AsyncMock()
    return redis


class TestParticipantCacheRedis:
    """ParticipantCacheRedis 테스트."""

    @pytest.mark.asyncio
    async def test_miss_returns_none(self, mock_redis: AsyncMock) -> None:
        cache = ParticipantCacheRedis(mock_redis)

        assert await cache.get(uuid4()) is None

    @pytest.mark.asyncio
    async def test_set_uses_ttl(self, mock_redis: AsyncMock) -> None:
        chat_id = uuid4()
        cache = ParticipantCacheRedis(mock_redis, ttl_seconds=60)

        await cache.set(chat_id, ["alice", "bob"])

        mock_redis.setex.assert_awaited_once_with(
            f"merechat:participants:{chat_id}", 60, '["alice", "bob"]'
        )

    @pytest.mark.asyncio
    async def test_hit_decodes_json(self, mock_redis: AsyncMock) -> None:
        mock_redis.get.return_value = '["alice", "bob"]'
        cache = ParticipantCacheRedis(mock_redis)

        assert await cache.get(uuid4()) == ["alice", "bob"]

    @pytest.mark.asyncio
    async def test_corrupt_value_is_miss(self, mock_redis: AsyncMock) -> None:
        mock_redis.get.return_value = "{not json"
        cache = ParticipantCacheRedis(mock_redis)

        assert await cache.get(uuid4()) is None


def test_participants_key() -> None:
    chat_id = uuid4()

    assert participants_key(chat_id) == f"merechat:participants:{chat_id}"
