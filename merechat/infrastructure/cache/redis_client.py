"""Redis 클라이언트 팩토리 (participant 캐시용)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import redis.asyncio as redis
from redis.asyncio import Redis
from redis.asyncio.retry import Retry
from redis.backoff import ExponentialBackoff

if TYPE_CHECKING:
    from merechat.setup.config import Settings

logger = logging.getLogger(__name__)


def create_cache_redis(settings: "Settings") -> Redis:
    """Retry/연결 풀 설정이 적용된 Redis 클라이언트.

    Retry policy:
    - ExponentialBackoff with base delay
    - Max retries on connection errors
    """
    retry = Retry(
        backoff=ExponentialBackoff(base=settings.redis_retry_base_delay),
        retries=settings.redis_retry_attempts,
    )

    client = redis.from_url(
        settings.redis_cache_url,
        decode_responses=True,
        health_check_interval=settings.redis_health_check_interval,
        retry=retry,
        retry_on_timeout=True,
        retry_on_error=[
            redis.ConnectionError,
            redis.TimeoutError,
            ConnectionResetError,
            ConnectionError,
        ],
        socket_keepalive=True,
        socket_connect_timeout=settings.redis_socket_connect_timeout,
        socket_timeout=settings.redis_socket_timeout,
    )
    logger.info(
        "Redis client initialized",
        extra={
            "retry_attempts": settings.redis_retry_attempts,
            "retry_base_delay": settings.redis_retry_base_delay,
            "socket_timeout": settings.redis_socket_timeout,
        },
    )
    return client


async def close_cache_redis(client: Redis) -> None:
    """Close Redis connection gracefully."""
    await client.aclose()
    logger.info("Redis client closed")
