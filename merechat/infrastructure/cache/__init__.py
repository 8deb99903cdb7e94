from merechat.infrastructure.cache.participant_cache_redis import ParticipantCacheRedis
from merechat.infrastructure.cache.redis_client import close_cache_redis, create_cache_redis

__all__ = ["ParticipantCacheRedis", "close_cache_redis", "create_cache_redis"]
