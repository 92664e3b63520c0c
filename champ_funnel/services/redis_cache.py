"""
Redis Cache - Champ Funnel
champ_funnel/services/redis_cache.py

Pydantic-aware Redis wrapper. Keys are namespaced with a prefix so several
deployments can share one Redis database.
"""
import redis
import structlog
from typing import Optional, TypeVar, Type
from pydantic import BaseModel, ValidationError

logger = structlog.get_logger(__name__)

T = TypeVar("T", bound=BaseModel)


class RedisCache:
    def __init__(self, url: str, prefix: str = "", connect_timeout: float = 5):
        self.prefix = prefix
        self.client = redis.from_url(
            url,
            decode_responses=True,
            socket_connect_timeout=connect_timeout,
        )

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def ping(self) -> bool:
        return bool(self.client.ping())

    def get(self, key: str, model: Type[T]) -> Optional[T]:
        """Return the cached model, or None on a miss or a stale payload."""
        data = self.client.get(self._key(key))
        if not data:
            return None
        try:
            return model.model_validate_json(data)
        except ValidationError:
            # Written by an older schema; drop it and let the caller refill
            logger.warning("cache_entry_stale", key=key, model=model.__name__)
            self.client.delete(self._key(key))
            return None

    def set(self, key: str, value: BaseModel, ttl_seconds: int) -> None:
        self.client.setex(self._key(key), ttl_seconds, value.model_dump_json())

    def delete(self, key: str) -> None:
        self.client.delete(self._key(key))

    def delete_pattern(self, pattern: str) -> int:
        """Delete every key matching pattern; returns how many were removed."""
        removed = 0
        for key in self.client.scan_iter(match=self._key(pattern)):
            removed += self.client.delete(key)
        return removed
