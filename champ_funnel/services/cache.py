"""
Cache Service Singleton - Champ Funnel
champ_funnel/services/cache.py

Provides a singleton Redis cache instance plus the admin-view cache keys.
Gracefully handles Redis unavailability.
"""
import redis
import structlog
from typing import Optional
from uuid import UUID

from champ_funnel.config import get_settings
from champ_funnel.models.submission import CacheInfo
from champ_funnel.services.redis_cache import RedisCache

logger = structlog.get_logger(__name__)

CACHE_KEY_SUBMISSION_PREFIX = "submission:"
CACHE_KEY_SUBMISSIONS_LIST_PREFIX = "submissions:list:"
CACHE_KEY_SUBMISSION_STATS = "submissions:stats"
CACHE_KEY_ARCHETYPES = "submissions:archetypes"

# Singleton instance
_cache: Optional[RedisCache] = None


def get_cache() -> Optional[RedisCache]:
    """
    Get or create Redis cache instance.

    Returns:
        RedisCache instance if Redis is enabled and reachable, None otherwise.

    Note:
        Returns None if Redis is unavailable, allowing the application
        to continue functioning without caching (graceful degradation).
    """
    global _cache
    settings = get_settings()
    if not settings.CACHE_ENABLED:
        return None
    if _cache is None:
        try:
            _cache = RedisCache(settings.REDIS_URL, prefix=settings.CACHE_KEY_PREFIX)
            _cache.ping()
        except (redis.RedisError, ConnectionError) as e:
            logger.warning("redis_unavailable", error=str(e))
            _cache = None
    return _cache


def reset_cache() -> None:
    """
    Reset the cache singleton.

    Useful for testing or when Redis connection needs to be re-established.
    """
    global _cache
    _cache = None


def get_submission_cache_key(submission_id: UUID) -> str:
    return f"{CACHE_KEY_SUBMISSION_PREFIX}{submission_id}"


def get_submissions_list_cache_key(
    page: int, page_size: int, archetype: Optional[str], tier: Optional[str]
) -> str:
    return (
        f"{CACHE_KEY_SUBMISSIONS_LIST_PREFIX}page:{page}:size:{page_size}"
        f":archetype:{archetype}:tier:{tier}"
    )


def create_cache_info(hit: bool, key: str, latency_ms: float, ttl: int) -> CacheInfo:
    """Create CacheInfo object with human-readable message."""
    if hit:
        return CacheInfo(
            hit=True,
            source="redis",
            key=key,
            latency_ms=round(latency_ms, 3),
            ttl_seconds=ttl,
            message=f"Cache HIT - served from Redis in {latency_ms:.3f}ms",
        )
    return CacheInfo(
        hit=False,
        source="database",
        key=key,
        latency_ms=round(latency_ms, 3),
        ttl_seconds=ttl,
        message=f"Cache MISS - fetched from store in {latency_ms:.3f}ms, now cached for {ttl}s",
    )


def invalidate_submission_cache() -> None:
    """Drop every admin-view entry; called after each new submission."""
    cache = get_cache()
    if cache:
        try:
            cache.delete_pattern(f"{CACHE_KEY_SUBMISSIONS_LIST_PREFIX}*")
            cache.delete(CACHE_KEY_SUBMISSION_STATS)
            cache.delete(CACHE_KEY_ARCHETYPES)
        except redis.RedisError as e:
            logger.warning("cache_invalidation_failed", error=str(e))
