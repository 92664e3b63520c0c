"""
Services module for the Champ Funnel.
"""

from champ_funnel.services.cache import get_cache, invalidate_submission_cache
from champ_funnel.services.redis_cache import RedisCache
from champ_funnel.services.snowflake import get_snowflake_connection

__all__ = [
    "RedisCache",
    "get_cache",
    "get_snowflake_connection",
    "invalidate_submission_cache",
]
