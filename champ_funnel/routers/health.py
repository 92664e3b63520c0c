"""
Health Check Router - Champ Funnel
champ_funnel/routers/health.py

Returns health status of the submission store and the Redis cache.
"""
from datetime import datetime, timezone
from typing import Dict

import redis
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from champ_funnel.config import Settings, get_settings
from champ_funnel.services.redis_cache import RedisCache
from champ_funnel.services.snowflake import check_snowflake

router = APIRouter(tags=["Health"])


#  Schemas


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    dependencies: Dict[str, str]


#  Dependency Health Checks


def check_store(settings: Settings) -> str:
    if settings.SUBMISSION_STORE == "memory":
        return "healthy (in-memory store)"
    return check_snowflake(settings)


def check_redis(settings: Settings) -> str:
    if not settings.CACHE_ENABLED:
        return "disabled"
    try:
        cache = RedisCache(settings.REDIS_URL, prefix=settings.CACHE_KEY_PREFIX)
        cache.ping()
        cache.client.close()
        return "healthy"
    except (redis.RedisError, ConnectionError) as e:
        error_msg = str(e)[:100] + "..." if len(str(e)) > 100 else str(e)
        return f"unhealthy: {error_msg}"


#  Main Health Check Route


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={
        200: {"description": "All dependencies healthy"},
        503: {"description": "One or more dependencies unhealthy"},
    },
    summary="Health check",
    description="Check health of the submission store and the cache.",
)
async def health_check(settings: Settings = Depends(get_settings)):
    dependencies = {
        "store": check_store(settings),
        "redis": check_redis(settings),
    }

    all_healthy = all(v.startswith("healthy") or v == "disabled" for v in dependencies.values())

    response = HealthResponse(
        status="healthy" if all_healthy else "degraded",
        timestamp=datetime.now(timezone.utc),
        version=settings.APP_VERSION,
        dependencies=dependencies,
    )

    if all_healthy:
        return response
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=response.model_dump(mode="json"),
    )
