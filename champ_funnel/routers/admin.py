"""
Admin Router - Champ Funnel
champ_funnel/routers/admin.py

Password-protected review of stored submissions: listing, detail, counts and
the CSV export. List, stats and archetype views are cached in Redis and
invalidated on every new submission.
"""

import time
from typing import List, Optional
from uuid import UUID

import redis
import structlog
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from pydantic import BaseModel

from champ_funnel.config import Settings, get_settings
from champ_funnel.core.dependencies import (
    SubmissionStore,
    get_submission_repository,
    require_admin,
    verify_admin_password,
)
from champ_funnel.models.enumerations import Tier
from champ_funnel.models.submission import (
    CacheInfo,
    SubmissionListResponse,
    SubmissionRecord,
    SubmissionStats,
)
from champ_funnel.routers.errors import raise_error, raise_submission_not_found
from champ_funnel.services.cache import (
    CACHE_KEY_ARCHETYPES,
    CACHE_KEY_SUBMISSION_STATS,
    create_cache_info,
    get_cache,
    get_submission_cache_key,
    get_submissions_list_cache_key,
)
from champ_funnel.services.submission_service import export_csv, export_filename, submission_stats

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/v1/admin", tags=["Admin"])


#  Schemas


class AdminAuthRequest(BaseModel):
    password: str


class AdminAuthResponse(BaseModel):
    authenticated: bool


class ArchetypeListResponse(BaseModel):
    labels: List[str]
    cache: Optional[CacheInfo] = None


#  Cache Helpers


def _cache_get(cache, key: str, model):
    if cache is None:
        return None
    try:
        return cache.get(key, model)
    except redis.RedisError as e:
        logger.warning("cache_read_failed", key=key, error=str(e))
        return None


def _cache_set(cache, key: str, value: BaseModel, ttl: int) -> None:
    if cache is None:
        return
    try:
        cache.set(key, value, ttl)
    except redis.RedisError as e:
        logger.warning("cache_write_failed", key=key, error=str(e))


#  Routes


@router.post(
    "/auth",
    response_model=AdminAuthResponse,
    summary="Check admin password",
    responses={
        401: {"description": "Wrong password"},
        503: {"description": "No admin password configured"},
    },
)
async def authenticate_admin(
    body: AdminAuthRequest,
    settings: Settings = Depends(get_settings),
) -> AdminAuthResponse:
    if not settings.admin_enabled:
        raise_error(status.HTTP_503_SERVICE_UNAVAILABLE, "ADMIN_DISABLED", "Admin access is not configured")
    if not verify_admin_password(settings, body.password):
        logger.warning("admin_auth_failed")
        raise_error(status.HTTP_401_UNAUTHORIZED, "UNAUTHORIZED", "Invalid admin password")
    return AdminAuthResponse(authenticated=True)


@router.get(
    "/submissions",
    response_model=SubmissionListResponse,
    dependencies=[Depends(require_admin)],
    summary="List submissions (paginated)",
    description="Newest first, optionally filtered by archetype label and tier. Cached.",
)
async def list_submissions(
    archetype: Optional[str] = Query(default=None, max_length=64),
    tier: Optional[Tier] = Query(default=None),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=50, ge=1, le=500),
    settings: Settings = Depends(get_settings),
    repository: SubmissionStore = Depends(get_submission_repository),
) -> SubmissionListResponse:
    tier_value = tier.value if tier else None
    cache_key = get_submissions_list_cache_key(page, page_size, archetype, tier_value)
    cache = get_cache()
    ttl = settings.CACHE_TTL_SUBMISSIONS
    start_time = time.time()

    # 1. Try cache first
    cached = _cache_get(cache, cache_key, SubmissionListResponse)
    if cached:
        latency = (time.time() - start_time) * 1000
        cached.cache = create_cache_info(True, cache_key, latency, ttl)
        return cached

    # 2. Cache miss - fetch from store, paginate in memory
    records = repository.list(archetype=archetype, tier=tier_value)
    total = len(records)
    offset = (page - 1) * page_size

    latency = (time.time() - start_time) * 1000
    response = SubmissionListResponse(
        items=records[offset:offset + page_size],
        total=total,
        page=page,
        page_size=page_size,
        total_pages=(total + page_size - 1) // page_size,
        cache=create_cache_info(False, cache_key, latency, ttl),
    )

    # 3. Store in cache
    _cache_set(cache, cache_key, response, ttl)
    return response


@router.get(
    "/submissions/export",
    dependencies=[Depends(require_admin)],
    summary="Export submissions as CSV",
    response_class=Response,
    responses={200: {"content": {"text/csv": {}}}},
)
async def export_submissions(
    archetype: Optional[str] = Query(default=None, max_length=64),
    tier: Optional[Tier] = Query(default=None),
    repository: SubmissionStore = Depends(get_submission_repository),
) -> Response:
    records = repository.list(archetype=archetype, tier=tier.value if tier else None)
    filename = export_filename()
    logger.info("submissions_exported", rows=len(records), filename=filename)
    return Response(
        content=export_csv(records),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get(
    "/submissions/{submission_id}",
    response_model=SubmissionRecord,
    dependencies=[Depends(require_admin)],
    summary="Get submission by ID",
    responses={404: {"description": "Submission not found"}},
)
async def get_submission(
    submission_id: UUID,
    settings: Settings = Depends(get_settings),
    repository: SubmissionStore = Depends(get_submission_repository),
) -> SubmissionRecord:
    cache_key = get_submission_cache_key(submission_id)
    cache = get_cache()

    cached = _cache_get(cache, cache_key, SubmissionRecord)
    if cached:
        return cached

    record = repository.get_by_id(submission_id)
    if record is None:
        raise_submission_not_found()

    # Records are never updated, so detail entries need no invalidation
    _cache_set(cache, cache_key, record, settings.CACHE_TTL_SUBMISSIONS)
    return record


@router.get(
    "/archetypes",
    response_model=ArchetypeListResponse,
    dependencies=[Depends(require_admin)],
    summary="List archetype labels in use",
)
async def list_archetypes(
    settings: Settings = Depends(get_settings),
    repository: SubmissionStore = Depends(get_submission_repository),
) -> ArchetypeListResponse:
    cache_key = CACHE_KEY_ARCHETYPES
    cache = get_cache()
    ttl = settings.CACHE_TTL_STATS
    start_time = time.time()

    cached = _cache_get(cache, cache_key, ArchetypeListResponse)
    if cached:
        latency = (time.time() - start_time) * 1000
        cached.cache = create_cache_info(True, cache_key, latency, ttl)
        return cached

    labels = repository.archetype_labels()
    latency = (time.time() - start_time) * 1000
    response = ArchetypeListResponse(
        labels=labels,
        cache=create_cache_info(False, cache_key, latency, ttl),
    )
    _cache_set(cache, cache_key, response, ttl)
    return response


@router.get(
    "/stats",
    response_model=SubmissionStats,
    dependencies=[Depends(require_admin)],
    summary="Submission counts by tier and archetype",
)
async def get_submission_stats(
    settings: Settings = Depends(get_settings),
    repository: SubmissionStore = Depends(get_submission_repository),
) -> SubmissionStats:
    cache_key = CACHE_KEY_SUBMISSION_STATS
    cache = get_cache()
    ttl = settings.CACHE_TTL_STATS
    start_time = time.time()

    cached = _cache_get(cache, cache_key, SubmissionStats)
    if cached:
        latency = (time.time() - start_time) * 1000
        cached.cache = create_cache_info(True, cache_key, latency, ttl)
        return cached

    stats = submission_stats(repository)
    latency = (time.time() - start_time) * 1000
    stats.cache = create_cache_info(False, cache_key, latency, ttl)
    _cache_set(cache, cache_key, stats, ttl)
    return stats
