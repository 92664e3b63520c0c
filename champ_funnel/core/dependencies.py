"""
Dependencies - Champ Funnel
champ_funnel/core/dependencies.py

FastAPI dependency injection for the submission store, scorer and admin guard.
"""

import hmac
from functools import lru_cache
from typing import Optional, Union

from fastapi import Depends, Header, HTTPException, status

from champ_funnel.config import Settings, get_settings
from champ_funnel.repositories.memory_repository import InMemorySubmissionRepository
from champ_funnel.repositories.submission_repository import SubmissionRepository
from champ_funnel.scoring.quiz_scorer import QuizScorer

SubmissionStore = Union[SubmissionRepository, InMemorySubmissionRepository]


def build_submission_repository(settings: Settings) -> SubmissionStore:
    """Pick the store named by SUBMISSION_STORE."""
    if settings.SUBMISSION_STORE == "snowflake":
        return SubmissionRepository(settings)
    return InMemorySubmissionRepository()


@lru_cache()
def get_submission_repository() -> SubmissionStore:
    """Get cached submission repository instance."""
    return build_submission_repository(get_settings())


@lru_cache()
def get_quiz_scorer() -> QuizScorer:
    """Get cached QuizScorer instance."""
    return QuizScorer()


def verify_admin_password(settings: Settings, candidate: Optional[str]) -> bool:
    expected = settings.ADMIN_PASSWORD.get_secret_value()
    if not expected or candidate is None:
        return False
    return hmac.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8"))


def require_admin(
    x_admin_password: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> None:
    """Guard for admin routes: X-Admin-Password must match ADMIN_PASSWORD."""
    if not settings.admin_enabled:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"error_code": "ADMIN_DISABLED", "message": "Admin access is not configured"},
        )
    if not verify_admin_password(settings, x_admin_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error_code": "UNAUTHORIZED", "message": "Invalid admin password"},
        )
