"""
Quiz Router - Champ Funnel
champ_funnel/routers/quiz.py

Applicant-facing endpoints: the quiz definition, the review-step preview and
the final submission.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Header, status

from champ_funnel.config import Settings, get_settings
from champ_funnel.core.dependencies import SubmissionStore, get_quiz_scorer, get_submission_repository
from champ_funnel.gate.store import GateSessionStore, get_gate_store
from champ_funnel.models.quiz import QuizDefinition, get_quiz_definition
from champ_funnel.models.submission import (
    QuizAnswers,
    ScoreBreakdown,
    ScorePreviewResponse,
    SubmissionCreate,
    SubmissionResult,
)
from champ_funnel.scoring.quiz_scorer import QuizScorer
from champ_funnel.services.submission_service import SubmissionService


router = APIRouter(prefix="/api/v1", tags=["Quiz"])


@router.get(
    "/quiz",
    response_model=QuizDefinition,
    summary="Get the quiz",
    description="Identity question, five weighted scenarios and the capacity-step options.",
)
async def get_quiz() -> QuizDefinition:
    return get_quiz_definition()


@router.post(
    "/quiz/preview",
    response_model=ScorePreviewResponse,
    summary="Preview archetype",
    description="Score an answer set without storing anything. Used by the review step.",
)
async def preview_archetype(
    answers: QuizAnswers,
    scorer: QuizScorer = Depends(get_quiz_scorer),
) -> ScorePreviewResponse:
    profile = scorer.profile(answers)
    return ScorePreviewResponse(
        scores=ScoreBreakdown(**profile.scores.as_dict()),
        archetype=profile.archetype,
        track=profile.track,
        description=profile.description,
    )


@router.post(
    "/submissions",
    response_model=SubmissionResult,
    status_code=status.HTTP_201_CREATED,
    tags=["Submissions"],
    summary="Submit the funnel",
    description=(
        "Score and store a completed funnel. Requires an unlocked calibration "
        "session in X-Calibration-Id unless REQUIRE_CALIBRATION is off. "
        "The hidden tier is never returned."
    ),
    responses={
        403: {"description": "Calibration gate still locked"},
        422: {"description": "Validation error or missing consent"},
    },
)
async def create_submission(
    submission: SubmissionCreate,
    x_calibration_id: Optional[UUID] = Header(default=None),
    settings: Settings = Depends(get_settings),
    gate_store: GateSessionStore = Depends(get_gate_store),
    repository: SubmissionStore = Depends(get_submission_repository),
    scorer: QuizScorer = Depends(get_quiz_scorer),
) -> SubmissionResult:
    if settings.REQUIRE_CALIBRATION:
        gate_store.require_unlocked(x_calibration_id)

    record, result = SubmissionService(repository, scorer).submit(submission)
    return SubmissionResult(
        id=record.id,
        archetype=result.archetype,
        track=result.track,
        description=result.description,
        created_at=record.created_at,
    )
