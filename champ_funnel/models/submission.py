from pydantic import BaseModel, ConfigDict, Field, field_validator
from uuid import UUID, uuid4
from datetime import datetime, timezone
from typing import Optional, List

from champ_funnel.models.enumerations import Choice, DisagreementStyle, DrainSource, Tier

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class QuizAnswers(BaseModel):
    """
    The six multiple-choice answers. Only scenario1..scenario5 are scored.
    """

    identity: Choice = Field(..., description="Self-identification (recorded, not scored)")
    scenario1: Choice
    scenario2: Choice
    scenario3: Choice
    scenario4: Choice = Field(..., description="Weighted x1.5")
    scenario5: Choice


class ContributionProfile(BaseModel):
    """
    Free-text evidence of past work.
    """

    shipped_text: Optional[str] = Field(
        default=None,
        max_length=600,
        description="Something you shipped (30+ characters counts toward Tier 1)",
    )
    created_link: Optional[str] = Field(default=None, max_length=500)
    project_text: Optional[str] = Field(default=None, max_length=400)

    @field_validator("shipped_text", "created_link", "project_text")
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        return value if value else None


class CapacityProfile(BaseModel):
    """
    Capacity & stability check.
    """

    availability_hours: int = Field(..., gt=0, le=744, description="Hours per month")
    led_team: bool = False
    handle_disagreement: DisagreementStyle
    drains_most: DrainSource


class ApplicantContact(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    age: int = Field(..., ge=18, le=100)
    country: str = Field(..., min_length=1, max_length=100)
    city: Optional[str] = Field(default=None, max_length=100)
    timezone: str = Field(..., min_length=1, max_length=64)
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    linkedin_url: Optional[str] = Field(default=None, max_length=500)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("city", "linkedin_url")
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        return value if value else None


class SubmissionCreate(BaseModel):
    """
    Model for a completed funnel submission.
    """

    model_config = ConfigDict(extra="forbid")

    contact: ApplicantContact
    answers: QuizAnswers
    contribution: ContributionProfile = Field(default_factory=ContributionProfile)
    capacity: CapacityProfile
    consent: bool

    @field_validator("consent")
    @classmethod
    def consent_required(cls, value: bool) -> bool:
        if not value:
            raise ValueError("Consent is required to submit")
        return value


class SubmissionRecord(BaseModel):
    """
    Stored submission row (CHAMP_ENTRIES). Never updated after insert.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: UUID = Field(default_factory=uuid4)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    first_name: str
    last_name: str
    age: int
    country: str
    city: Optional[str] = None
    timezone: str
    email: str
    linkedin_url: Optional[str] = None

    identity_choice: Choice
    scenario1: Choice
    scenario2: Choice
    scenario3: Choice
    scenario4: Choice
    scenario5: Choice

    shipped_text: Optional[str] = None
    created_link: Optional[str] = None
    project_text: Optional[str] = None

    availability_hours: int
    led_team: bool
    handle_disagreement: str
    drains_most: str

    builder_score: float = Field(..., ge=0)
    translator_score: float = Field(..., ge=0)
    architect_score: float = Field(..., ge=0)
    archetype_label: str
    hidden_tier: Tier
    consent: bool


class ScoreBreakdown(BaseModel):
    builder: float
    translator: float
    architect: float


class ScorePreviewResponse(BaseModel):
    """
    Review-step result; nothing is persisted.
    """

    scores: ScoreBreakdown
    archetype: str
    track: str
    description: str


class SubmissionResult(BaseModel):
    """
    Returned to the applicant after submit. The tier stays hidden.
    """

    id: UUID
    archetype: str
    track: str
    description: str
    created_at: datetime


class SubmissionListResponse(BaseModel):
    items: List[SubmissionRecord]
    total: int
    page: int
    page_size: int
    total_pages: int
    cache: Optional["CacheInfo"] = None


class SubmissionStats(BaseModel):
    total: int
    by_tier: dict[str, int]
    by_archetype: dict[str, int]
    cache: Optional["CacheInfo"] = None


class CacheInfo(BaseModel):
    """Cache metadata for debugging - shows if Redis is working."""
    hit: bool
    source: str
    key: str
    latency_ms: float
    ttl_seconds: int
    message: str


SubmissionListResponse.model_rebuild()
SubmissionStats.model_rebuild()
