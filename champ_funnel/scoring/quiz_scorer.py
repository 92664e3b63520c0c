"""
scoring/quiz_scorer.py

Chains the scoring steps for one submission:

  1. compute_scores           → ScoreVector
  2. determine_archetype      → label (single or hybrid)
  3. determine_tier           → Tier (hidden from the applicant)
  4. get_track_suggestion /
     get_archetype_description → result-page copy

Stateless; a single instance may be shared across requests.
"""

from dataclasses import dataclass
from typing import Any, Optional

import structlog

from champ_funnel.models.enumerations import Tier
from champ_funnel.scoring.archetype_classifier import determine_archetype
from champ_funnel.scoring.archetype_content import get_archetype_description, get_track_suggestion
from champ_funnel.scoring.score_calculator import ScoreVector, compute_scores
from champ_funnel.scoring.tier_classifier import determine_tier

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ArchetypeProfile:
    """Output of QuizScorer.profile(): everything the applicant may see."""
    scores: ScoreVector
    archetype: str
    track: str
    description: str


@dataclass(frozen=True)
class ScoringResult:
    """Output of QuizScorer.score()."""
    scores: ScoreVector
    archetype: str
    tier: Tier
    track: str
    description: str


class QuizScorer:
    """Score an answer set end to end."""

    def profile(self, answers: Any) -> ArchetypeProfile:
        scores = compute_scores(answers)
        archetype = determine_archetype(scores)
        return ArchetypeProfile(
            scores=scores,
            archetype=archetype,
            track=get_track_suggestion(archetype),
            description=get_archetype_description(archetype),
        )

    def score(
        self,
        answers: Any,
        availability_hours: float,
        shipped_text: Optional[str],
        handle_disagreement: str,
    ) -> ScoringResult:
        """
        Args:
            answers: Mapping/object with scenario1..scenario5.
            availability_hours: Hours per month.
            shipped_text: Free-text shipped description.
            handle_disagreement: DisagreementStyle label.

        Returns:
            ScoringResult with scores, archetype, tier, track and description.
        """
        profile = self.profile(answers)
        tier = determine_tier(
            profile.scores,
            profile.archetype,
            availability_hours,
            shipped_text,
            handle_disagreement,
        )

        logger.info(
            "submission_scored",
            **profile.scores.as_dict(),
            archetype=profile.archetype,
            tier=tier.value,
        )

        return ScoringResult(
            scores=profile.scores,
            archetype=profile.archetype,
            tier=tier,
            track=profile.track,
            description=profile.description,
        )
