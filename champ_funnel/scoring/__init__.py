"""
scoring/ - Quiz Scoring Engine

Modules:
    utils.py                  - Decimal comparison helpers
    score_calculator.py       - Weighted scenario tally → ScoreVector
    archetype_classifier.py   - ScoreVector → single or hybrid archetype label
    tier_classifier.py        - Capacity/leadership-gated tier
    archetype_content.py      - Track suggestion and description tables
    quiz_scorer.py            - End-to-end pipeline for one submission
"""

from champ_funnel.scoring.archetype_classifier import determine_archetype
from champ_funnel.scoring.archetype_content import get_archetype_description, get_track_suggestion
from champ_funnel.scoring.quiz_scorer import QuizScorer, ScoringResult
from champ_funnel.scoring.score_calculator import ScoreVector, compute_scores
from champ_funnel.scoring.tier_classifier import determine_tier

__all__ = [
    "QuizScorer",
    "ScoreVector",
    "ScoringResult",
    "compute_scores",
    "determine_archetype",
    "determine_tier",
    "get_archetype_description",
    "get_track_suggestion",
]
