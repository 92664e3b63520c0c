# champ_funnel/scoring/score_calculator.py
"""
Score Calculator
----------------
Tallies the five scenario answers into a three-way score vector.

Each answer maps to an archetype:
    A → Builder,  B → Translator,  C → Architect

and adds that scenario's weight to the archetype's total:
    scenario1  1.0
    scenario2  1.0
    scenario3  1.0
    scenario4  1.5   (disagreement with leadership, weighted up)
    scenario5  1.0

So builder + translator + architect == 5.5 for every valid answer set.
The identity answer is recorded on the submission but never scored.
"""
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict

import structlog

from champ_funnel.core.exceptions import InvalidChoiceException, MissingRequiredFieldException
from champ_funnel.models.enumerations import Archetype, Choice

logger = structlog.get_logger(__name__)

CHOICE_TO_ARCHETYPE: Dict[Choice, Archetype] = {
    Choice.A: Archetype.BUILDER,
    Choice.B: Archetype.TRANSLATOR,
    Choice.C: Archetype.ARCHITECT,
}

SCENARIO_WEIGHTS: Dict[str, float] = {
    "scenario1": 1.0,
    "scenario2": 1.0,
    "scenario3": 1.0,
    "scenario4": 1.5,
    "scenario5": 1.0,
}

TOTAL_WEIGHT = sum(SCENARIO_WEIGHTS.values())


@dataclass(frozen=True)
class ScoreVector:
    """Accumulated points per archetype."""
    builder: float = 0.0
    translator: float = 0.0
    architect: float = 0.0

    def get(self, archetype: Archetype) -> float:
        return getattr(self, archetype.name.lower())

    @property
    def primary_score(self) -> float:
        return max(self.builder, self.translator, self.architect)

    @property
    def total(self) -> float:
        return self.builder + self.translator + self.architect

    def as_dict(self) -> Dict[str, float]:
        return {"builder": self.builder, "translator": self.translator, "architect": self.architect}


def _read_answer(answers: Any, field: str) -> Any:
    if isinstance(answers, Mapping):
        return answers.get(field)
    return getattr(answers, field, None)


def _to_choice(field: str, value: Any) -> Choice:
    if value is None or value == "":
        raise MissingRequiredFieldException(field)
    if isinstance(value, Choice):
        return value
    try:
        return Choice(value)
    except ValueError:
        raise InvalidChoiceException(field, value) from None


def compute_scores(answers: Any) -> ScoreVector:
    """
    Compute the score vector for an answer set.

    Args:
        answers: Mapping or object exposing scenario1..scenario5, each "A", "B"
                 or "C" (or a Choice). Any identity field is ignored.

    Returns:
        ScoreVector whose components sum to 5.5.

    Raises:
        MissingRequiredFieldException: a scenario answer is absent.
        InvalidChoiceException: a scenario answer is outside {A, B, C}.
    """
    totals = {archetype: 0.0 for archetype in Archetype}

    for field, weight in SCENARIO_WEIGHTS.items():
        choice = _to_choice(field, _read_answer(answers, field))
        totals[CHOICE_TO_ARCHETYPE[choice]] += weight

    scores = ScoreVector(
        builder=totals[Archetype.BUILDER],
        translator=totals[Archetype.TRANSLATOR],
        architect=totals[Archetype.ARCHITECT],
    )

    logger.debug("scores_computed", **scores.as_dict())
    return scores
