"""
scoring/archetype_classifier.py

Turns a score vector into an archetype label.

Rule:
    rank Builder, Translator, Architect by score (descending, stable)
    if top − second ≤ 0.5  →  hybrid "<A>–<B>" with the two names sorted alphabetically
    else                   →  top name

Ties keep declaration order (Builder, Translator, Architect), so an
all-equal vector always yields "Builder–Translator".
"""

from decimal import Decimal
from typing import List, Tuple

import structlog

from champ_funnel.models.enumerations import Archetype
from champ_funnel.scoring.score_calculator import ScoreVector
from champ_funnel.scoring.utils import to_decimal

logger = structlog.get_logger(__name__)

HYBRID_THRESHOLD = Decimal("0.5")
HYBRID_SEPARATOR = "–"  # en dash

HYBRID_LABELS = tuple(
    HYBRID_SEPARATOR.join(sorted((a.value, b.value)))
    for a, b in (
        (Archetype.BUILDER, Archetype.TRANSLATOR),
        (Archetype.BUILDER, Archetype.ARCHITECT),
        (Archetype.TRANSLATOR, Archetype.ARCHITECT),
    )
)


def rank_archetypes(scores: ScoreVector) -> List[Tuple[Archetype, Decimal]]:
    """Archetypes with their scores, highest first; ties keep enum order."""
    ranked = [(archetype, to_decimal(scores.get(archetype))) for archetype in Archetype]
    return sorted(ranked, key=lambda item: item[1], reverse=True)


def hybrid_label(first: Archetype, second: Archetype) -> str:
    return HYBRID_SEPARATOR.join(sorted((first.value, second.value)))


def determine_archetype(scores: ScoreVector) -> str:
    """
    Classify a score vector as a single or hybrid archetype.

    Args:
        scores: Any three real scores; need not come from compute_scores().

    Returns:
        "Builder", "Translator", "Architect", or one of HYBRID_LABELS.
    """
    ranked = rank_archetypes(scores)
    (top, top_score), (second, second_score) = ranked[0], ranked[1]

    gap = top_score - second_score
    label = hybrid_label(top, second) if gap <= HYBRID_THRESHOLD else top.value

    logger.debug("archetype_determined", label=label, gap=float(gap))
    return label
