"""
scoring/tier_classifier.py

Assigns the hidden priority tier from scores and self-reported capacity.

Decision table (first match wins), primary = max(builder, translator, architect):
    1. primary ≥ 3.0 and hours ≥ 6 and len(shipped_text) ≥ 30
           → Tier2 if handle_disagreement == "Avoid it" (leadership maturity check)
           → Tier1 otherwise
    2. primary ≥ 2.0 and hours ≥ 4  → Tier2
    3. otherwise                    → OpenNetwork

Shipped-text length is counted in code points.
"""

import numbers
from decimal import Decimal
from typing import Optional

import structlog

from champ_funnel.core.exceptions import InvalidValueException, MissingRequiredFieldException
from champ_funnel.models.enumerations import DisagreementStyle, Tier
from champ_funnel.scoring.score_calculator import ScoreVector
from champ_funnel.scoring.utils import at_least

logger = structlog.get_logger(__name__)

TIER1_MIN_PRIMARY = 3.0
TIER1_MIN_HOURS = 6
TIER1_MIN_SHIPPED_CHARS = 30

TIER2_MIN_PRIMARY = 2.0
TIER2_MIN_HOURS = 4


def determine_tier(
    scores: Optional[ScoreVector],
    archetype: str,
    availability_hours: float,
    shipped_text: Optional[str],
    handle_disagreement: str,
) -> Tier:
    """
    Args:
        scores: Score vector from compute_scores().
        archetype: Archetype label. Not used by the current rules.
        availability_hours: Self-reported hours per month, > 0.
        shipped_text: Free-text "what have you shipped", may be None/empty.
        handle_disagreement: One of the DisagreementStyle labels.

    Returns:
        Tier.TIER1, Tier.TIER2 or Tier.OPEN_NETWORK.
    """
    if scores is None:
        raise MissingRequiredFieldException("scores")
    if isinstance(availability_hours, bool) or not isinstance(availability_hours, (numbers.Real, Decimal)):
        raise InvalidValueException("availability_hours", availability_hours, "must be a number")
    if availability_hours <= 0:
        raise InvalidValueException("availability_hours", availability_hours, "must be positive")

    primary = scores.primary_score
    shipped_len = len(shipped_text) if shipped_text else 0

    if (
        at_least(primary, TIER1_MIN_PRIMARY)
        and availability_hours >= TIER1_MIN_HOURS
        and shipped_len >= TIER1_MIN_SHIPPED_CHARS
    ):
        if handle_disagreement == DisagreementStyle.AVOID.value:
            tier = Tier.TIER2
        else:
            tier = Tier.TIER1
    elif at_least(primary, TIER2_MIN_PRIMARY) and availability_hours >= TIER2_MIN_HOURS:
        tier = Tier.TIER2
    else:
        tier = Tier.OPEN_NETWORK

    logger.debug(
        "tier_determined",
        tier=tier.value,
        primary_score=primary,
        availability_hours=availability_hours,
        shipped_chars=shipped_len,
        handle_disagreement=handle_disagreement,
    )
    return tier
