"""
Decimal Utilities
champ_funnel/scoring/utils.py

Precision-safe comparisons for score thresholds. Scores are carried as
floats; comparisons go through Decimal(str(x)) so 3.0 - 2.5 is exactly 0.5.
"""

from decimal import Decimal


def to_decimal(value: float) -> Decimal:
    """Convert float to Decimal via its shortest repr."""
    return Decimal(str(value))


def at_least(value: float, threshold: float) -> bool:
    """value >= threshold, compared in decimal."""
    return to_decimal(value) >= to_decimal(threshold)
