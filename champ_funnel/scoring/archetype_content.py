"""
Track suggestions and descriptions shown on the result page.

Lookups test which base names a label contains, so both "Builder" and
"Builder–Translator" resolve. Hybrid shapes are checked before pure labels.
"""

from typing import Dict, FrozenSet, Optional

from champ_funnel.models.enumerations import Archetype

_B, _T, _A = Archetype.BUILDER, Archetype.TRANSLATOR, Archetype.ARCHITECT

TRACK_FALLBACK = "Track assignment pending review"
DESCRIPTION_FALLBACK = "Your archetype is being mapped."

TRACK_SUGGESTIONS: Dict[FrozenSet[Archetype], str] = {
    frozenset({_B, _T}): (
        "Green Jobs Pipeline / Training delivery / Governance & negotiation literacy / "
        "External communication"
    ),
    frozenset({_B, _A}): (
        "Green Jobs Pipeline / Training delivery / Responsible AI & tech-for-nature / "
        "Resilience design / Fund-of-funds logic"
    ),
    frozenset({_T, _A}): (
        "Governance & negotiation literacy / External communication / "
        "Responsible AI & tech-for-nature / Resilience design / Fund-of-funds logic"
    ),
    frozenset({_B}): "Green Jobs Pipeline / Training delivery / Micro-governance pilots",
    frozenset({_T}): "Governance & negotiation literacy / External communication",
    frozenset({_A}): "Responsible AI & tech-for-nature / Resilience design / Fund-of-funds logic",
}

ARCHETYPE_DESCRIPTIONS: Dict[FrozenSet[Archetype], str] = {
    frozenset({_B, _T}): (
        "You bridge vision and execution. You translate complex ideas into concrete "
        "actions while maintaining clarity across teams."
    ),
    frozenset({_B, _A}): (
        "You design systems and ship them. You see structural patterns and build "
        "solutions that scale."
    ),
    frozenset({_T, _A}): (
        "You map complexity and communicate it. You understand systems deeply and make "
        "them accessible to others."
    ),
    frozenset({_B}): (
        "You ship. You turn ideas into reality through concrete deliverables and "
        "structured execution."
    ),
    frozenset({_T}): (
        "You connect. You synthesize perspectives, mediate differences, and make complex "
        "ideas accessible."
    ),
    frozenset({_A}): (
        "You design. You see systems, power dynamics, and long-term structures that "
        "others miss."
    ),
}

_HYBRID_KEYS = [key for key in TRACK_SUGGESTIONS if len(key) == 2]


def _resolve(label: str) -> Optional[FrozenSet[Archetype]]:
    for key in _HYBRID_KEYS:
        if all(archetype.value in label for archetype in key):
            return key
    # pure labels match exactly
    for archetype in Archetype:
        if label == archetype.value:
            return frozenset({archetype})
    return None


def get_track_suggestion(archetype_label: str) -> str:
    key = _resolve(archetype_label)
    return TRACK_SUGGESTIONS[key] if key else TRACK_FALLBACK


def get_archetype_description(archetype_label: str) -> str:
    key = _resolve(archetype_label)
    return ARCHETYPE_DESCRIPTIONS[key] if key else DESCRIPTION_FALLBACK
