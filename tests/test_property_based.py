# tests/test_property_based.py
"""
Property-Based Tests - scoring engine and calibration gate

Hypothesis tests with max_examples=500, covering:
  - compute_scores: weight conservation, identity invariance
  - determine_archetype: rotation symmetry, closed label set
  - determine_tier: "Avoid it" never reaches Tier1, more hours never demote
  - content lookups: total over arbitrary strings
  - CalibrationGate: snapping radius
"""

import math

from hypothesis import assume, given, settings
from hypothesis import strategies as st

from champ_funnel.gate.calibration import TARGET_VERTEX, VERTICES, CalibrationGate
from champ_funnel.models.enumerations import Archetype, DisagreementStyle, GateState, Tier
from champ_funnel.scoring import (
    ScoreVector,
    compute_scores,
    determine_archetype,
    determine_tier,
    get_archetype_description,
    get_track_suggestion,
)
from champ_funnel.scoring.archetype_classifier import HYBRID_LABELS, HYBRID_SEPARATOR

# ---------------------------------------------------------------------------
# Shared strategies
# ---------------------------------------------------------------------------

choice_st = st.sampled_from(["A", "B", "C"])

score_st = st.integers(min_value=0, max_value=550).map(lambda n: n / 100)

TIER_RANK = {Tier.OPEN_NETWORK: 0, Tier.TIER2: 1, Tier.TIER1: 2}

ROTATE = {
    Archetype.BUILDER.value: Archetype.TRANSLATOR.value,
    Archetype.TRANSLATOR.value: Archetype.ARCHITECT.value,
    Archetype.ARCHITECT.value: Archetype.BUILDER.value,
}


@st.composite
def answer_sets(draw):
    """Draw a full answer set including identity."""
    return {
        "identity": draw(choice_st),
        **{f"scenario{i}": draw(choice_st) for i in range(1, 6)},
    }


@st.composite
def score_vectors(draw):
    return ScoreVector(builder=draw(score_st), translator=draw(score_st), architect=draw(score_st))


def rotate_label(label: str) -> str:
    names = label.split(HYBRID_SEPARATOR)
    return HYBRID_SEPARATOR.join(sorted(ROTATE[n] for n in names))


# ---------------------------------------------------------------------------
# compute_scores
# ---------------------------------------------------------------------------

@given(answer_sets())
@settings(max_examples=500)
def test_scores_always_sum_to_total_weight(answers):
    scores = compute_scores(answers)
    assert math.isclose(scores.total, 5.5)
    assert all(v >= 0 for v in scores.as_dict().values())


@given(answer_sets(), choice_st)
@settings(max_examples=500)
def test_identity_never_changes_scores(answers, identity):
    changed = {**answers, "identity": identity}
    assert compute_scores(changed) == compute_scores(answers)


# ---------------------------------------------------------------------------
# determine_archetype
# ---------------------------------------------------------------------------

@given(score_vectors())
@settings(max_examples=500)
def test_archetype_rotation_symmetry(scores):
    assume(len({scores.builder, scores.translator, scores.architect}) == 3)
    rotated = ScoreVector(
        builder=scores.architect,
        translator=scores.builder,
        architect=scores.translator,
    )
    assert determine_archetype(rotated) == rotate_label(determine_archetype(scores))


@given(score_vectors())
@settings(max_examples=500)
def test_archetype_label_is_one_of_six(scores):
    known = {a.value for a in Archetype} | set(HYBRID_LABELS)
    assert determine_archetype(scores) in known


@given(answer_sets())
@settings(max_examples=500)
def test_hybrid_iff_gap_at_most_half(answers):
    scores = compute_scores(answers)
    top, second, _ = sorted(scores.as_dict().values(), reverse=True)
    label = determine_archetype(scores)
    assert (HYBRID_SEPARATOR in label) == (top - second <= 0.5)


# ---------------------------------------------------------------------------
# determine_tier
# ---------------------------------------------------------------------------

@given(
    score_vectors(),
    st.integers(min_value=1, max_value=200),
    st.text(max_size=80),
)
@settings(max_examples=500)
def test_avoid_it_never_reaches_tier1(scores, hours, shipped):
    tier = determine_tier(scores, determine_archetype(scores), hours, shipped, DisagreementStyle.AVOID.value)
    assert tier != Tier.TIER1


@given(
    score_vectors(),
    st.integers(min_value=1, max_value=100),
    st.integers(min_value=0, max_value=100),
    st.one_of(st.none(), st.text(max_size=80)),
    st.sampled_from([s.value for s in DisagreementStyle]),
)
@settings(max_examples=500)
def test_more_hours_never_demote(scores, hours, extra, shipped, style):
    label = determine_archetype(scores)
    low = determine_tier(scores, label, hours, shipped, style)
    high = determine_tier(scores, label, hours + extra, shipped, style)
    assert TIER_RANK[high] >= TIER_RANK[low]


# ---------------------------------------------------------------------------
# Content lookups
# ---------------------------------------------------------------------------

@given(st.text(max_size=40))
@settings(max_examples=500)
def test_content_lookups_are_total(label):
    assert get_track_suggestion(label)
    assert get_archetype_description(label)


# ---------------------------------------------------------------------------
# Calibration gate
# ---------------------------------------------------------------------------

@given(
    st.sampled_from(sorted(TARGET_VERTEX)),
    st.floats(min_value=0, max_value=100, allow_nan=False),
    st.floats(min_value=0, max_value=100, allow_nan=False),
)
@settings(max_examples=500)
def test_snap_only_within_radius(node, x, y):
    gate = CalibrationGate()
    vx, vy = VERTICES[TARGET_VERTEX[node]]
    cx, cy = max(5.0, min(95.0, x)), max(5.0, min(95.0, y))
    snapped = gate.place(node, x, y)
    assert snapped == (math.hypot(vx - cx, vy - cy) <= gate.snap_radius)
    assert gate.state in (GateState.CALIBRATING, GateState.UNLOCKED)
    if snapped:
        assert (gate.nodes[node].x, gate.nodes[node].y) == (vx, vy)
