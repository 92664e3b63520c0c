from pydantic import BaseModel, Field
from typing import List

from champ_funnel.scoring.score_calculator import SCENARIO_WEIGHTS
from champ_funnel.models.enumerations import (
    AVAILABILITY_OPTIONS,
    Choice,
    DisagreementStyle,
    DrainSource,
)


class QuizOption(BaseModel):
    value: Choice
    text: str


class QuizQuestion(BaseModel):
    """
    One multiple-choice step of the funnel.
    """

    id: str = Field(..., description="Answer field name (identity, scenario1..scenario5)")
    prompt: str
    weight: float = Field(
        default=0.0,
        ge=0,
        description="Points added to the chosen archetype (0 for identity)",
    )
    options: List[QuizOption]


class QuizDefinition(BaseModel):
    """
    Full quiz payload served to the front end.
    """

    questions: List[QuizQuestion]
    availability_options: List[int]
    disagreement_options: List[str]
    drain_options: List[str]


def _options(a: str, b: str, c: str) -> List[QuizOption]:
    return [
        QuizOption(value=Choice.A, text=a),
        QuizOption(value=Choice.B, text=b),
        QuizOption(value=Choice.C, text=c),
    ]


IDENTITY_QUESTION = QuizQuestion(
    id="identity",
    prompt="Which statement describes you best?",
    options=_options(
        "I build things that matter",
        "I connect people and ideas",
        "I design systems and structures",
    ),
)

SCENARIO_QUESTIONS = [
    QuizQuestion(
        id="scenario1",
        prompt=(
            "You are in a UN side event. Youth delegates disagree on strategy before "
            "entering a negotiation space. Time is limited. You:"
        ),
        weight=SCENARIO_WEIGHTS["scenario1"],
        options=_options(
            "Draft a 3-point position and move forward",
            "Clarify everyone's arguments and synthesize them verbally",
            "Step back and reframe the power dynamics of the negotiation",
        ),
    ),
    QuizQuestion(
        id="scenario2",
        prompt="Midway through a global training cohort, engagement drops. You:",
        weight=SCENARIO_WEIGHTS["scenario2"],
        options=_options(
            "Redesign session structure and introduce concrete deliverables",
            "Create a narrative recap video explaining why the work matters",
            "Analyze systemic reasons behind engagement behavior",
        ),
    ),
    QuizQuestion(
        id="scenario3",
        prompt="A donor wants measurable outputs quickly. The team wants systemic depth. You:",
        weight=SCENARIO_WEIGHTS["scenario3"],
        options=_options(
            "Propose a pilot project with clear metrics",
            "Translate systemic value into language funders understand",
            "Redesign the funding structure to align incentives long-term",
        ),
    ),
    QuizQuestion(
        id="scenario4",
        prompt="You disagree with a strategic decision made by the Chair. You:",
        weight=SCENARIO_WEIGHTS["scenario4"],
        options=_options(
            "Deliver your input clearly, then execute regardless",
            "Request clarification dialogue to understand the rationale",
            "Suggest an alternative governance mechanism",
        ),
    ),
    QuizQuestion(
        id="scenario5",
        prompt=(
            "Your country team wants to launch a GYC initiative. There is limited funding "
            "and high enthusiasm. You:"
        ),
        weight=SCENARIO_WEIGHTS["scenario5"],
        options=_options(
            "Start small, ship one concrete action within 30 days",
            "Host a public session explaining the Avocado Framework",
            "Map regional ecosystem actors before launching",
        ),
    ),
]


def get_quiz_definition() -> QuizDefinition:
    return QuizDefinition(
        questions=[IDENTITY_QUESTION, *SCENARIO_QUESTIONS],
        availability_options=list(AVAILABILITY_OPTIONS),
        disagreement_options=[s.value for s in DisagreementStyle],
        drain_options=[d.value for d in DrainSource],
    )
