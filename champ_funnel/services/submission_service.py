"""
Submission Service - Champ Funnel
champ_funnel/services/submission_service.py

Scores a completed funnel, builds the immutable record and hands it to the
configured store. Also produces the admin CSV export.
"""

import csv
from collections import Counter
from datetime import datetime, timezone
from typing import Iterable, List

import pandas as pd
import structlog

from champ_funnel.models.enumerations import Tier
from champ_funnel.models.submission import SubmissionCreate, SubmissionRecord, SubmissionStats
from champ_funnel.scoring.quiz_scorer import QuizScorer, ScoringResult
from champ_funnel.services.cache import invalidate_submission_cache

logger = structlog.get_logger(__name__)

# Column header → record attribute, in export order
EXPORT_COLUMNS = [
    ("ID", "id"),
    ("Created At", "created_at"),
    ("First Name", "first_name"),
    ("Last Name", "last_name"),
    ("Age", "age"),
    ("Country", "country"),
    ("City", "city"),
    ("Timezone", "timezone"),
    ("Email", "email"),
    ("LinkedIn", "linkedin_url"),
    ("Identity", "identity_choice"),
    ("Scenario 1", "scenario1"),
    ("Scenario 2", "scenario2"),
    ("Scenario 3", "scenario3"),
    ("Scenario 4", "scenario4"),
    ("Scenario 5", "scenario5"),
    ("Shipped Text", "shipped_text"),
    ("Created Link", "created_link"),
    ("Project Text", "project_text"),
    ("Availability Hours", "availability_hours"),
    ("Led Team", "led_team"),
    ("Handle Disagreement", "handle_disagreement"),
    ("Drains Most", "drains_most"),
    ("Builder Score", "builder_score"),
    ("Translator Score", "translator_score"),
    ("Architect Score", "architect_score"),
    ("Archetype", "archetype_label"),
    ("Tier", "hidden_tier"),
    ("Consent", "consent"),
]


def build_record(submission: SubmissionCreate, result: ScoringResult) -> SubmissionRecord:
    """Flatten a submission plus its scoring result into a stored row."""
    contact = submission.contact
    answers = submission.answers
    contribution = submission.contribution
    capacity = submission.capacity

    return SubmissionRecord(
        first_name=contact.first_name,
        last_name=contact.last_name,
        age=contact.age,
        country=contact.country,
        city=contact.city,
        timezone=contact.timezone,
        email=contact.email,
        linkedin_url=contact.linkedin_url,
        identity_choice=answers.identity,
        scenario1=answers.scenario1,
        scenario2=answers.scenario2,
        scenario3=answers.scenario3,
        scenario4=answers.scenario4,
        scenario5=answers.scenario5,
        shipped_text=contribution.shipped_text,
        created_link=contribution.created_link,
        project_text=contribution.project_text,
        availability_hours=capacity.availability_hours,
        led_team=capacity.led_team,
        handle_disagreement=capacity.handle_disagreement.value,
        drains_most=capacity.drains_most.value,
        builder_score=result.scores.builder,
        translator_score=result.scores.translator,
        architect_score=result.scores.architect,
        archetype_label=result.archetype,
        hidden_tier=result.tier,
        consent=submission.consent,
    )


class SubmissionService:
    """Score and persist submissions."""

    def __init__(self, repository, scorer: QuizScorer):
        self.repository = repository
        self.scorer = scorer

    def submit(self, submission: SubmissionCreate) -> tuple[SubmissionRecord, ScoringResult]:
        """
        Score and store one submission.

        Returns:
            (stored record, scoring result); the caller decides what the
            applicant gets to see.
        """
        result = self.scorer.score(
            submission.answers,
            availability_hours=submission.capacity.availability_hours,
            shipped_text=submission.contribution.shipped_text,
            handle_disagreement=submission.capacity.handle_disagreement.value,
        )
        record = self.repository.create(build_record(submission, result))
        invalidate_submission_cache()

        logger.info(
            "submission_created",
            submission_id=str(record.id),
            archetype=record.archetype_label,
            tier=record.hidden_tier.value,
        )
        return record, result


def submission_stats(repository) -> SubmissionStats:
    """Counts by tier (every tier present) and by archetype label."""
    records = repository.list()
    by_tier = Counter(r.hidden_tier.value for r in records)
    by_archetype = Counter(r.archetype_label for r in records)
    return SubmissionStats(
        total=len(records),
        by_tier={t.value: by_tier.get(t.value, 0) for t in Tier},
        by_archetype=dict(sorted(by_archetype.items())),
    )


def submissions_to_dataframe(records: Iterable[SubmissionRecord]) -> pd.DataFrame:
    """Tabulate records with export headers; booleans become Yes/No, None becomes ''."""
    rows: List[dict] = []
    for record in records:
        data = record.model_dump(mode="json")
        row = {}
        for header, attr in EXPORT_COLUMNS:
            value = data[attr]
            if isinstance(value, bool):
                value = "Yes" if value else "No"
            elif value is None:
                value = ""
            row[header] = value
        rows.append(row)
    return pd.DataFrame(rows, columns=[header for header, _ in EXPORT_COLUMNS])


def export_csv(records: Iterable[SubmissionRecord]) -> str:
    """Render records as CSV: bare header line, every data cell quoted."""
    df = submissions_to_dataframe(records)
    header = ",".join(df.columns)
    body = df.to_csv(index=False, header=False, quoting=csv.QUOTE_ALL, lineterminator="\n")
    return f"{header}\n{body}"


def export_filename(now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"champ_entries_{now.date().isoformat()}.csv"
