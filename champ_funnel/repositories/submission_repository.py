"""
Submission Repository - Champ Funnel
champ_funnel/repositories/submission_repository.py

Data access layer for funnel submissions stored in Snowflake.
Rows are insert-only; there is no update or delete path.
"""

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from champ_funnel.config import Settings
from champ_funnel.models.submission import SubmissionRecord
from champ_funnel.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

COLUMNS = [
    "id", "created_at",
    "first_name", "last_name", "age", "country", "city", "timezone", "email", "linkedin_url",
    "identity_choice", "scenario1", "scenario2", "scenario3", "scenario4", "scenario5",
    "shipped_text", "created_link", "project_text",
    "availability_hours", "led_team", "handle_disagreement", "drains_most",
    "builder_score", "translator_score", "architect_score", "archetype_label", "hidden_tier",
    "consent",
]

CREATE_TABLE_SQL = """
    CREATE TABLE IF NOT EXISTS {table} (
        ID                  VARCHAR(36) PRIMARY KEY,
        CREATED_AT          TIMESTAMP_TZ NOT NULL,
        FIRST_NAME          VARCHAR(100) NOT NULL,
        LAST_NAME           VARCHAR(100) NOT NULL,
        AGE                 INTEGER NOT NULL,
        COUNTRY             VARCHAR(100) NOT NULL,
        CITY                VARCHAR(100),
        TIMEZONE            VARCHAR(64) NOT NULL,
        EMAIL               VARCHAR(255) NOT NULL,
        LINKEDIN_URL        VARCHAR(500),
        IDENTITY_CHOICE     VARCHAR(1) NOT NULL,
        SCENARIO1           VARCHAR(1) NOT NULL,
        SCENARIO2           VARCHAR(1) NOT NULL,
        SCENARIO3           VARCHAR(1) NOT NULL,
        SCENARIO4           VARCHAR(1) NOT NULL,
        SCENARIO5           VARCHAR(1) NOT NULL,
        SHIPPED_TEXT        VARCHAR(600),
        CREATED_LINK        VARCHAR(500),
        PROJECT_TEXT        VARCHAR(400),
        AVAILABILITY_HOURS  INTEGER NOT NULL,
        LED_TEAM            BOOLEAN NOT NULL,
        HANDLE_DISAGREEMENT VARCHAR(64) NOT NULL,
        DRAINS_MOST         VARCHAR(64) NOT NULL,
        BUILDER_SCORE       NUMBER(5, 2) NOT NULL,
        TRANSLATOR_SCORE    NUMBER(5, 2) NOT NULL,
        ARCHITECT_SCORE     NUMBER(5, 2) NOT NULL,
        ARCHETYPE_LABEL     VARCHAR(64) NOT NULL,
        HIDDEN_TIER         VARCHAR(16) NOT NULL,
        CONSENT             BOOLEAN NOT NULL
    )
"""


class SubmissionRepository(BaseRepository):
    """Insert-only repository for scored submissions."""

    def __init__(self, settings: Settings):
        super().__init__(settings, settings.SNOWFLAKE_TABLE)

    def ensure_table(self) -> None:
        """Create the submissions table if it does not exist."""
        self.execute(CREATE_TABLE_SQL.format(table=self.table), commit=True)
        logger.info(f"Ensured table {self.table}")

    def create(self, record: SubmissionRecord) -> SubmissionRecord:
        """
        Insert a scored submission.

        Args:
            record: Fully populated, already-scored record

        Returns:
            The same record
        """
        data = record.model_dump(mode="json")
        self.insert(COLUMNS, [data[c] for c in COLUMNS])
        logger.info(f"Inserted submission {record.id} ({record.hidden_tier.value})")
        return record

    def get_by_id(self, submission_id: UUID) -> Optional[SubmissionRecord]:
        row = self.select({"id": str(submission_id)}, fetch_one=True)
        return self._row_to_record(row) if row else None

    def list(
        self,
        archetype: Optional[str] = None,
        tier: Optional[str] = None,
        newest_first: bool = True,
    ) -> List[SubmissionRecord]:
        """Submissions ordered by creation time, optionally filtered by label and tier."""
        rows = self.select(
            {"archetype_label": archetype or None, "hidden_tier": tier or None},
            order_by="created_at",
            descending=newest_first,
        )
        return [self._row_to_record(row) for row in rows]

    def count(self) -> int:
        row = self.execute(f"SELECT COUNT(*) AS N FROM {self.table}", fetch="one")
        return int(row["N"]) if row else 0

    def archetype_labels(self) -> List[str]:
        sql = f"SELECT DISTINCT ARCHETYPE_LABEL FROM {self.table} ORDER BY ARCHETYPE_LABEL"
        rows = self.execute(sql, fetch="all") or []
        return [row["ARCHETYPE_LABEL"] for row in rows]

    def _row_to_record(self, row: Dict[str, Any]) -> SubmissionRecord:
        data = self.lowercase_keys(row)
        data["created_at"] = self.normalize_timestamp(data.get("created_at"))
        # NUMBER(5, 2) arrives as Decimal
        for score in ("builder_score", "translator_score", "architect_score"):
            data[score] = float(data[score])
        return SubmissionRecord(**data)
