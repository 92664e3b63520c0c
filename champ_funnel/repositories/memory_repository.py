"""
In-Memory Submission Repository - Champ Funnel
champ_funnel/repositories/memory_repository.py

Same interface as SubmissionRepository, backed by a dict. Selected with
SUBMISSION_STORE=memory; entries are lost on restart.
"""

import threading
from typing import Dict, List, Optional
from uuid import UUID

import structlog

from champ_funnel.core.exceptions import DuplicateEntityException
from champ_funnel.models.submission import SubmissionRecord

logger = structlog.get_logger(__name__)


class InMemorySubmissionRepository:
    """Thread-safe dict-backed submission store."""

    def __init__(self):
        self._records: Dict[UUID, SubmissionRecord] = {}
        self._lock = threading.Lock()

    def ensure_table(self) -> None:
        return None

    def create(self, record: SubmissionRecord) -> SubmissionRecord:
        with self._lock:
            if record.id in self._records:
                raise DuplicateEntityException(f"Submission {record.id} already exists")
            self._records[record.id] = record
        logger.info("submission_stored_in_memory", submission_id=str(record.id))
        return record

    def get_by_id(self, submission_id: UUID) -> Optional[SubmissionRecord]:
        with self._lock:
            return self._records.get(submission_id)

    def list(
        self,
        archetype: Optional[str] = None,
        tier: Optional[str] = None,
        newest_first: bool = True,
    ) -> List[SubmissionRecord]:
        with self._lock:
            records = list(self._records.values())
        if archetype:
            records = [r for r in records if r.archetype_label == archetype]
        if tier:
            records = [r for r in records if r.hidden_tier.value == tier]
        return sorted(records, key=lambda r: r.created_at, reverse=newest_first)

    def count(self) -> int:
        with self._lock:
            return len(self._records)

    def archetype_labels(self) -> List[str]:
        with self._lock:
            return sorted({r.archetype_label for r in self._records.values()})

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
