"""
Repositories Package - Champ Funnel
champ_funnel/repositories/__init__.py

Data access layer for submissions (Snowflake or in-memory).
"""

from champ_funnel.repositories.base import BaseRepository
from champ_funnel.repositories.memory_repository import InMemorySubmissionRepository
from champ_funnel.repositories.submission_repository import SubmissionRepository

__all__ = [
    "BaseRepository",
    "InMemorySubmissionRepository",
    "SubmissionRepository",
]
