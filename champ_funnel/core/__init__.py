"""
Core Package - Champ Funnel
champ_funnel/core/__init__.py

Core infrastructure: dependencies, exceptions, logging.
"""

from champ_funnel.core.exceptions import (
    DatabaseConnectionException,
    DuplicateEntityException,
    GateLockedException,
    GateSessionNotFoundException,
    InvalidChoiceException,
    InvalidValueException,
    MissingRequiredFieldException,
    RepositoryException,
    ScoringInputException,
    SubmissionNotFoundException,
)

__all__ = [
    "DatabaseConnectionException",
    "DuplicateEntityException",
    "GateLockedException",
    "GateSessionNotFoundException",
    "InvalidChoiceException",
    "InvalidValueException",
    "MissingRequiredFieldException",
    "RepositoryException",
    "ScoringInputException",
    "SubmissionNotFoundException",
]
