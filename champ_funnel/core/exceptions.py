"""
Custom Exceptions - Champ Funnel
champ_funnel/core/exceptions.py

Exception classes for scoring input validation, repository operations
and the calibration gate.
"""


# =============================================================================
# SCORING
# =============================================================================

class ScoringInputException(ValueError):
    """Base exception for answer sets the scoring engine refuses to score."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(message)


class InvalidChoiceException(ScoringInputException):
    """A scenario answer is outside {A, B, C}."""

    def __init__(self, field: str, value):
        self.value = value
        super().__init__(field, f"Invalid choice {value!r} for {field}; expected one of A, B, C")


class MissingRequiredFieldException(ScoringInputException):
    """A required scoring input is absent."""

    def __init__(self, field: str):
        super().__init__(field, f"Missing required field: {field}")


class InvalidValueException(ScoringInputException):
    """A scoring input is present but outside its domain."""

    def __init__(self, field: str, value, reason: str):
        self.value = value
        super().__init__(field, f"Invalid value {value!r} for {field}: {reason}")


# =============================================================================
# REPOSITORY
# =============================================================================

class RepositoryException(Exception):
    """Base exception for repository operations."""

    pass


class SubmissionNotFoundException(RepositoryException):
    """Submission not found in the store."""

    def __init__(self, submission_id: str):
        self.entity_type = "Submission"
        self.entity_id = submission_id
        super().__init__(f"Submission with ID {submission_id} not found")


class DuplicateEntityException(RepositoryException):
    """Duplicate entity violation."""

    def __init__(self, message: str = "Entity already exists"):
        self.message = message
        super().__init__(message)


class DatabaseConnectionException(RepositoryException):
    """Database connection failure."""

    def __init__(self, message: str = "Database connection failed"):
        self.message = message
        super().__init__(message)


# =============================================================================
# CALIBRATION GATE
# =============================================================================

class GateSessionNotFoundException(Exception):
    """Calibration session id is unknown or has been evicted."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Calibration session {session_id} not found")


class GateLockedException(Exception):
    """Navigation attempted before the calibration gate was unlocked."""

    def __init__(self, message: str = "Calibration gate is locked"):
        self.message = message
        super().__init__(message)
