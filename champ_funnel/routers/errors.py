"""
Error Envelope - Champ Funnel
champ_funnel/routers/errors.py

Uniform error responses and the exception handlers registered in main.py.
"""

from datetime import datetime, timezone
from typing import Optional

import structlog
from fastapi import Request, status
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from champ_funnel.core.exceptions import (
    DatabaseConnectionException,
    GateLockedException,
    GateSessionNotFoundException,
    RepositoryException,
    ScoringInputException,
    SubmissionNotFoundException,
)

logger = structlog.get_logger(__name__)


#  Validation Error Messages


FIELD_MESSAGES = {
    "consent": {
        "value_error": "Consent is required to submit",
        "missing": "Consent is required to submit",
    },
    "contact.email": {
        "string_pattern_mismatch": "Email must be a valid email address",
        "missing": "Email is required",
    },
    "contact.age": {
        "less_than_equal": "Age must be between 18 and 100",
        "greater_than_equal": "Age must be between 18 and 100",
        "int_parsing": "Age must be a whole number",
    },
    "capacity.availability_hours": {
        "greater_than": "Availability must be a positive number of hours",
        "less_than_equal": "Availability cannot exceed the hours in a month",
    },
}

DEFAULT_MESSAGES = {
    "missing": "Field '{field}' is required",
    "enum": "Field '{field}' must be one of the listed options",
    "string_too_short": "Field '{field}' is too short",
    "string_too_long": "Field '{field}' is too long",
    "string_pattern_mismatch": "Field '{field}' has invalid format",
    "less_than_equal": "Field '{field}' exceeds maximum allowed value",
    "greater_than_equal": "Field '{field}' is below minimum allowed value",
    "greater_than": "Field '{field}' is below minimum allowed value",
    "uuid_parsing": "Field '{field}' must be a valid UUID",
    "string_type": "Field '{field}' must be a string",
    "float_type": "Field '{field}' must be a number",
    "float_parsing": "Field '{field}' must be a valid number",
    "int_type": "Field '{field}' must be an integer",
    "int_parsing": "Field '{field}' must be a valid integer",
    "bool_parsing": "Field '{field}' must be true or false",
    "json_invalid": "Malformed JSON request body",
    "extra_forbidden": "Unknown field '{field}' is not allowed",
}


class ErrorResponse(BaseModel):
    error_code: str
    message: str
    details: Optional[dict] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


def error_response(status_code: int, error_code: str, message: str,
                   details: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error_code=error_code, message=message, details=details).model_dump(mode="json"),
    )


def raise_error(status_code: int, error_code: str, message: str):
    raise HTTPException(
        status_code=status_code,
        detail=ErrorResponse(error_code=error_code, message=message).model_dump(mode="json"),
    )


def raise_submission_not_found():
    raise_error(status.HTTP_404_NOT_FOUND, "SUBMISSION_NOT_FOUND", "Submission not found")


def get_validation_message(field: str, error_type: str) -> str:
    if field in FIELD_MESSAGES:
        for key in FIELD_MESSAGES[field]:
            if key in error_type:
                return FIELD_MESSAGES[field][key]
    for key, template in DEFAULT_MESSAGES.items():
        if key in error_type:
            return template.format(field=field)
    return f"Invalid value for field '{field}'"


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if not errors:
        return error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, "VALIDATION_ERROR",
                              "Request validation failed")
    err = errors[0]
    error_type = err.get("type", "")
    loc = err.get("loc", [])
    if "json_invalid" in error_type:
        return error_response(status.HTTP_400_BAD_REQUEST, "INVALID_REQUEST",
                              "Malformed JSON request body")
    field = ".".join(str(l) for l in loc if l != "body")
    message = get_validation_message(field, error_type)
    return error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_ERROR",
        message,
        {"field": field, "type": error_type} if field else None,
    )


async def scoring_input_exception_handler(request: Request, exc: ScoringInputException):
    return error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "INVALID_ANSWERS",
        exc.message,
        {"field": exc.field, "type": type(exc).__name__},
    )


async def gate_locked_exception_handler(request: Request, exc: GateLockedException):
    return error_response(status.HTTP_403_FORBIDDEN, "GATE_LOCKED", exc.message)


async def gate_not_found_exception_handler(request: Request, exc: GateSessionNotFoundException):
    return error_response(status.HTTP_404_NOT_FOUND, "GATE_SESSION_NOT_FOUND", str(exc))


async def repository_exception_handler(request: Request, exc: RepositoryException):
    if isinstance(exc, SubmissionNotFoundException):
        return error_response(status.HTTP_404_NOT_FOUND, "SUBMISSION_NOT_FOUND", "Submission not found")
    logger.error("repository_error", path=request.url.path, error=str(exc))
    if isinstance(exc, DatabaseConnectionException):
        return error_response(status.HTTP_503_SERVICE_UNAVAILABLE, "DATABASE_UNAVAILABLE",
                              "Submission store is unavailable")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "DATABASE_ERROR",
                          "Submission store error")


async def http_exception_handler(request: Request, exc: HTTPException):
    """Flatten HTTPException into the error envelope."""
    if isinstance(exc.detail, dict) and "error_code" in exc.detail:
        content = {"details": None, **exc.detail}
        content.setdefault("timestamp", datetime.now(timezone.utc).isoformat())
    else:
        content = ErrorResponse(
            error_code="HTTP_ERROR",
            message=str(exc.detail),
        ).model_dump(mode="json")
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)
