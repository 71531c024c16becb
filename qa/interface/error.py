"""Translation of domain errors into HTTP errors."""

import logfire
import pydantic
from fastapi import HTTPException, status

from qa.domain.error import (
    ConflictingWriteError,
    DomainError,
    ForbiddenSelfVoteError,
    InvalidVoteTypeError,
    NotAuthorizedError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)

# Most specific first
STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (ForbiddenSelfVoteError, status.HTTP_403_FORBIDDEN),
    (NotAuthorizedError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InvalidVoteTypeError, status.HTTP_400_BAD_REQUEST),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ConflictingWriteError, status.HTTP_409_CONFLICT),
]


def status_for(error: DomainError) -> int:
    """HTTP status code for a domain error (400 if unmapped)."""
    for error_type, code in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


def http_error(error: DomainError, operation: str) -> HTTPException:
    """Build the HTTPException for an expected domain failure.

    Args:
        error: The domain error raised by a use case
        operation: Short name of the failed operation, used in the log event

    Returns:
        HTTPException carrying the user-facing message
    """
    code = status_for(error)
    logfire.warn(
        f"{operation} failed",
        error=str(error),
        error_type=type(error).__name__,
        status_code=code,
    )
    return HTTPException(status_code=code, detail=str(error))


def validation_error(error: pydantic.ValidationError, operation: str) -> HTTPException:
    """Build a 422 for content that fails model validation inside a use case."""
    logfire.warn(f"{operation} validation failed", error=str(error))
    return HTTPException(
        status_code=422,
        detail=error.errors(include_url=False, include_context=False),
    )


def unexpected_error(error: Exception, operation: str) -> HTTPException:
    """Build a 500 for an unexpected failure, logging it as an error."""
    logfire.error(
        f"Unexpected error in {operation}",
        error=str(error),
        error_type=type(error).__name__,
    )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {operation}",
    )
