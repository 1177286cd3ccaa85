"""Mapping from domain errors to HTTP errors."""

import logfire
from fastapi import HTTPException, status

from pinboard.domain.error import (
    ConflictError,
    DomainError,
    NotAuthorizedError,
    NotFoundError,
    PersistenceFault,
    ValidationError,
)

GENERIC_FAILURE = "Something went wrong. Please try again."


def to_http_exception(error: DomainError) -> HTTPException:
    """Convert a domain error into the HTTPException a route should raise.

    Storage failures are reported with a generic message; their detail is
    only logged.
    """
    if isinstance(error, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    if isinstance(error, NotAuthorizedError):
        return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(error))
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, ConflictError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(error))
    if isinstance(error, PersistenceFault):
        logfire.error("Persistence failure", error=str(error))
    else:
        logfire.error("Unhandled domain error", error=str(error))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=GENERIC_FAILURE
    )


def invalid_id(error: ValueError) -> HTTPException:
    """HTTP error for a malformed UUID in the path or body."""
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid ID: {error}"
    )
