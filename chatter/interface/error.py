"""Interface layer error mapping."""

import logfire
from fastapi import HTTPException, status

from chatter.domain.error import (
    BusinessRuleViolationError,
    DomainError,
    InvalidParentError,
    NotAuthorizedError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)


def to_http_exception(error: DomainError) -> HTTPException:
    """Map a domain error to the HTTP error returned to clients."""
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, NotAuthorizedError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(error))
    if isinstance(
        error, (ValidationError, InvalidParentError, BusinessRuleViolationError)
    ):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    if isinstance(error, StoreUnavailableError):
        logfire.error("Store unavailable", error=str(error))
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Comments are temporarily unavailable",
        )
    logfire.error("Unhandled domain error", error=str(error), type=type(error).__name__)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal error"
    )
