"""Interface layer error mapping."""

import logfire
from fastapi import HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from discuss.domain.error import (
    DomainError,
    NotAuthorizedError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)


def http_error(error: DomainError, action: str) -> HTTPException:
    """Map a domain error onto the HTTP error returned to the client.

    Args:
        error: Error raised by a use case
        action: What the route was doing, for logs and 500 messages

    Returns:
        HTTPException to raise from the route
    """
    if isinstance(error, NotFoundError):
        logfire.warn(f"{action} failed - not found", error=str(error))
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, NotAuthorizedError):
        logfire.warn(f"Unauthorized attempt to {action}", error=str(error))
        return HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Not authorized to {action}",
        )
    if isinstance(error, ValidationError):
        logfire.warn(f"{action} validation error", error=str(error))
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(error)
        )
    if isinstance(error, PersistenceError):
        logfire.error(f"Store failure during {action}", error=str(error))
    else:
        logfire.error(f"Unexpected error during {action}", error=str(error))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}",
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return malformed request bodies and queries as 400 with field details."""
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"][1:]) or None,
            "message": error["msg"],
            "value": error.get("input"),
        }
        for error in exc.errors()
    ]
    logfire.warn("Request validation failed", path=request.url.path, errors=len(errors))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({"message": "Validation failed", "errors": errors}),
    )

