"""Bearer token authentication for routes."""

import logfire
from fastapi import HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from discuss.domain.error import NotFoundError, ValidationError
from discuss.domain.service import JWTService, UserService
from discuss.domain.value import parse_user_id

# auto_error=False so that a missing header is reported as 401, not 403
bearer_scheme = HTTPBearer(auto_error=False)


def bearer_token(credentials: HTTPAuthorizationCredentials | None) -> str | None:
    """Extract the raw token from the Authorization header, if any."""
    return credentials.credentials if credentials else None


def _unauthorized(action: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=f"Authentication required to {action}",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def require_user_id(
    jwt_service: JWTService,
    user_service: UserService,
    credentials: HTTPAuthorizationCredentials | None,
    action: str,
) -> str:
    """Resolve the authenticated user ID or fail with 401.

    The token must be valid and its user must still exist, so that
    mutations are never attributed to an unknown author.

    Args:
        jwt_service: JWT service for token verification
        user_service: User service to confirm the token's user exists
        credentials: Bearer credentials from the request
        action: What the caller is trying to do, for the error message

    Returns:
        User ID from the token

    Raises:
        HTTPException: 401 if the token is missing, invalid, expired, or its
            user is gone
    """
    user_id = jwt_service.get_user_id_from_token(bearer_token(credentials))
    if not user_id:
        raise _unauthorized(action)

    try:
        user = await user_service.get_by_id(parse_user_id(user_id))
    except (NotFoundError, ValidationError) as e:
        logfire.warn("Token user rejected", user_id=user_id, error=str(e))
        raise _unauthorized(action)

    return str(user.id)
