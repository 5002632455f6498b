"""Authentication routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials

from discuss.application.usecase.auth import (
    GetCurrentUserRequest,
    GetCurrentUserUseCase,
)
from discuss.application.usecase.auth.get_current_user import GetCurrentUserResponse
from discuss.domain.error import NotFoundError, ValidationError
from discuss.interface.api.security import bearer_scheme, bearer_token
from discuss.util.jwt import JWTError

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


@router.get("/me", response_model=GetCurrentUserResponse)
async def get_current_user(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> GetCurrentUserResponse:
    """Get the user the bearer token belongs to.

    Args:
        get_current_user_use_case: Get current user use case from DI
        credentials: Bearer token

    Returns:
        Current user information

    Raises:
        HTTPException: 401 if the token is missing, invalid, or its user is gone

    Example:
        {
            "user_id": "...",
            "username": "alice",
            "avatar_url": "https://ui-avatars.com/api/?name=alice&background=random",
            "email": null,
            "created_at": "..."
        }
    """
    token = bearer_token(credentials)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, no token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return await get_current_user_use_case.execute(
            GetCurrentUserRequest(token=token)
        )
    except (JWTError, ValidationError) as e:
        logfire.debug("Rejected bearer token", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, token failed",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except NotFoundError:
        # Token is valid but its user no longer exists
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, user not found",
            headers={"WWW-Authenticate": "Bearer"},
        )
