"""Get current user use case."""

from datetime import datetime

from pydantic import BaseModel

from discuss.application.usecase.base import BaseUseCase
from discuss.domain.service import JWTService, UserService
from discuss.domain.value import parse_user_id


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    token: str  # JWT token


class GetCurrentUserResponse(BaseModel):
    """Get current user response."""

    user_id: str
    username: str
    avatar_url: str
    email: str | None
    created_at: datetime


class GetCurrentUserUseCase(BaseUseCase):
    """Use case for getting current authenticated user."""

    def __init__(self, jwt_service: JWTService, user_service: UserService) -> None:
        """Initialize get current user use case.

        Args:
            jwt_service: JWT token domain service
            user_service: User domain service
        """
        self.jwt_service = jwt_service
        self.user_service = user_service

    async def execute(self, request: GetCurrentUserRequest) -> GetCurrentUserResponse:
        """Execute get current user flow.

        Steps:
        1. Verify JWT token via JWT service
        2. Load user from database
        3. Return user info

        Args:
            request: Request with JWT token

        Returns:
            User information if token is valid and user exists

        Raises:
            JWTError: If token is invalid or expired
            NotFoundError: If user not found
        """
        payload = self.jwt_service.verify_token(request.token)

        user = await self.user_service.get_by_id(parse_user_id(payload.user_id))

        return GetCurrentUserResponse(
            user_id=str(user.id),
            username=user.username.root,
            avatar_url=user.display_avatar,
            email=user.email,
            created_at=user.created_at,
        )
