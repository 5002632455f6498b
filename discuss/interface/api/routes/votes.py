"""Vote routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials

from discuss.application.usecase.vote import ToggleVoteRequest, ToggleVoteUseCase
from discuss.domain.error import DomainError
from discuss.domain.model import CommentView
from discuss.domain.service import JWTService, UserService
from discuss.domain.value import VoteKind
from discuss.interface.api.security import bearer_scheme, require_user_id
from discuss.interface.error import http_error

router = APIRouter(prefix="/comments", tags=["votes"], route_class=DishkaRoute)


@router.post("/{comment_id}/like", response_model=CommentView)
async def like_comment(
    comment_id: str,
    toggle_vote_use_case: FromDishka[ToggleVoteUseCase],
    jwt_service: FromDishka[JWTService],
    user_service: FromDishka[UserService],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> CommentView:
    """Toggle a like on a comment.

    Requires authentication. Liking clears an existing dislike; liking
    again removes the like. Broadcasts comment:liked.

    Args:
        comment_id: Comment UUID
        toggle_vote_use_case: Toggle vote use case from DI
        jwt_service: JWT service for token verification (injected)
        user_service: User service for token user lookup (injected)
        credentials: Bearer token

    Returns:
        The comment after the toggle

    Raises:
        HTTPException: If not authenticated or comment not found
    """
    user_id = await require_user_id(
        jwt_service, user_service, credentials, "vote"
    )

    try:
        request = ToggleVoteRequest(
            comment_id=comment_id, user_id=user_id, vote=VoteKind.LIKE
        )
        return await toggle_vote_use_case.execute(request)
    except DomainError as e:
        raise http_error(e, "like comment")


@router.post("/{comment_id}/dislike", response_model=CommentView)
async def dislike_comment(
    comment_id: str,
    toggle_vote_use_case: FromDishka[ToggleVoteUseCase],
    jwt_service: FromDishka[JWTService],
    user_service: FromDishka[UserService],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> CommentView:
    """Toggle a dislike on a comment.

    Requires authentication. Disliking clears an existing like; disliking
    again removes the dislike. Broadcasts comment:disliked.
    """
    user_id = await require_user_id(
        jwt_service, user_service, credentials, "vote"
    )

    try:
        request = ToggleVoteRequest(
            comment_id=comment_id, user_id=user_id, vote=VoteKind.DISLIKE
        )
        return await toggle_vote_use_case.execute(request)
    except DomainError as e:
        raise http_error(e, "dislike comment")
