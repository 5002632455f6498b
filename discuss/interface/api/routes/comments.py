"""Comment routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.security import HTTPAuthorizationCredentials
from pydantic import BaseModel, ConfigDict, Field

from discuss.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    GetCommentRequest,
    GetCommentUseCase,
    ListCommentsRequest,
    ListCommentsUseCase,
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from discuss.domain.error import DomainError
from discuss.domain.model import CommentPage, CommentView
from discuss.domain.service import JWTService, UserService
from discuss.domain.value import MAX_CONTENT_LENGTH, CommentSortOrder
from discuss.interface.api.security import bearer_scheme, require_user_id
from discuss.interface.error import http_error

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)


class CommentContentAPIRequest(BaseModel):
    """API request body carrying comment text."""

    model_config = ConfigDict(str_strip_whitespace=True)

    content: str = Field(min_length=1, max_length=MAX_CONTENT_LENGTH)


class CreateCommentAPIRequest(CommentContentAPIRequest):
    """API request for creating a comment."""

    parent_id: str | None = None  # Parent comment ID for replies


@router.get("", response_model=CommentPage)
async def list_comments(
    list_comments_use_case: FromDishka[ListCommentsUseCase],
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    sort: CommentSortOrder = Query(default=CommentSortOrder.NEWEST),
) -> CommentPage:
    """List top-level comments with their direct replies.

    Public endpoint.

    Args:
        list_comments_use_case: List comments use case from DI
        page: 1-based page number
        limit: Page size
        sort: newest, mostLiked or mostDisliked

    Returns:
        Page of comments with pagination info
    """
    try:
        request = ListCommentsRequest(page=page, limit=limit, sort=sort)
        return await list_comments_use_case.execute(request)
    except DomainError as e:
        raise http_error(e, "list comments")


@router.get("/{comment_id}", response_model=CommentView)
async def get_comment(
    comment_id: str,
    get_comment_use_case: FromDishka[GetCommentUseCase],
) -> CommentView:
    """Get a single comment with its direct replies.

    Public endpoint.
    """
    try:
        return await get_comment_use_case.execute(
            GetCommentRequest(comment_id=comment_id)
        )
    except DomainError as e:
        raise http_error(e, "get comment")


@router.post("", response_model=CommentView, status_code=status.HTTP_201_CREATED)
async def create_comment(
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    user_service: FromDishka[UserService],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> CommentView:
    """Create a top-level comment or reply to another comment.

    Requires authentication. Broadcasts comment:created.

    Args:
        request: Comment content and optional parent ID
        create_comment_use_case: Create comment use case from DI
        jwt_service: JWT service for token verification (injected)
        user_service: User service for token user lookup (injected)
        credentials: Bearer token

    Returns:
        Created comment

    Raises:
        HTTPException: If not authenticated, the parent is missing, or validation fails
    """
    user_id = await require_user_id(
        jwt_service, user_service, credentials, "create comments"
    )

    try:
        use_case_request = CreateCommentRequest(
            content=request.content,
            author_id=user_id,
            parent_id=request.parent_id,
        )
        return await create_comment_use_case.execute(use_case_request)
    except DomainError as e:
        raise http_error(e, "create comment")


@router.put("/{comment_id}", response_model=CommentView)
async def update_comment(
    comment_id: str,
    request: CommentContentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    user_service: FromDishka[UserService],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> CommentView:
    """Update a comment's content.

    Only the comment author can edit. Broadcasts comment:updated.

    Raises:
        HTTPException: If not authenticated, not the author, missing, or invalid
    """
    user_id = await require_user_id(
        jwt_service, user_service, credentials, "edit comments"
    )

    try:
        use_case_request = UpdateCommentRequest(
            comment_id=comment_id,
            user_id=user_id,
            content=request.content,
        )
        return await update_comment_use_case.execute(use_case_request)
    except DomainError as e:
        raise http_error(e, "edit this comment")


@router.delete("/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    user_service: FromDishka[UserService],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> DeleteCommentResponse:
    """Delete a comment and all of its replies.

    Only the comment author can delete. Broadcasts comment:deleted.

    Raises:
        HTTPException: If not authenticated, not the author, or missing
    """
    user_id = await require_user_id(
        jwt_service, user_service, credentials, "delete comments"
    )

    try:
        use_case_request = DeleteCommentRequest(comment_id=comment_id, user_id=user_id)
        return await delete_comment_use_case.execute(use_case_request)
    except DomainError as e:
        raise http_error(e, "delete this comment")
