"""Comment routes.

The caller is identified by the x-user-id header, set by the gateway in
front of this service. Reads accept anonymous callers; writes do not.
"""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, Query, status
from pydantic import BaseModel

from discuss.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)
from discuss.domain.error import InvalidArgumentError

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)


def caller_of(x_user_id: str | None) -> int | None:
    """Parse the x-user-id header, None for anonymous callers."""
    if x_user_id is None:
        return None
    try:
        return int(x_user_id)
    except ValueError:
        raise InvalidArgumentError("Invalid x-user-id") from None


def require_user(x_user_id: str | None) -> int:
    """Get the caller's ID or fail with 401."""
    user_id = caller_of(x_user_id)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return user_id


@router.get("", response_model=GetCommentsResponse)
async def get_comments(
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    post_id: int | None = Query(default=None),
    limit: int | None = Query(default=None),
    offset: int | None = Query(default=None),
    x_user_id: str | None = Header(default=None),
) -> GetCommentsResponse:
    """Get a page of root comments for a post with their full reply trees.

    Args:
        post_id: Post ID
        limit: Number of root comments per page
        offset: Number of root comments to skip
        x_user_id: Caller, optional

    Returns:
        Comments, total root count and hasMore flag
    """
    return await get_comments_use_case.execute(
        GetCommentsRequest(
            post_id=post_id, limit=limit, offset=offset, user_id=caller_of(x_user_id)
        )
    )


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    post_id: int | None = None
    text: str | None = None
    parent_id: int | None = None  # Parent comment ID for replies


@router.post(
    "",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    x_user_id: str | None = Header(default=None),
) -> CreateCommentResponse:
    """Create a comment on a post or reply to another comment.

    Returns:
        ID of the new comment
    """
    user_id = require_user(x_user_id)
    return await create_comment_use_case.execute(
        CreateCommentRequest(
            user_id=user_id,
            post_id=request.post_id,
            text=request.text,
            parent_id=request.parent_id,
        )
    )


class UpdateCommentAPIRequest(BaseModel):
    """API request for updating a comment."""

    comment_id: int
    text: str | None = None


@router.put("", response_model=UpdateCommentResponse)
async def update_comment(
    request: UpdateCommentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    x_user_id: str | None = Header(default=None),
) -> UpdateCommentResponse:
    """Update a comment's text. Only the author can edit."""
    user_id = require_user(x_user_id)
    return await update_comment_use_case.execute(
        UpdateCommentRequest(
            comment_id=request.comment_id, user_id=user_id, text=request.text
        )
    )


@router.delete("/{comment_id}/hard", response_model=DeleteCommentResponse)
async def hard_delete_comment(
    comment_id: int,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    x_user_id: str | None = Header(default=None),
) -> DeleteCommentResponse:
    """Remove a comment and all of its replies. Only the author can delete.

    Returns:
        IDs of every removed comment
    """
    user_id = require_user(x_user_id)
    return await delete_comment_use_case.execute(
        DeleteCommentRequest(comment_id=comment_id, user_id=user_id)
    )


class DeleteCommentAPIRequest(BaseModel):
    """API request for the body-addressed delete."""

    comment_id: int


@router.delete("", response_model=DeleteCommentResponse)
async def delete_comment(
    request: DeleteCommentAPIRequest,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    x_user_id: str | None = Header(default=None),
) -> DeleteCommentResponse:
    """Same as the hard delete route, with the ID in the request body."""
    user_id = require_user(x_user_id)
    return await delete_comment_use_case.execute(
        DeleteCommentRequest(comment_id=request.comment_id, user_id=user_id)
    )
