"""Create comment use case."""

from pydantic import BaseModel

from discuss.domain.service import CommentService
from discuss.domain.value import CommentId, PostId, UserId


class CreateCommentRequest(BaseModel):
    """Create comment request.

    post_id and text are optional here so that missing values reach the
    domain service and fail as invalid arguments.
    """

    user_id: int
    post_id: int | None = None
    text: str | None = None
    parent_id: int | None = None  # None for top-level comments


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment_id: int


class CreateCommentUseCase:
    """Use case for creating a comment or a reply."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            ID of the created comment
        """
        comment_id = await self.comment_service.create(
            user_id=UserId(request.user_id),
            post_id=PostId(request.post_id) if request.post_id is not None else None,
            text=request.text,
            parent_id=(
                CommentId(request.parent_id) if request.parent_id is not None else None
            ),
        )
        return CreateCommentResponse(comment_id=comment_id)
