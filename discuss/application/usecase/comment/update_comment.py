"""Update comment use case."""

from pydantic import BaseModel

from discuss.domain.service import CommentService
from discuss.domain.value import CommentId, UserId


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: int
    user_id: int  # Current user ID (must be author)
    text: str | None = None


class UpdateCommentResponse(BaseModel):
    """Update comment response."""

    comment_id: int


class UpdateCommentUseCase:
    """Use case for updating a comment's text content."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: UpdateCommentRequest) -> UpdateCommentResponse:
        """Execute update comment flow.

        Raises:
            ForbiddenError: If the user does not own the comment
        """
        comment_id = await self.comment_service.update(
            user_id=UserId(request.user_id),
            comment_id=CommentId(request.comment_id),
            text=request.text,
        )
        return UpdateCommentResponse(comment_id=comment_id)
