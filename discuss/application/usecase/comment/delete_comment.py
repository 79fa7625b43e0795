"""Delete comment use case."""

from pydantic import BaseModel

from discuss.domain.service import CommentService
from discuss.domain.value import CommentId, UserId


class DeleteCommentRequest(BaseModel):
    """Hard delete request."""

    comment_id: int
    user_id: int


class DeleteCommentResponse(BaseModel):
    """Hard delete response."""

    deleted_ids: list[int]


class DeleteCommentUseCase:
    """Use case for removing a comment together with all its replies."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        deleted = await self.comment_service.hard_delete(
            user_id=UserId(request.user_id),
            comment_id=CommentId(request.comment_id),
        )
        return DeleteCommentResponse(deleted_ids=list(deleted))
