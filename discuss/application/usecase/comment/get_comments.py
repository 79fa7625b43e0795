"""Get comments use case."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from discuss.domain.model import CommentNode
from discuss.domain.service import CommentService
from discuss.domain.value import PostId, UserId


class CommentNodeResponse(BaseModel):
    """Comment with its nested replies."""

    comment_id: int
    post_id: int
    user_id: int
    text: str
    created_at: datetime
    updated_at: datetime
    parent_id: int | None
    children_count: int
    children: list["CommentNodeResponse"]
    display_name: str | None = None
    profile_pic: str | None = None

    @classmethod
    def from_domain(cls, root: CommentNode) -> "CommentNodeResponse":
        """Convert an assembled node and its subtree, children first."""
        built: dict[int, CommentNodeResponse] = {}
        stack = [(root, False)]
        while stack:
            node, expanded = stack.pop()
            if not expanded:
                stack.append((node, True))
                stack.extend((child, False) for child in node.children)
                continue
            built[id(node)] = cls(
                comment_id=node.comment_id,
                post_id=node.post_id,
                user_id=node.user_id,
                text=node.text,
                created_at=node.created_at,
                updated_at=node.updated_at,
                parent_id=node.parent_id,
                children_count=node.children_count,
                children=[built.pop(id(child)) for child in node.children],
                display_name=node.display_name,
                profile_pic=node.profile_pic,
            )
        return built.pop(id(root))


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    post_id: int | None = None
    limit: int | None = None
    offset: int | None = None
    user_id: int | None = None  # Caller, when identified


class GetCommentsResponse(BaseModel):
    """Get comments response."""

    model_config = ConfigDict(populate_by_name=True)

    comments: list[CommentNodeResponse]
    total: int
    has_more: bool = Field(alias="hasMore")


class GetCommentsUseCase:
    """Use case for getting a page of threads for a post."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize get comments use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Root comments come newest first; replies under each comment come
        oldest first.

        Args:
            request: Post ID, paging and optional caller

        Returns:
            Page of threads with the total root count
        """
        page = await self.comment_service.list_for_post(
            post_id=PostId(request.post_id) if request.post_id is not None else None,
            limit=request.limit,
            offset=request.offset,
            user_id=UserId(request.user_id) if request.user_id is not None else None,
        )
        return GetCommentsResponse(
            comments=[CommentNodeResponse.from_domain(node) for node in page.comments],
            total=page.total,
            has_more=page.has_more,
        )
