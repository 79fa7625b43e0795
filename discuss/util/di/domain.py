"""Domain layer DI providers."""

from dishka import Scope, provide

from discuss.config import CommentSettings
from discuss.domain.repository import (
    ClosurePathRepository,
    CommentRepository,
    CommunityRepository,
    ProfileRepository,
    TransactionManager,
)
from discuss.domain.service import (
    CommentService,
    CommunityAccessService,
    PathMaintainer,
    PermissionOracle,
    PostLookup,
    TreeAssembler,
)
from discuss.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped; each request gets fresh instances
    and opens its own transactions through the TransactionManager.
    """

    scope = Scope.REQUEST

    @provide
    def get_path_maintainer(
        self,
        comment_repository: CommentRepository,
        closure_path_repository: ClosurePathRepository,
    ) -> PathMaintainer:
        """Provide closure path maintainer."""
        return PathMaintainer(
            comment_repository=comment_repository,
            closure_path_repository=closure_path_repository,
        )

    @provide
    def get_tree_assembler(
        self,
        comment_repository: CommentRepository,
        closure_path_repository: ClosurePathRepository,
        profile_repository: ProfileRepository,
    ) -> TreeAssembler:
        """Provide comment tree assembler."""
        return TreeAssembler(
            comment_repository=comment_repository,
            closure_path_repository=closure_path_repository,
            profile_repository=profile_repository,
        )

    @provide
    def get_community_access_service(
        self, community_repository: CommunityRepository
    ) -> CommunityAccessService:
        """Provide default post lookup and permission policy."""
        return CommunityAccessService(community_repository=community_repository)

    @provide
    def get_post_lookup(self, access: CommunityAccessService) -> PostLookup:
        """Provide post lookup."""
        return access

    @provide
    def get_permission_oracle(self, access: CommunityAccessService) -> PermissionOracle:
        """Provide permission oracle."""
        return access

    @provide
    def get_comment_service(
        self,
        transaction_manager: TransactionManager,
        comment_repository: CommentRepository,
        path_maintainer: PathMaintainer,
        tree_assembler: TreeAssembler,
        post_lookup: PostLookup,
        permission_oracle: PermissionOracle,
        settings: CommentSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            transaction_manager=transaction_manager,
            comment_repository=comment_repository,
            path_maintainer=path_maintainer,
            tree_assembler=tree_assembler,
            post_lookup=post_lookup,
            permission_oracle=permission_oracle,
            settings=settings,
        )
