"""Domain services."""

from discuss.domain.service.access import (
    CommunityAccessService,
    PermissionOracle,
    PostLookup,
)
from discuss.domain.service.base import Service
from discuss.domain.service.comment_service import CommentService
from discuss.domain.service.path_maintainer import PathMaintainer
from discuss.domain.service.tree_assembler import TreeAssembler, build_forest

__all__ = [
    "CommentService",
    "CommunityAccessService",
    "PathMaintainer",
    "PermissionOracle",
    "PostLookup",
    "Service",
    "TreeAssembler",
    "build_forest",
]
