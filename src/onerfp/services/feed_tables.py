"""Table registry for the two post kinds.

Member posts and organization posts share one feed implementation; each
``PostKind`` resolves to its own post, comment and reaction tables.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from onerfp.models import (
    OrganizationPost,
    OrganizationPostComment,
    OrganizationPostCommentLike,
    OrganizationPostLike,
    Post,
    PostComment,
    PostCommentLike,
    PostLike,
)


class PostKind(str, Enum):
    MEMBER = "member"
    ORGANIZATION = "organization"


class ReactionTarget(str, Enum):
    POST = "post"
    COMMENT = "comment"


@dataclass(frozen=True)
class FeedTables:
    """ORM classes and foreign-key column names backing one post kind."""

    post: type[Any]
    comment: type[Any]
    post_reaction: type[Any]
    comment_reaction: type[Any]
    # Column on comment and post-reaction rows pointing at the post.
    post_fk: str
    # Column on comment-reaction rows pointing at the comment.
    comment_fk: str = "comment_id"

    def post_fk_column(self, model: type[Any]) -> Any:
        return getattr(model, self.post_fk)

    def reaction_model(self, target: ReactionTarget) -> type[Any]:
        return self.post_reaction if target is ReactionTarget.POST else self.comment_reaction

    def reaction_fk_column(self, target: ReactionTarget) -> Any:
        model = self.reaction_model(target)
        if target is ReactionTarget.POST:
            return getattr(model, self.post_fk)
        return getattr(model, self.comment_fk)

    def reaction_fk_name(self, target: ReactionTarget) -> str:
        return self.post_fk if target is ReactionTarget.POST else self.comment_fk


FEED_TABLES: dict[PostKind, FeedTables] = {
    PostKind.MEMBER: FeedTables(
        post=Post,
        comment=PostComment,
        post_reaction=PostLike,
        comment_reaction=PostCommentLike,
        post_fk="post_id",
    ),
    PostKind.ORGANIZATION: FeedTables(
        post=OrganizationPost,
        comment=OrganizationPostComment,
        post_reaction=OrganizationPostLike,
        comment_reaction=OrganizationPostCommentLike,
        post_fk="organization_post_id",
    ),
}


def tables_for(kind: PostKind | str) -> FeedTables:
    """Return the registry entry for ``kind``."""
    return FEED_TABLES[PostKind(kind)]
