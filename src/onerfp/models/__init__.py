"""SQLAlchemy models for the 1RFP application."""

from .grant import Grant
from .organization import (
    MEMBERSHIP_ROLES,
    Category,
    Organization,
    OrganizationCategory,
    OrganizationImpact,
    OrganizationMembership,
    OrganizationNorthStar,
    OrganizationPhoto,
)
from .post import OrganizationPost, OrganizationPostComment, Post, PostComment
from .profile import Profile
from .reaction import (
    DEFAULT_REACTION,
    REACTION_TYPES,
    OrganizationPostCommentLike,
    OrganizationPostLike,
    PostCommentLike,
    PostLike,
)
from .social import (
    NOTIFICATION_MENTION,
    NOTIFICATION_NEW_FOLLOWER,
    NOTIFICATION_ORGANIZATION_MENTION,
    Notification,
    OrganizationBookmark,
    OrganizationFollow,
    ProfileFollow,
)

__all__ = [
    "Grant",
    "MEMBERSHIP_ROLES", "Category", "Organization", "OrganizationCategory",
    "OrganizationImpact", "OrganizationMembership", "OrganizationNorthStar",
    "OrganizationPhoto",
    "OrganizationPost", "OrganizationPostComment", "Post", "PostComment",
    "Profile",
    "DEFAULT_REACTION", "REACTION_TYPES",
    "OrganizationPostCommentLike", "OrganizationPostLike", "PostCommentLike", "PostLike",
    "NOTIFICATION_MENTION", "NOTIFICATION_NEW_FOLLOWER", "NOTIFICATION_ORGANIZATION_MENTION",
    "Notification", "OrganizationBookmark",
    "OrganizationFollow", "ProfileFollow",
]
