"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .alerts import AlertRunResult
from .comment import CommentCreate, CommentResponse, CommentUpdate, MentionRef
from .mention import MentionResult
from .organization import (
    FocusAreasResponse,
    FocusAreasUpdate,
    ImpactDocument,
    MembershipResponse,
    MissionUpdate,
    NorthStarDocument,
    OrganizationResponse,
    OrganizationUpdate,
    PhotoCreate,
    PhotoOrder,
    PhotoResponse,
    PhotoUpdate,
    RoleChange,
    SocialState,
    TeamResponse,
)
from .post import PostCreate, PostResponse, PostUpdate
from .profile import (
    FollowState,
    MyProfileResponse,
    NotificationResponse,
    NotificationsMarkedRead,
    ProfileResponse,
    ProfileSummary,
    ProfileUpdate,
)
from .reaction import ReactionCreate, ReactionState, ReactionSummaryItem, Reactor

__all__ = [
    "AlertRunResult",
    "CommentCreate", "CommentResponse", "CommentUpdate", "MentionRef",
    "MentionResult",
    "FocusAreasResponse", "FocusAreasUpdate", "ImpactDocument", "MembershipResponse",
    "MissionUpdate", "NorthStarDocument", "OrganizationResponse", "OrganizationUpdate",
    "PhotoCreate", "PhotoOrder", "PhotoResponse", "PhotoUpdate", "RoleChange",
    "SocialState", "TeamResponse",
    "PostCreate", "PostResponse", "PostUpdate",
    "FollowState", "MyProfileResponse", "NotificationResponse",
    "NotificationsMarkedRead", "ProfileResponse", "ProfileSummary", "ProfileUpdate",
    "ReactionCreate", "ReactionState", "ReactionSummaryItem", "Reactor",
]
