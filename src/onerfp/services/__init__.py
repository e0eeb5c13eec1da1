"""Business logic services for the 1RFP community API."""

from .email import EmailSender, get_email_sender
from .errors import (
    CommunityError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from .feed_tables import PostKind, ReactionTarget

__all__ = [
    "EmailSender",
    "get_email_sender",
    "CommunityError",
    "ConflictError",
    "NotFoundError",
    "PermissionDeniedError",
    "ValidationError",
    "PostKind",
    "ReactionTarget",
]
