"""Domain exceptions raised by the service layer.

Endpoints translate these into HTTP responses; services never raise
``HTTPException`` themselves so they stay usable from scripts.
"""

from __future__ import annotations


class CommunityError(RuntimeError):
    """Base class for service-level failures."""


class NotFoundError(CommunityError):
    """The requested row does not exist (or is not visible to the caller)."""


class PermissionDeniedError(CommunityError):
    """The acting profile lacks the role required for the mutation."""


class ConflictError(CommunityError):
    """The mutation would violate a uniqueness rule (duplicate follow, member, ...)."""


class ValidationError(CommunityError):
    """The request is well-formed but not acceptable (self-follow, empty post, ...)."""
