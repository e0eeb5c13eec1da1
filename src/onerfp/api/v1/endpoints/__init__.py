"""API endpoint modules for version 1."""

from .alerts import router as alerts_router
from .mentions import router as mentions_router
from .organizations import router as organizations_router
from .posts import organization_posts_router
from .posts import router as posts_router
from .profiles import router as profiles_router
from .system import router as system_router

__all__ = [
    "alerts_router",
    "mentions_router",
    "organizations_router",
    "organization_posts_router",
    "posts_router",
    "profiles_router",
    "system_router",
]
