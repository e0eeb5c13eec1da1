"""Version 1 API endpoints."""

from .endpoints import (
    alerts_router,
    mentions_router,
    organization_posts_router,
    organizations_router,
    posts_router,
    profiles_router,
    system_router,
)

__all__ = [
    "alerts_router",
    "mentions_router",
    "organization_posts_router",
    "organizations_router",
    "posts_router",
    "profiles_router",
    "system_router",
]
