"""System and transparency endpoints for the 1RFP API."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from onerfp.core.settings import settings
from onerfp.db.session import get_db
from onerfp.models import (
    Organization,
    OrganizationPost,
    Post,
    Profile,
)
from onerfp.models.reaction import REACTION_TYPES
from onerfp.services.permissions import ROLE_PERMISSIONS

router = APIRouter(prefix="/system", tags=["system", "transparency"])

SessionDep = Annotated[Session, Depends(get_db)]


@router.get("/config")
async def get_public_config() -> dict[str, object]:
    """Return a sanitized snapshot of public runtime configuration.

    Excludes secrets and connection strings.
    """
    return {
        "app": {
            "name": settings.app_name,
            "version": settings.app_version,
        },
        "mentions": {
            "min_query_length": settings.mention_min_query_length,
            "result_limit": settings.mention_result_limit,
        },
        "reactions": list(REACTION_TYPES),
        "roles": {
            role.value: sorted(permission.value for permission in permissions)
            for role, permissions in ROLE_PERMISSIONS.items()
        },
        "grant_alerts": {
            "window_hours": settings.grant_alert_window_hours,
            "email_enabled": bool(settings.email_webhook_url),
        },
    }


@router.get("/stats")
async def get_stats(db: SessionDep) -> dict[str, Any]:
    """Return aggregate row counts for the transparency page."""
    return {
        "profiles": db.query(func.count(Profile.id)).scalar() or 0,
        "organizations": db.query(func.count(Organization.id)).scalar() or 0,
        "posts": db.query(func.count(Post.id)).scalar() or 0,
        "organization_posts": db.query(func.count(OrganizationPost.id)).scalar() or 0,
    }
