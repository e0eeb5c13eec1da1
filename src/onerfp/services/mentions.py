"""@-mention lookup across profiles and organizations."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from onerfp.core.settings import settings
from onerfp.models import Organization, Profile

from . import procedures


@dataclass
class MentionResult:
    id: str
    name: str | None
    type: str
    avatar_url: str | None = None
    title: str | None = None
    organization_name: str | None = None
    role: str | None = None


def organization_mention_id(organization: Organization) -> str:
    """Slug when present, otherwise ``"{type}-{id}"``."""
    return organization.slug or f"{organization.type}-{organization.id}"


def _from_profile(profile: Profile) -> MentionResult:
    return MentionResult(
        id=profile.id,
        name=profile.full_name,
        type="user",
        avatar_url=profile.avatar_url,
        title=profile.title,
        organization_name=profile.organization_name,
        role=profile.role,
    )


def _from_organization(organization: Organization) -> MentionResult:
    return MentionResult(
        id=organization_mention_id(organization),
        name=organization.name,
        type="organization",
        avatar_url=organization.image_url,
        title=organization.tagline,
        organization_name="Nonprofit" if organization.type == "nonprofit" else "Funder",
        role=organization.type,
    )


def search_mentions(db: Session, query: str | None) -> list[MentionResult]:
    """Substring match over profiles then organizations.

    Queries shorter than ``MENTION_MIN_QUERY_LENGTH`` after trimming return no
    results; each source contributes at most ``MENTION_RESULT_LIMIT`` rows.
    """
    term = (query or "").strip()
    if len(term) < settings.mention_min_query_length:
        return []

    limit = settings.mention_result_limit
    profiles = procedures.search_profiles(db, term, limit=limit)
    organizations = (
        db.query(Organization)
        .filter(Organization.name.ilike(f"%{term}%"))
        .order_by(Organization.name)
        .limit(limit)
        .all()
    )
    return [_from_profile(p) for p in profiles] + [_from_organization(o) for o in organizations]
