"""Organization profile pages: details, mission, focus areas, photos and stories."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from onerfp.models import (
    Category,
    Organization,
    OrganizationCategory,
    OrganizationImpact,
    OrganizationNorthStar,
    OrganizationPhoto,
    Profile,
)

from .errors import NotFoundError, ValidationError
from .permissions import Permission, actor_has_permission, require_permission

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset(
    {
        "name",
        "type",
        "tagline",
        "description",
        "image_url",
        "banner_image_url",
        "location",
        "website",
        "year_founded",
        "ein",
    }
)


def get_organization(db: Session, id_or_slug: int | str) -> Organization:
    """Look an organization up by slug, falling back to a numeric id."""
    organization = None
    if isinstance(id_or_slug, str):
        organization = db.query(Organization).filter(Organization.slug == id_or_slug).first()
    if organization is None and str(id_or_slug).isdigit():
        organization = db.query(Organization).filter(
            Organization.id == int(id_or_slug)
        ).first()
    if organization is None:
        raise NotFoundError("Organization not found")
    return organization


def list_organizations(
    db: Session,
    *,
    type: str | None = None,
    search: str | None = None,
    limit: int = 50,
    offset: int = 0,
) -> list[Organization]:
    query = db.query(Organization)
    if type:
        query = query.filter(Organization.type == type)
    if search and search.strip():
        pattern = f"%{search.strip()}%"
        query = query.filter(
            or_(
                Organization.name.ilike(pattern),
                Organization.tagline.ilike(pattern),
                Organization.location.ilike(pattern),
            )
        )
    return query.order_by(Organization.name).offset(offset).limit(min(limit, 100)).all()


def update_organization(
    db: Session,
    actor: Profile,
    organization_id: int,
    changes: dict[str, Any],
) -> Organization:
    """Apply a partial update to the organization's editable fields."""
    organization = get_organization(db, organization_id)
    require_permission(db, actor, organization.id, Permission.EDIT_ORGANIZATION)

    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise ValidationError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")
    if "name" in changes and not (changes["name"] or "").strip():
        raise ValidationError("Organization name cannot be empty")

    for key, value in changes.items():
        setattr(organization, key, value)
    db.add(organization)
    db.commit()
    db.refresh(organization)
    logger.info("Organization %s updated by %s", organization.slug, actor.id)
    return organization


def update_mission(
    db: Session,
    actor: Profile,
    organization_id: int,
    mission_statement: str | None,
    mission_image_url: str | None = None,
) -> Organization:
    organization = get_organization(db, organization_id)
    require_permission(db, actor, organization.id, Permission.EDIT_ORGANIZATION)
    organization.mission_statement = (mission_statement or "").strip() or None
    organization.mission_image_url = mission_image_url or None
    db.add(organization)
    db.commit()
    db.refresh(organization)
    return organization


def set_focus_areas(
    db: Session,
    actor: Profile,
    organization_id: int,
    names: Iterable[str],
) -> list[str]:
    """Replace the organization's focus areas, creating unknown categories."""
    organization = get_organization(db, organization_id)
    require_permission(db, actor, organization.id, Permission.EDIT_ORGANIZATION)

    wanted: list[str] = []
    for name in names:
        cleaned = (name or "").strip()
        if cleaned and cleaned not in wanted:
            wanted.append(cleaned)

    categories: list[Category] = []
    for name in wanted:
        category = db.query(Category).filter(Category.name == name).first()
        if category is None:
            category = Category(name=name)
            db.add(category)
            db.flush()
        categories.append(category)

    db.query(OrganizationCategory).filter(
        OrganizationCategory.organization_id == organization.id
    ).delete(synchronize_session=False)
    for category in categories:
        db.add(OrganizationCategory(organization_id=organization.id, category_id=category.id))
    db.commit()
    db.refresh(organization)
    return organization.focus_areas


# Photos


def list_photos(db: Session, organization_id: int) -> list[OrganizationPhoto]:
    return (
        db.query(OrganizationPhoto)
        .filter(OrganizationPhoto.organization_id == organization_id)
        .order_by(OrganizationPhoto.display_order.asc(), OrganizationPhoto.id.asc())
        .all()
    )


def _get_photo(db: Session, organization_id: int, photo_id: int) -> OrganizationPhoto:
    photo = db.query(OrganizationPhoto).filter(
        OrganizationPhoto.id == photo_id,
        OrganizationPhoto.organization_id == organization_id,
    ).first()
    if photo is None:
        raise NotFoundError("Photo not found")
    return photo


def add_photo(
    db: Session,
    actor: Profile,
    organization_id: int,
    *,
    image_url: str,
    caption: str | None = None,
    alt_text: str | None = None,
    is_featured: bool = False,
) -> OrganizationPhoto:
    """Append a photo after the existing ones."""
    require_permission(db, actor, organization_id, Permission.EDIT_ORGANIZATION)
    if not image_url:
        raise ValidationError("image_url is required")
    position = (
        db.query(func.count(OrganizationPhoto.id))
        .filter(OrganizationPhoto.organization_id == organization_id)
        .scalar()
        or 0
    )
    photo = OrganizationPhoto(
        organization_id=organization_id,
        image_url=image_url,
        caption=caption,
        alt_text=alt_text,
        is_featured=is_featured,
        display_order=position,
    )
    db.add(photo)
    db.commit()
    db.refresh(photo)
    return photo


def update_photo(
    db: Session,
    actor: Profile,
    organization_id: int,
    photo_id: int,
    changes: dict[str, Any],
) -> OrganizationPhoto:
    require_permission(db, actor, organization_id, Permission.EDIT_ORGANIZATION)
    photo = _get_photo(db, organization_id, photo_id)
    for key in ("caption", "alt_text", "is_featured"):
        if key in changes:
            setattr(photo, key, changes[key])
    db.add(photo)
    db.commit()
    db.refresh(photo)
    return photo


def delete_photo(db: Session, actor: Profile, organization_id: int, photo_id: int) -> None:
    require_permission(db, actor, organization_id, Permission.EDIT_ORGANIZATION)
    photo = _get_photo(db, organization_id, photo_id)
    db.delete(photo)
    db.commit()


def reorder_photos(
    db: Session,
    actor: Profile,
    organization_id: int,
    photo_ids: Sequence[int],
) -> list[OrganizationPhoto]:
    """Set ``display_order`` to each photo's index in ``photo_ids``.

    ``photo_ids`` must name every photo of the organization exactly once.
    """
    require_permission(db, actor, organization_id, Permission.EDIT_ORGANIZATION)
    photos = {photo.id: photo for photo in list_photos(db, organization_id)}
    if len(photo_ids) != len(set(photo_ids)) or set(photo_ids) != set(photos):
        raise ValidationError("Photo order must list every photo exactly once")
    for index, photo_id in enumerate(photo_ids):
        photos[photo_id].display_order = index
        db.add(photos[photo_id])
    db.commit()
    return list_photos(db, organization_id)


# Impact and North Star documents


def get_impact(db: Session, organization_id: int) -> OrganizationImpact:
    """Return the impact document, or an empty unsaved one."""
    impact = db.query(OrganizationImpact).filter(
        OrganizationImpact.organization_id == organization_id
    ).first()
    if impact is None:
        return OrganizationImpact(organization_id=organization_id, spotlights=[], testimonials=[])
    return impact


def replace_impact(
    db: Session,
    actor: Profile,
    organization_id: int,
    spotlights: list[dict[str, Any]],
    testimonials: list[dict[str, Any]],
) -> OrganizationImpact:
    require_permission(db, actor, organization_id, Permission.EDIT_ORGANIZATION)
    impact = db.query(OrganizationImpact).filter(
        OrganizationImpact.organization_id == organization_id
    ).first()
    if impact is None:
        impact = OrganizationImpact(organization_id=organization_id)
    impact.spotlights = list(spotlights)
    impact.testimonials = list(testimonials)
    db.add(impact)
    db.commit()
    db.refresh(impact)
    return impact


def get_north_star(
    db: Session,
    organization_id: int,
    viewer: Profile | None = None,
) -> OrganizationNorthStar:
    """Return the North Star page; drafts are only visible to editors."""
    page = db.query(OrganizationNorthStar).filter(
        OrganizationNorthStar.organization_id == organization_id
    ).first()
    can_edit = viewer is not None and actor_has_permission(
        db, viewer, organization_id, Permission.EDIT_ORGANIZATION
    )
    if page is None:
        if can_edit:
            return OrganizationNorthStar(
                organization_id=organization_id, blocks=[], is_published=False
            )
        raise NotFoundError("North Star page not found")
    if not page.is_published and not can_edit:
        raise NotFoundError("North Star page not found")
    return page


def replace_north_star(
    db: Session,
    actor: Profile,
    organization_id: int,
    blocks: list[dict[str, Any]],
    is_published: bool,
) -> OrganizationNorthStar:
    require_permission(db, actor, organization_id, Permission.EDIT_ORGANIZATION)
    page = db.query(OrganizationNorthStar).filter(
        OrganizationNorthStar.organization_id == organization_id
    ).first()
    if page is None:
        page = OrganizationNorthStar(organization_id=organization_id)
    page.blocks = list(blocks)
    page.is_published = is_published
    db.add(page)
    db.commit()
    db.refresh(page)
    return page
