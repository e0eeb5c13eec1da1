"""Organization team listing and membership management."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from onerfp.models import Organization, OrganizationMembership, Profile

from .errors import ConflictError, NotFoundError, PermissionDeniedError, ValidationError
from .permissions import (
    Role,
    can_demote_from_role,
    can_manage_user,
    can_promote_to_role,
    determine_join_role,
    membership_for,
    role_in,
)

logger = logging.getLogger(__name__)

LEADERSHIP_TITLE_WORDS = ("director", "ceo", "president", "executive")
BOARD_TITLE_WORDS = ("board", "trustee", "chair")

_ROLE_RANK = {Role.MEMBER: 0, Role.ADMIN: 1, Role.SUPER_ADMIN: 2}


@dataclass
class TeamGroups:
    leadership: list[OrganizationMembership] = field(default_factory=list)
    board: list[OrganizationMembership] = field(default_factory=list)
    staff: list[OrganizationMembership] = field(default_factory=list)


def _title(membership: OrganizationMembership) -> str:
    profile = membership.profile
    return (profile.title or "").lower() if profile else ""


def _is_leadership(membership: OrganizationMembership) -> bool:
    if membership.role in (Role.ADMIN.value, Role.SUPER_ADMIN.value):
        return True
    title = _title(membership)
    return any(word in title for word in LEADERSHIP_TITLE_WORDS)


def _is_board(membership: OrganizationMembership) -> bool:
    title = _title(membership)
    return any(word in title for word in BOARD_TITLE_WORDS)


def list_members(
    db: Session,
    organization_id: int,
    include_private: bool = False,
) -> list[OrganizationMembership]:
    query = db.query(OrganizationMembership).filter(
        OrganizationMembership.organization_id == organization_id
    )
    if not include_private:
        query = query.filter(OrganizationMembership.is_public.is_(True))
    return query.order_by(
        OrganizationMembership.joined_at.asc(), OrganizationMembership.id.asc()
    ).all()


def filter_members(
    members: Sequence[OrganizationMembership],
    search: str | None = None,
    role_filter: str = "all",
) -> list[OrganizationMembership]:
    """Case-insensitive name/title search plus an optional exact role filter."""
    needle = (search or "").lower()
    result = []
    for member in members:
        if needle:
            profile = member.profile
            name = (profile.full_name or "").lower() if profile else ""
            if needle not in name and needle not in _title(member):
                continue
        if role_filter != "all" and member.role != role_filter:
            continue
        result.append(member)
    return result


def group_members(members: Sequence[OrganizationMembership]) -> TeamGroups:
    """Split members into leadership, board and staff; each member lands in one group."""
    groups = TeamGroups()
    for member in members:
        if _is_leadership(member):
            groups.leadership.append(member)
        elif _is_board(member):
            groups.board.append(member)
        else:
            groups.staff.append(member)
    return groups


def join_organization(db: Session, organization_id: int, profile_id: str) -> OrganizationMembership:
    """Add the profile to the organization with the role ``determine_join_role`` picks."""
    if db.query(Organization.id).filter(Organization.id == organization_id).first() is None:
        raise NotFoundError("Organization not found")
    if membership_for(db, organization_id, profile_id) is not None:
        raise ConflictError("Already a member of this organization")

    role = determine_join_role(db, organization_id)
    membership = OrganizationMembership(
        organization_id=organization_id,
        profile_id=profile_id,
        role=role.value,
    )
    db.add(membership)
    db.commit()
    db.refresh(membership)
    logger.info("Profile %s joined organization %s as %s", profile_id, organization_id, role.value)
    return membership


def _target_membership(db: Session, organization_id: int, profile_id: str) -> OrganizationMembership:
    membership = membership_for(db, organization_id, profile_id)
    if membership is None:
        raise NotFoundError("Member not found")
    return membership


def change_member_role(
    db: Session,
    actor: Profile,
    organization_id: int,
    profile_id: str,
    new_role: Role | str,
) -> OrganizationMembership:
    """Promote or demote a member, enforcing the role hierarchy."""
    try:
        wanted = Role(new_role)
    except ValueError as exc:
        raise ValidationError(f"Unknown role: {new_role}") from exc
    if actor.id == profile_id:
        raise ValidationError("You cannot change your own role")

    membership = _target_membership(db, organization_id, profile_id)
    actor_role = role_in(db, organization_id, actor.id)
    omega = actor.is_omega_admin
    if not can_manage_user(actor_role, membership.role, omega):
        raise PermissionDeniedError("You cannot manage this member")

    current = Role(membership.role)
    if wanted is current:
        return membership
    if _ROLE_RANK[wanted] > _ROLE_RANK[current]:
        allowed = can_promote_to_role(actor_role, wanted, omega)
    else:
        allowed = can_demote_from_role(actor_role, current, omega)
    if not allowed:
        raise PermissionDeniedError(f"You cannot assign the {wanted.value} role")

    membership.role = wanted.value
    db.add(membership)
    db.commit()
    db.refresh(membership)
    logger.info(
        "Role of %s in organization %s changed %s -> %s by %s",
        profile_id, organization_id, current.value, wanted.value, actor.id,
    )
    return membership


def promote_member(
    db: Session, actor: Profile, organization_id: int, profile_id: str
) -> OrganizationMembership:
    return change_member_role(db, actor, organization_id, profile_id, Role.ADMIN)


def demote_member(
    db: Session, actor: Profile, organization_id: int, profile_id: str
) -> OrganizationMembership:
    return change_member_role(db, actor, organization_id, profile_id, Role.MEMBER)


def remove_member(db: Session, actor: Profile, organization_id: int, profile_id: str) -> None:
    """Remove a member; any member may remove themselves."""
    membership = _target_membership(db, organization_id, profile_id)
    if actor.id != profile_id:
        actor_role = role_in(db, organization_id, actor.id)
        if not can_manage_user(actor_role, membership.role, actor.is_omega_admin):
            raise PermissionDeniedError("You cannot remove this member")
    db.delete(membership)
    db.commit()
    logger.info("Profile %s removed from organization %s by %s", profile_id, organization_id, actor.id)
