"""Organization roles and the permission table that gates every mutation."""

from __future__ import annotations

from enum import Enum

from sqlalchemy.orm import Session

from onerfp.models import OrganizationMembership, Profile

from .errors import PermissionDeniedError


class Role(str, Enum):
    """Membership role inside an organization."""

    MEMBER = "member"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


class Permission(str, Enum):
    """Organization-level capabilities."""

    EDIT_ORGANIZATION = "edit_organization"
    DELETE_ORGANIZATION = "delete_organization"
    MANAGE_MEMBERS = "manage_members"
    INVITE_MEMBERS = "invite_members"
    REMOVE_MEMBERS = "remove_members"
    CHANGE_ROLES = "change_roles"
    MANAGE_ADMINS = "manage_admins"
    APPOINT_SUPER_ADMIN = "appoint_super_admin"


ROLE_PERMISSIONS: dict[Role, frozenset[Permission]] = {
    Role.SUPER_ADMIN: frozenset(Permission),
    Role.ADMIN: frozenset(
        {
            Permission.EDIT_ORGANIZATION,
            Permission.MANAGE_MEMBERS,
            Permission.INVITE_MEMBERS,
            Permission.REMOVE_MEMBERS,
        }
    ),
    Role.MEMBER: frozenset(),
}

ROLE_DISPLAY_NAMES: dict[Role, str] = {
    Role.SUPER_ADMIN: "Super Admin",
    Role.ADMIN: "Admin",
    Role.MEMBER: "Member",
}


def _as_role(role: Role | str | None) -> Role | None:
    if role is None:
        return None
    try:
        return Role(role)
    except ValueError:
        return None


def has_permission(
    role: Role | str | None,
    permission: Permission | str,
    is_omega_admin: bool = False,
) -> bool:
    """Return True if ``role`` grants ``permission``.

    Omega admins hold every permission regardless of role; an unknown or
    missing role holds none.
    """
    if is_omega_admin:
        return True
    resolved = _as_role(role)
    if resolved is None:
        return False
    try:
        wanted = Permission(permission)
    except ValueError:
        return False
    return wanted in ROLE_PERMISSIONS[resolved]


def can_manage_user(
    actor_role: Role | str | None,
    target_role: Role | str | None,
    is_omega_admin: bool = False,
) -> bool:
    """Return True if the actor may change or remove a member holding ``target_role``."""
    if is_omega_admin:
        return True
    actor = _as_role(actor_role)
    target = _as_role(target_role)
    if actor is Role.SUPER_ADMIN:
        return True
    return actor is Role.ADMIN and target is Role.MEMBER


def can_promote_to_role(
    actor_role: Role | str | None,
    new_role: Role | str | None,
    is_omega_admin: bool = False,
) -> bool:
    """Return True if the actor may grant ``new_role``."""
    target = _as_role(new_role)
    if target is None:
        return False
    if is_omega_admin:
        return True
    actor = _as_role(actor_role)
    if actor is Role.SUPER_ADMIN:
        return True
    if actor is Role.ADMIN:
        return target in (Role.MEMBER, Role.ADMIN)
    return False


def can_demote_from_role(
    actor_role: Role | str | None,
    current_role: Role | str | None,
    is_omega_admin: bool = False,
) -> bool:
    """Return True if the actor may take ``current_role`` away from a member."""
    current = _as_role(current_role)
    if current is None:
        return False
    if is_omega_admin:
        return True
    actor = _as_role(actor_role)
    if actor is Role.SUPER_ADMIN:
        return True
    if actor is Role.ADMIN:
        return current in (Role.ADMIN, Role.MEMBER)
    return False


def can_access_member_management(
    role: Role | str | None,
    is_omega_admin: bool = False,
) -> bool:
    if is_omega_admin:
        return True
    return _as_role(role) in (Role.SUPER_ADMIN, Role.ADMIN)


def role_display_name(role: Role | str | None, is_omega_admin: bool = False) -> str:
    """Human label for a role badge."""
    if is_omega_admin:
        return "Omega Admin"
    resolved = _as_role(role)
    if resolved is None:
        return "Member"
    return ROLE_DISPLAY_NAMES[resolved]


def membership_for(
    db: Session,
    organization_id: int,
    profile_id: str,
) -> OrganizationMembership | None:
    """Return the profile's membership row in the organization, if any."""
    return db.query(OrganizationMembership).filter(
        OrganizationMembership.organization_id == organization_id,
        OrganizationMembership.profile_id == profile_id,
    ).first()


def role_in(db: Session, organization_id: int, profile_id: str) -> str | None:
    membership = membership_for(db, organization_id, profile_id)
    return membership.role if membership else None


def actor_has_permission(
    db: Session,
    actor: Profile,
    organization_id: int,
    permission: Permission,
) -> bool:
    """Resolve the actor's role in the organization and check ``permission``."""
    if actor.is_omega_admin:
        return True
    return has_permission(role_in(db, organization_id, actor.id), permission)


def require_permission(
    db: Session,
    actor: Profile,
    organization_id: int,
    permission: Permission,
) -> None:
    """Raise ``PermissionDeniedError`` unless the actor holds ``permission``."""
    if not actor_has_permission(db, actor, organization_id, permission):
        raise PermissionDeniedError(
            f"You do not have permission to {permission.value.replace('_', ' ')}"
        )


def determine_join_role(db: Session, organization_id: int) -> Role:
    """Role for a new member: the first member of an unclaimed organization becomes super admin."""
    existing = db.query(OrganizationMembership.id).filter(
        OrganizationMembership.organization_id == organization_id,
        OrganizationMembership.role == Role.SUPER_ADMIN.value,
    ).first()
    return Role.MEMBER if existing else Role.SUPER_ADMIN
