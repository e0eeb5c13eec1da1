"""Organization page, social, photo, story and team endpoints."""

from fastapi import APIRouter, Query, Response, status
from sqlalchemy.orm import Session

from onerfp.api.v1.dependencies import (
    CurrentUserDep,
    OptionalUserDep,
    SessionDep,
    service_errors,
)
from onerfp.models import Organization, OrganizationMembership, OrganizationPhoto
from onerfp.schemas import (
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
    ProfileSummary,
    RoleChange,
    SocialState,
    TeamResponse,
)
from onerfp.services import organizations as org_service
from onerfp.services import social, team
from onerfp.services.permissions import (
    can_access_member_management,
    role_display_name,
    role_in,
)

router = APIRouter(prefix="/organizations", tags=["organizations"])


def _organization(db: Session, slug: str) -> Organization:
    with service_errors():
        return org_service.get_organization(db, slug)


def _membership_response(membership: OrganizationMembership) -> MembershipResponse:
    return MembershipResponse(
        id=membership.id,
        organization_id=membership.organization_id,
        role=membership.role,
        role_label=role_display_name(membership.role),
        joined_at=membership.joined_at,
        is_public=membership.is_public,
        profile=ProfileSummary.model_validate(membership.profile),
    )


@router.get("/", response_model=list[OrganizationResponse])
async def list_organizations(
    db: SessionDep,
    type: str | None = Query(None, description="Filter by organization type"),
    search: str | None = Query(None, description="Substring of name, tagline or location"),
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
) -> list[Organization]:
    return org_service.list_organizations(
        db, type=type, search=search, limit=limit, offset=offset
    )


@router.get("/{slug}", response_model=OrganizationResponse)
async def read_organization(slug: str, db: SessionDep) -> Organization:
    return _organization(db, slug)


@router.patch("/{slug}", response_model=OrganizationResponse)
async def update_organization(
    slug: str,
    payload: OrganizationUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Organization:
    organization = _organization(db, slug)
    with service_errors():
        return org_service.update_organization(
            db, current_user, organization.id, payload.model_dump(exclude_unset=True)
        )


@router.put("/{slug}/mission", response_model=OrganizationResponse)
async def update_mission(
    slug: str,
    payload: MissionUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Organization:
    organization = _organization(db, slug)
    with service_errors():
        return org_service.update_mission(
            db,
            current_user,
            organization.id,
            payload.mission_statement,
            payload.mission_image_url,
        )


@router.put("/{slug}/focus-areas", response_model=FocusAreasResponse)
async def update_focus_areas(
    slug: str,
    payload: FocusAreasUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> FocusAreasResponse:
    organization = _organization(db, slug)
    with service_errors():
        names = org_service.set_focus_areas(db, current_user, organization.id, payload.focus_areas)
    return FocusAreasResponse(focus_areas=names)


# Social


@router.get("/{slug}/social", response_model=SocialState)
async def read_social_state(slug: str, viewer: OptionalUserDep, db: SessionDep) -> SocialState:
    """Follower and bookmark counts plus the caller's own flags."""
    organization = _organization(db, slug)
    state = social.organization_social_state(db, organization.id, viewer.id if viewer else None)
    return SocialState.model_validate(state, from_attributes=True)


@router.post("/{slug}/follow", response_model=SocialState)
async def toggle_follow(slug: str, current_user: CurrentUserDep, db: SessionDep) -> SocialState:
    organization = _organization(db, slug)
    with service_errors():
        state = social.toggle_organization_follow(db, organization.id, current_user.id)
    return SocialState.model_validate(state, from_attributes=True)


@router.post("/{slug}/bookmark", response_model=SocialState)
async def toggle_bookmark(slug: str, current_user: CurrentUserDep, db: SessionDep) -> SocialState:
    organization = _organization(db, slug)
    with service_errors():
        state = social.toggle_organization_bookmark(db, organization.id, current_user.id)
    return SocialState.model_validate(state, from_attributes=True)


# Photos


@router.get("/{slug}/photos", response_model=list[PhotoResponse])
async def list_photos(slug: str, db: SessionDep) -> list[OrganizationPhoto]:
    organization = _organization(db, slug)
    return org_service.list_photos(db, organization.id)


@router.post("/{slug}/photos", response_model=PhotoResponse, status_code=status.HTTP_201_CREATED)
async def add_photo(
    slug: str,
    payload: PhotoCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> OrganizationPhoto:
    organization = _organization(db, slug)
    with service_errors():
        return org_service.add_photo(db, current_user, organization.id, **payload.model_dump())


@router.put("/{slug}/photos/order", response_model=list[PhotoResponse])
async def reorder_photos(
    slug: str,
    payload: PhotoOrder,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> list[OrganizationPhoto]:
    organization = _organization(db, slug)
    with service_errors():
        return org_service.reorder_photos(db, current_user, organization.id, payload.photo_ids)


@router.patch("/{slug}/photos/{photo_id}", response_model=PhotoResponse)
async def update_photo(
    slug: str,
    photo_id: int,
    payload: PhotoUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> OrganizationPhoto:
    organization = _organization(db, slug)
    with service_errors():
        return org_service.update_photo(
            db, current_user, organization.id, photo_id, payload.model_dump(exclude_unset=True)
        )


@router.delete("/{slug}/photos/{photo_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_photo(
    slug: str,
    photo_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Response:
    organization = _organization(db, slug)
    with service_errors():
        org_service.delete_photo(db, current_user, organization.id, photo_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Impact and North Star


@router.get("/{slug}/impact", response_model=ImpactDocument)
async def read_impact(slug: str, db: SessionDep) -> ImpactDocument:
    organization = _organization(db, slug)
    return ImpactDocument.model_validate(org_service.get_impact(db, organization.id))


@router.put("/{slug}/impact", response_model=ImpactDocument)
async def replace_impact(
    slug: str,
    payload: ImpactDocument,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ImpactDocument:
    organization = _organization(db, slug)
    with service_errors():
        impact = org_service.replace_impact(
            db, current_user, organization.id, payload.spotlights, payload.testimonials
        )
    return ImpactDocument.model_validate(impact)


@router.get("/{slug}/north-star", response_model=NorthStarDocument)
async def read_north_star(slug: str, viewer: OptionalUserDep, db: SessionDep) -> NorthStarDocument:
    """Published page for everyone; editors also see drafts."""
    organization = _organization(db, slug)
    with service_errors():
        page = org_service.get_north_star(db, organization.id, viewer)
    return NorthStarDocument.model_validate(page)


@router.put("/{slug}/north-star", response_model=NorthStarDocument)
async def replace_north_star(
    slug: str,
    payload: NorthStarDocument,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> NorthStarDocument:
    organization = _organization(db, slug)
    with service_errors():
        page = org_service.replace_north_star(
            db, current_user, organization.id, payload.blocks, payload.is_published
        )
    return NorthStarDocument.model_validate(page)


# Team


@router.get("/{slug}/members", response_model=TeamResponse)
async def list_members(
    slug: str,
    viewer: OptionalUserDep,
    db: SessionDep,
    search: str | None = Query(None, description="Substring of name or title"),
    role: str = Query("all", description="'all' or one of member, admin, super_admin"),
) -> TeamResponse:
    """Team tab: members grouped into leadership, board and staff.

    Hidden memberships are included only for callers who can manage members.
    """
    organization = _organization(db, slug)
    can_manage = viewer is not None and can_access_member_management(
        role_in(db, organization.id, viewer.id), viewer.is_omega_admin
    )
    members = team.list_members(db, organization.id, include_private=can_manage)
    filtered = team.filter_members(members, search=search, role_filter=role)
    groups = team.group_members(filtered)
    return TeamResponse(
        total=len(filtered),
        leadership=[_membership_response(m) for m in groups.leadership],
        board=[_membership_response(m) for m in groups.board],
        staff=[_membership_response(m) for m in groups.staff],
        can_manage=can_manage,
    )


@router.post(
    "/{slug}/members/join",
    response_model=MembershipResponse,
    status_code=status.HTTP_201_CREATED,
)
async def join_organization(
    slug: str,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MembershipResponse:
    organization = _organization(db, slug)
    with service_errors():
        membership = team.join_organization(db, organization.id, current_user.id)
    return _membership_response(membership)


@router.patch("/{slug}/members/{profile_id}", response_model=MembershipResponse)
async def change_member_role(
    slug: str,
    profile_id: str,
    payload: RoleChange,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MembershipResponse:
    organization = _organization(db, slug)
    with service_errors():
        membership = team.change_member_role(
            db, current_user, organization.id, profile_id, payload.role
        )
    return _membership_response(membership)


@router.delete("/{slug}/members/{profile_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_member(
    slug: str,
    profile_id: str,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Response:
    organization = _organization(db, slug)
    with service_errors():
        team.remove_member(db, current_user, organization.id, profile_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
