"""Profile, follow and notification endpoints."""

from fastapi import APIRouter, Query, status

from onerfp.api.v1.dependencies import CurrentUserDep, SessionDep, service_errors
from onerfp.models import Notification, Organization, Profile
from onerfp.schemas import (
    FollowState,
    MyProfileResponse,
    NotificationResponse,
    NotificationsMarkedRead,
    OrganizationResponse,
    ProfileResponse,
    ProfileSummary,
    ProfileUpdate,
)
from onerfp.services import notifications
from onerfp.services import profiles as profile_service
from onerfp.services import social

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("/me", response_model=MyProfileResponse)
async def read_my_profile(current_user: CurrentUserDep) -> Profile:
    """Return the authenticated caller's profile, including alert settings."""
    return current_user


@router.patch("/me", response_model=MyProfileResponse)
async def update_my_profile(
    payload: ProfileUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Profile:
    """Apply a partial update from the settings forms."""
    return profile_service.update_profile(
        db, current_user, payload.model_dump(exclude_unset=True)
    )


@router.get("/me/notifications", response_model=list[NotificationResponse])
async def list_my_notifications(
    current_user: CurrentUserDep,
    db: SessionDep,
    limit: int = Query(50, ge=1, le=100),
    unread_only: bool = False,
) -> list[Notification]:
    return notifications.list_notifications(
        db, current_user.id, limit=limit, unread_only=unread_only
    )


@router.post("/me/notifications/read-all", response_model=NotificationsMarkedRead)
async def mark_all_my_notifications_read(
    current_user: CurrentUserDep,
    db: SessionDep,
) -> NotificationsMarkedRead:
    updated = notifications.mark_all_notifications_read(db, current_user.id)
    return NotificationsMarkedRead(updated=updated)


@router.patch("/me/notifications/{notification_id}", response_model=NotificationResponse)
async def mark_my_notification_read(
    notification_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Notification:
    with service_errors():
        return notifications.mark_notification_read(db, current_user.id, notification_id)


@router.get("/me/bookmarks", response_model=list[OrganizationResponse])
async def list_my_bookmarks(current_user: CurrentUserDep, db: SessionDep) -> list[Organization]:
    return social.list_bookmarked_organizations(db, current_user.id)


@router.get("/{profile_id}", response_model=ProfileResponse)
async def read_profile(profile_id: str, db: SessionDep) -> Profile:
    with service_errors():
        return profile_service.get_profile(db, profile_id)


@router.get("/{profile_id}/followers", response_model=list[ProfileSummary])
async def list_profile_followers(profile_id: str, db: SessionDep) -> list[Profile]:
    with service_errors():
        profile_service.get_profile(db, profile_id)
    return social.list_followers(db, profile_id)


@router.get("/{profile_id}/following", response_model=list[ProfileSummary])
async def list_profile_following(profile_id: str, db: SessionDep) -> list[Profile]:
    with service_errors():
        profile_service.get_profile(db, profile_id)
    return social.list_following(db, profile_id)


@router.post("/{profile_id}/follow", response_model=FollowState, status_code=status.HTTP_200_OK)
async def toggle_follow(
    profile_id: str,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> FollowState:
    """Follow the profile, or unfollow it when already following."""
    with service_errors():
        state = social.toggle_profile_follow(db, current_user.id, profile_id)
    return FollowState.model_validate(state, from_attributes=True)
