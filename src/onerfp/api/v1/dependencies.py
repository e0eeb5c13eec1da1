"""Shared API dependencies for authentication and error translation."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from onerfp.core.security import InvalidTokenError, decode_subject
from onerfp.db.session import get_db
from onerfp.models import Profile
from onerfp.services.errors import (
    CommunityError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()
optional_bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def _profile_from_token(token: str, db: Session) -> Profile:
    try:
        profile_id = decode_subject(token)
    except InvalidTokenError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err

    profile = db.query(Profile).filter(Profile.id == profile_id).first()
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Profile not found",
        )
    return profile


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    db: SessionDep,
) -> Profile:
    """Get the profile of the authenticated caller from the bearer token.

    Args:
        credentials: HTTP Bearer token credentials
        db: Database session

    Returns:
        Profile whose id is the token subject

    Raises:
        HTTPException: If token is invalid or the profile does not exist
    """
    return _profile_from_token(credentials.credentials, db)


def get_optional_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(optional_bearer_scheme)
    ],
    db: SessionDep,
) -> Profile | None:
    """Like ``get_current_user`` but anonymous callers yield ``None``."""
    if credentials is None:
        return None
    return _profile_from_token(credentials.credentials, db)


# Type aliases for current user dependencies
CurrentUserDep = Annotated[Profile, Depends(get_current_user)]
OptionalUserDep = Annotated[Profile | None, Depends(get_optional_user)]


_STATUS_FOR_ERROR: list[tuple[type[CommunityError], int]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (ConflictError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
]


def http_error(err: CommunityError) -> HTTPException:
    """Map a service exception to the matching HTTP error."""
    for error_type, status_code in _STATUS_FOR_ERROR:
        if isinstance(err, error_type):
            return HTTPException(status_code=status_code, detail=str(err))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err))


@contextmanager
def service_errors() -> Iterator[None]:
    """Re-raise service exceptions raised inside the block as ``HTTPException``."""
    try:
        yield
    except CommunityError as err:
        raise http_error(err) from err
