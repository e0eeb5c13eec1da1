"""Bearer token helpers.

Sessions are issued by the hosted auth provider. The API only needs to verify
the token and read the profile id from the ``sub`` claim; ``create_access_token``
exists for local tooling and tests that need a valid token.
"""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from onerfp.core.settings import settings


class InvalidTokenError(ValueError):
    """Raised when a bearer token cannot be decoded or lacks a subject."""


def create_access_token(subject: str, extra_claims: dict[str, str] | None = None) -> str:
    """Create a signed JWT whose subject is a profile id."""
    to_encode: dict[str, object] = {"sub": subject}
    if extra_claims:
        to_encode.update(extra_claims)
    expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = expire
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_subject(token: str) -> str:
    """Return the profile id carried by ``token``.

    Raises:
        InvalidTokenError: If the signature, expiry or subject is invalid.
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as err:
        raise InvalidTokenError("Could not validate credentials") from err

    subject = payload.get("sub")
    if not subject or not isinstance(subject, str):
        raise InvalidTokenError("Could not validate credentials")
    return subject
