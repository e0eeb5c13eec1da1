# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")

from onerfp.core.security import create_access_token
from onerfp.db.session import Base
from onerfp.db.session import get_db as app_get_session
from onerfp.main import app as fastapi_app
from onerfp.models import (
    Organization,
    OrganizationMembership,
    OrganizationPost,
    Post,
    Profile,
)

TEST_DB_URL = "sqlite://"


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def make_profile(db_session: Session, full_name: str | None, **fields) -> Profile:
    """Persist a profile; extra keyword arguments become column values."""
    profile = Profile(full_name=full_name, **fields)
    db_session.add(profile)
    db_session.flush()
    db_session.refresh(profile)
    return profile


def bearer(profile: Profile) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(profile.id)}"}


@pytest.fixture()
def test_user(db_session: Session) -> Iterator[Profile]:
    """Primary member: runs the test organization."""
    yield make_profile(
        db_session,
        "Alice Rivera",
        title="Executive Director",
        organization_name="Harbor Literacy Project",
        role="Nonprofit",
        email="alice@example.org",
    )


@pytest.fixture()
def other_user(db_session: Session) -> Iterator[Profile]:
    yield make_profile(
        db_session,
        "Bob Chen",
        title="Program Officer",
        organization_name="Eastside Foundation",
        role="Funder",
        email="bob@example.org",
    )


@pytest.fixture()
def omega_admin(db_session: Session) -> Iterator[Profile]:
    yield make_profile(db_session, "Olga Admin", is_omega_admin=True)


@pytest.fixture()
def auth_token(test_user: Profile) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return bearer(test_user)


@pytest.fixture()
def other_auth_token(other_user: Profile) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return bearer(other_user)


@pytest.fixture()
def omega_auth_token(omega_admin: Profile) -> dict[str, str]:
    return bearer(omega_admin)


@pytest.fixture()
def organization(db_session: Session) -> Iterator[Organization]:
    """Unclaimed nonprofit with no members."""
    organization = Organization(
        slug="harbor-literacy",
        name="Harbor Literacy Project",
        type="nonprofit",
        tagline="Books for every kid",
        location="Tulsa, OK",
    )
    db_session.add(organization)
    db_session.flush()
    db_session.refresh(organization)
    yield organization


@pytest.fixture()
def org_owner(
    db_session: Session, organization: Organization, test_user: Profile
) -> Iterator[OrganizationMembership]:
    """Make the primary user the organization's super admin."""
    membership = OrganizationMembership(
        organization_id=organization.id,
        profile_id=test_user.id,
        role="super_admin",
    )
    db_session.add(membership)
    db_session.flush()
    db_session.refresh(membership)
    yield membership


def add_member(
    db_session: Session,
    organization: Organization,
    profile: Profile,
    role: str = "member",
    is_public: bool = True,
) -> OrganizationMembership:
    membership = OrganizationMembership(
        organization_id=organization.id,
        profile_id=profile.id,
        role=role,
        is_public=is_public,
    )
    db_session.add(membership)
    db_session.flush()
    db_session.refresh(membership)
    return membership


@pytest.fixture()
def test_post(db_session: Session, test_user: Profile) -> Iterator[Post]:
    """Create a baseline member post for tests."""
    post = Post(profile_id=test_user.id, content="<p>Hello community</p>")
    db_session.add(post)
    db_session.flush()
    db_session.refresh(post)
    yield post


@pytest.fixture()
def org_post(
    db_session: Session, organization: Organization, test_user: Profile
) -> Iterator[OrganizationPost]:
    """Create a baseline organization post for tests."""
    post = OrganizationPost(
        organization_id=organization.id,
        profile_id=test_user.id,
        content="<p>Our spring book drive is live</p>",
    )
    db_session.add(post)
    db_session.flush()
    db_session.refresh(post)
    yield post
