"""Tests for the mention autocomplete endpoint."""

from fastapi import status
from fastapi.testclient import TestClient

from onerfp.models import Organization
from tests.conftest import make_profile


def test_search_requires_auth(client: TestClient) -> None:
    r = client.get("/api/v1/mentions/search", params={"q": "harbor"})
    assert r.status_code in {status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN}


def test_short_query_returns_nothing(client: TestClient, auth_token) -> None:
    r = client.get("/api/v1/mentions/search", params={"q": " h "}, headers=auth_token)
    assert r.status_code == status.HTTP_200_OK
    assert r.json() == []


def test_profiles_come_before_organizations(
    client: TestClient, test_user, organization, auth_token
) -> None:
    r = client.get("/api/v1/mentions/search", params={"q": "HARBOR"}, headers=auth_token)
    assert r.status_code == status.HTTP_200_OK
    results = r.json()
    assert [(row["type"], row["id"]) for row in results] == [
        ("user", test_user.id),
        ("organization", "harbor-literacy"),
    ]
    assert results[1]["organization_name"] == "Nonprofit"
    assert results[1]["name"] == "Harbor Literacy Project"


def test_funders_are_labelled(client: TestClient, db_session, auth_token) -> None:
    db_session.add(Organization(slug="eastside", name="Eastside Foundation", type="foundation"))
    db_session.flush()

    r = client.get("/api/v1/mentions/search", params={"q": "eastside"}, headers=auth_token)
    orgs = [row for row in r.json() if row["type"] == "organization"]
    assert orgs[0]["organization_name"] == "Funder"
    assert orgs[0]["role"] == "foundation"


def test_results_are_capped_per_source(client: TestClient, db_session, auth_token) -> None:
    for n in range(7):
        make_profile(db_session, f"Grant Writer {n}")

    r = client.get("/api/v1/mentions/search", params={"q": "grant writer"}, headers=auth_token)
    names = [row["name"] for row in r.json()]
    assert names == [f"Grant Writer {n}" for n in range(5)]
