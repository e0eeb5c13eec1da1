"""Tests for profile, follow and notification endpoints."""

from fastapi import status
from fastapi.testclient import TestClient


def test_read_my_profile_includes_private_fields(
    client: TestClient, test_user, auth_token
) -> None:
    r = client.get("/api/v1/profiles/me", headers=auth_token)
    assert r.status_code == status.HTTP_200_OK
    data = r.json()
    assert data["id"] == test_user.id
    assert data["email"] == "alice@example.org"
    assert data["email_alerts_enabled"] is False


def test_read_my_profile_requires_auth(client: TestClient) -> None:
    r = client.get("/api/v1/profiles/me")
    assert r.status_code in {status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN}


def test_invalid_token_is_rejected(client: TestClient) -> None:
    r = client.get("/api/v1/profiles/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == status.HTTP_401_UNAUTHORIZED
    assert r.json()["detail"] == "Could not validate credentials"


def test_update_alert_settings_strips_keywords(client: TestClient, auth_token) -> None:
    r = client.patch(
        "/api/v1/profiles/me",
        json={"email_alerts_enabled": True, "alert_keywords": [" literacy ", "", "  "]},
        headers=auth_token,
    )
    assert r.status_code == status.HTTP_200_OK
    data = r.json()
    assert data["email_alerts_enabled"] is True
    assert data["alert_keywords"] == ["literacy"]

    r = client.patch("/api/v1/profiles/me", json={"alert_keywords": [" "]}, headers=auth_token)
    assert r.json()["alert_keywords"] is None


def test_public_profile_hides_email(client: TestClient, test_user) -> None:
    r = client.get(f"/api/v1/profiles/{test_user.id}")
    assert r.status_code == status.HTTP_200_OK
    data = r.json()
    assert data["full_name"] == "Alice Rivera"
    assert "email" not in data


def test_unknown_profile_returns_404(client: TestClient) -> None:
    r = client.get("/api/v1/profiles/00000000-0000-0000-0000-000000000000")
    assert r.status_code == status.HTTP_404_NOT_FOUND


def test_follow_toggle_and_notification(
    client: TestClient, test_user, other_user, auth_token, other_auth_token
) -> None:
    r = client.post(f"/api/v1/profiles/{other_user.id}/follow", headers=auth_token)
    assert r.status_code == status.HTTP_200_OK
    assert r.json() == {"is_following": True, "followers_count": 1}

    r = client.get(f"/api/v1/profiles/{other_user.id}/followers")
    assert [p["id"] for p in r.json()] == [test_user.id]
    r = client.get(f"/api/v1/profiles/{test_user.id}/following")
    assert [p["id"] for p in r.json()] == [other_user.id]

    r = client.get("/api/v1/profiles/me/notifications", headers=other_auth_token)
    assert r.status_code == status.HTTP_200_OK
    notifications = r.json()
    assert len(notifications) == 1
    assert notifications[0]["type"] == "new_follower"
    assert notifications[0]["actor"]["id"] == test_user.id

    r = client.post(f"/api/v1/profiles/{other_user.id}/follow", headers=auth_token)
    assert r.json() == {"is_following": False, "followers_count": 0}
    assert client.get(f"/api/v1/profiles/{other_user.id}/followers").json() == []


def test_cannot_follow_self(client: TestClient, test_user, auth_token) -> None:
    r = client.post(f"/api/v1/profiles/{test_user.id}/follow", headers=auth_token)
    assert r.status_code == status.HTTP_400_BAD_REQUEST


def test_follow_unknown_profile(client: TestClient, auth_token) -> None:
    r = client.post("/api/v1/profiles/missing-profile/follow", headers=auth_token)
    assert r.status_code == status.HTTP_404_NOT_FOUND


def test_bookmarked_organizations(client: TestClient, organization, auth_token) -> None:
    assert client.get("/api/v1/profiles/me/bookmarks", headers=auth_token).json() == []

    r = client.post(f"/api/v1/organizations/{organization.slug}/bookmark", headers=auth_token)
    assert r.status_code == status.HTTP_200_OK

    r = client.get("/api/v1/profiles/me/bookmarks", headers=auth_token)
    assert [org["slug"] for org in r.json()] == [organization.slug]
