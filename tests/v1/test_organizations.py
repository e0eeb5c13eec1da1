"""Tests for organization page, photo, story and team endpoints."""

from fastapi import status
from fastapi.testclient import TestClient

from tests.conftest import add_member, make_profile


def test_list_and_search_organizations(client: TestClient, organization) -> None:
    r = client.get("/api/v1/organizations/")
    assert r.status_code == status.HTTP_200_OK
    assert [org["slug"] for org in r.json()] == [organization.slug]

    r = client.get("/api/v1/organizations/", params={"search": "tulsa"})
    assert len(r.json()) == 1
    r = client.get("/api/v1/organizations/", params={"type": "foundation"})
    assert r.json() == []


def test_read_organization_by_slug_or_id(client: TestClient, organization) -> None:
    r = client.get(f"/api/v1/organizations/{organization.slug}")
    assert r.status_code == status.HTTP_200_OK
    assert r.json()["name"] == "Harbor Literacy Project"

    r = client.get(f"/api/v1/organizations/{organization.id}")
    assert r.json()["slug"] == organization.slug

    r = client.get("/api/v1/organizations/no-such-org")
    assert r.status_code == status.HTTP_404_NOT_FOUND


def test_update_requires_edit_permission(
    client: TestClient, organization, org_owner, other_user, auth_token, other_auth_token
) -> None:
    payload = {"tagline": "Reading changes everything"}
    r = client.patch(
        f"/api/v1/organizations/{organization.slug}", json=payload, headers=other_auth_token
    )
    assert r.status_code == status.HTTP_403_FORBIDDEN

    r = client.patch(f"/api/v1/organizations/{organization.slug}", json=payload, headers=auth_token)
    assert r.status_code == status.HTTP_200_OK
    assert r.json()["tagline"] == "Reading changes everything"


def test_plain_member_cannot_edit(
    client: TestClient, db_session, organization, other_user, other_auth_token
) -> None:
    add_member(db_session, organization, other_user, role="member")
    r = client.put(
        f"/api/v1/organizations/{organization.slug}/mission",
        json={"mission_statement": "Ours now"},
        headers=other_auth_token,
    )
    assert r.status_code == status.HTTP_403_FORBIDDEN


def test_omega_admin_can_edit_any_organization(
    client: TestClient, organization, omega_auth_token
) -> None:
    r = client.put(
        f"/api/v1/organizations/{organization.slug}/mission",
        json={"mission_statement": "  Every child reads.  "},
        headers=omega_auth_token,
    )
    assert r.status_code == status.HTTP_200_OK
    assert r.json()["mission_statement"] == "Every child reads."


def test_focus_areas_are_deduplicated(
    client: TestClient, organization, org_owner, auth_token
) -> None:
    r = client.put(
        f"/api/v1/organizations/{organization.slug}/focus-areas",
        json={"focus_areas": ["Housing", "Education", "Housing", "  "]},
        headers=auth_token,
    )
    assert r.status_code == status.HTTP_200_OK
    assert r.json() == {"focus_areas": ["Education", "Housing"]}

    r = client.put(
        f"/api/v1/organizations/{organization.slug}/focus-areas",
        json={"focus_areas": ["Arts"]},
        headers=auth_token,
    )
    assert r.json() == {"focus_areas": ["Arts"]}
    assert client.get(f"/api/v1/organizations/{organization.slug}").json()["focus_areas"] == [
        "Arts"
    ]


def test_social_follow_and_bookmark(
    client: TestClient, organization, auth_token, other_auth_token
) -> None:
    base = f"/api/v1/organizations/{organization.slug}"
    r = client.get(f"{base}/social")
    assert r.json() == {
        "is_following": False,
        "followers_count": 0,
        "is_bookmarked": False,
        "bookmarks_count": 0,
    }

    r = client.post(f"{base}/follow", headers=auth_token)
    assert r.json()["is_following"] is True
    r = client.post(f"{base}/follow", headers=other_auth_token)
    assert r.json()["followers_count"] == 2
    r = client.post(f"{base}/bookmark", headers=other_auth_token)
    assert r.json()["is_bookmarked"] is True

    r = client.get(f"{base}/social", headers=auth_token)
    data = r.json()
    assert data["followers_count"] == 2
    assert data["bookmarks_count"] == 1
    assert data["is_following"] is True
    assert data["is_bookmarked"] is False

    r = client.post(f"{base}/follow", headers=auth_token)
    assert r.json()["is_following"] is False
    assert r.json()["followers_count"] == 1


def test_follow_requires_auth(client: TestClient, organization) -> None:
    r = client.post(f"/api/v1/organizations/{organization.slug}/follow")
    assert r.status_code in {status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN}


def test_photo_gallery(
    client: TestClient, organization, org_owner, auth_token, other_auth_token
) -> None:
    base = f"/api/v1/organizations/{organization.slug}/photos"
    r = client.post(base, json={"image_url": "https://cdn/a.jpg"}, headers=other_auth_token)
    assert r.status_code == status.HTTP_403_FORBIDDEN

    first = client.post(base, json={"image_url": "https://cdn/a.jpg"}, headers=auth_token)
    assert first.status_code == status.HTTP_201_CREATED
    second = client.post(
        base, json={"image_url": "https://cdn/b.jpg", "caption": "Volunteers"}, headers=auth_token
    )
    assert first.json()["display_order"] == 0
    assert second.json()["display_order"] == 1
    a_id, b_id = first.json()["id"], second.json()["id"]

    r = client.put(f"{base}/order", json={"photo_ids": [b_id, a_id]}, headers=auth_token)
    assert r.status_code == status.HTTP_200_OK
    assert [photo["id"] for photo in r.json()] == [b_id, a_id]

    r = client.put(f"{base}/order", json={"photo_ids": [b_id]}, headers=auth_token)
    assert r.status_code == status.HTTP_400_BAD_REQUEST

    r = client.patch(f"{base}/{a_id}", json={"caption": "Reading hour"}, headers=auth_token)
    assert r.json()["caption"] == "Reading hour"

    r = client.delete(f"{base}/{b_id}", headers=auth_token)
    assert r.status_code == status.HTTP_204_NO_CONTENT
    assert [photo["id"] for photo in client.get(base).json()] == [a_id]

    r = client.delete(f"{base}/{b_id}", headers=auth_token)
    assert r.status_code == status.HTTP_404_NOT_FOUND


def test_impact_document(client: TestClient, organization, org_owner, auth_token) -> None:
    base = f"/api/v1/organizations/{organization.slug}/impact"
    r = client.get(base)
    assert r.status_code == status.HTTP_200_OK
    assert r.json()["spotlights"] == []

    document = {
        "spotlights": [{"title": "Summer reading", "body": "1,200 books"}],
        "testimonials": [{"quote": "My son loves it", "author": "A parent"}],
    }
    r = client.put(base, json=document, headers=auth_token)
    assert r.status_code == status.HTTP_200_OK

    data = client.get(base).json()
    assert data["spotlights"] == document["spotlights"]
    assert data["testimonials"] == document["testimonials"]


def test_north_star_drafts_are_hidden(
    client: TestClient, organization, org_owner, auth_token
) -> None:
    base = f"/api/v1/organizations/{organization.slug}/north-star"
    assert client.get(base).status_code == status.HTTP_404_NOT_FOUND

    r = client.get(base, headers=auth_token)
    assert r.status_code == status.HTTP_200_OK
    assert r.json()["blocks"] == []

    blocks = [{"type": "heading", "text": "Where we are going"}]
    r = client.put(base, json={"blocks": blocks, "is_published": False}, headers=auth_token)
    assert r.status_code == status.HTTP_200_OK
    assert client.get(base).status_code == status.HTTP_404_NOT_FOUND
    assert client.get(base, headers=auth_token).json()["blocks"] == blocks

    client.put(base, json={"blocks": blocks, "is_published": True}, headers=auth_token)
    r = client.get(base)
    assert r.status_code == status.HTTP_200_OK
    assert r.json()["is_published"] is True


def test_team_groups_and_private_members(
    client: TestClient, db_session, organization, org_owner, other_user, auth_token
) -> None:
    trustee = make_profile(db_session, "Dana Okafor", title="Board Trustee")
    add_member(db_session, organization, trustee)
    add_member(db_session, organization, other_user, is_public=False)

    r = client.get(f"/api/v1/organizations/{organization.slug}/members")
    assert r.status_code == status.HTTP_200_OK
    team = r.json()
    assert team["can_manage"] is False
    assert team["total"] == 2
    assert [m["profile"]["full_name"] for m in team["leadership"]] == ["Alice Rivera"]
    assert team["leadership"][0]["role_label"] == "Super Admin"
    assert [m["profile"]["full_name"] for m in team["board"]] == ["Dana Okafor"]
    assert team["staff"] == []

    r = client.get(f"/api/v1/organizations/{organization.slug}/members", headers=auth_token)
    team = r.json()
    assert team["can_manage"] is True
    assert team["total"] == 3
    assert [m["profile"]["full_name"] for m in team["staff"]] == ["Bob Chen"]

    r = client.get(
        f"/api/v1/organizations/{organization.slug}/members",
        params={"search": "dana"},
        headers=auth_token,
    )
    assert r.json()["total"] == 1


def test_first_member_claims_organization(
    client: TestClient, organization, auth_token, other_auth_token
) -> None:
    base = f"/api/v1/organizations/{organization.slug}/members/join"
    r = client.post(base, headers=other_auth_token)
    assert r.status_code == status.HTTP_201_CREATED
    assert r.json()["role"] == "super_admin"

    r = client.post(base, headers=auth_token)
    assert r.json()["role"] == "member"
    assert r.json()["role_label"] == "Member"

    r = client.post(base, headers=auth_token)
    assert r.status_code == status.HTTP_409_CONFLICT


def test_role_changes_follow_hierarchy(
    client: TestClient, db_session, organization, org_owner, other_user, auth_token,
    other_auth_token,
) -> None:
    staffer = make_profile(db_session, "Eli Park", title="Coordinator")
    add_member(db_session, organization, other_user)
    add_member(db_session, organization, staffer)
    base = f"/api/v1/organizations/{organization.slug}/members"

    r = client.patch(f"{base}/{other_user.id}", json={"role": "admin"}, headers=auth_token)
    assert r.status_code == status.HTTP_200_OK
    assert r.json()["role"] == "admin"

    # Admins manage members but cannot hand out super admin.
    r = client.patch(
        f"{base}/{staffer.id}", json={"role": "super_admin"}, headers=other_auth_token
    )
    assert r.status_code == status.HTTP_403_FORBIDDEN
    r = client.patch(
        f"{base}/{org_owner.profile_id}", json={"role": "member"}, headers=other_auth_token
    )
    assert r.status_code == status.HTTP_403_FORBIDDEN
    r = client.patch(f"{base}/{other_user.id}", json={"role": "member"}, headers=other_auth_token)
    assert r.status_code == status.HTTP_400_BAD_REQUEST

    r = client.delete(f"{base}/{staffer.id}", headers=other_auth_token)
    assert r.status_code == status.HTTP_204_NO_CONTENT

    r = client.delete(f"{base}/{other_user.id}", headers=other_auth_token)
    assert r.status_code == status.HTTP_204_NO_CONTENT
    r = client.get(base, headers=auth_token)
    assert r.json()["total"] == 1
