"""Tests for member and organization post endpoints."""

from fastapi import status
from fastapi.testclient import TestClient

from tests.conftest import add_member, bearer, make_profile


def test_create_member_post(client: TestClient, test_user, auth_token) -> None:
    r = client.post(
        "/api/v1/posts/",
        json={
            "content": "<p>We just opened applications!</p>",
            "image_urls": ["https://cdn/flyer.png"],
            "tags": [{"type": "organization", "id": "harbor-literacy"}],
        },
        headers=auth_token,
    )
    assert r.status_code == status.HTTP_201_CREATED
    data = r.json()
    assert data["profile_id"] == test_user.id
    assert data["image_urls"] == ["https://cdn/flyer.png"]
    assert data["tags"] == [{"type": "organization", "id": "harbor-literacy"}]
    assert data["likes_count"] == 0
    assert data["comments_count"] == 0
    assert data["author"]["full_name"] == "Alice Rivera"


def test_empty_post_is_rejected(client: TestClient, auth_token) -> None:
    r = client.post("/api/v1/posts/", json={"content": "   "}, headers=auth_token)
    assert r.status_code == status.HTTP_400_BAD_REQUEST


def test_create_post_requires_auth(client: TestClient) -> None:
    r = client.post("/api/v1/posts/", json={"content": "hi"})
    assert r.status_code in {status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN}


def test_list_posts_newest_first_with_cursor(client: TestClient, auth_token) -> None:
    ids = []
    for n in range(3):
        r = client.post("/api/v1/posts/", json={"content": f"post {n}"}, headers=auth_token)
        ids.append(r.json()["id"])

    r = client.get("/api/v1/posts/", params={"limit": 2})
    assert r.status_code == status.HTTP_200_OK
    page = [post["id"] for post in r.json()]
    assert page == [ids[2], ids[1]]

    r = client.get("/api/v1/posts/", params={"limit": 2, "before_id": page[-1]})
    assert [post["id"] for post in r.json()] == [ids[0]]


def test_following_feed(
    client: TestClient, db_session, test_user, other_user, auth_token, other_auth_token
) -> None:
    stranger = make_profile(db_session, "Sam Stranger")
    client.post("/api/v1/posts/", json={"content": "mine"}, headers=auth_token)
    client.post("/api/v1/posts/", json={"content": "bob's"}, headers=other_auth_token)
    client.post("/api/v1/posts/", json={"content": "stranger's"}, headers=bearer(stranger))

    r = client.get("/api/v1/posts/", params={"following": True})
    assert r.status_code == status.HTTP_401_UNAUTHORIZED

    client.post(f"/api/v1/profiles/{other_user.id}/follow", headers=auth_token)
    r = client.get("/api/v1/posts/", params={"following": True}, headers=auth_token)
    authors = {post["profile_id"] for post in r.json()}
    assert authors == {test_user.id, other_user.id}


def test_only_author_edits_post(
    client: TestClient, test_post, auth_token, other_auth_token
) -> None:
    r = client.patch(
        f"/api/v1/posts/{test_post.id}", json={"content": "hijacked"}, headers=other_auth_token
    )
    assert r.status_code == status.HTTP_403_FORBIDDEN

    r = client.patch(
        f"/api/v1/posts/{test_post.id}",
        json={"content": "<p>Edited</p>", "tags": []},
        headers=auth_token,
    )
    assert r.status_code == status.HTTP_200_OK
    assert r.json()["content"] == "<p>Edited</p>"
    assert r.json()["tags"] == []


def test_delete_post_permissions(
    client: TestClient, test_post, other_auth_token, omega_auth_token
) -> None:
    r = client.delete(f"/api/v1/posts/{test_post.id}", headers=other_auth_token)
    assert r.status_code == status.HTTP_403_FORBIDDEN

    r = client.delete(f"/api/v1/posts/{test_post.id}", headers=omega_auth_token)
    assert r.status_code == status.HTTP_204_NO_CONTENT
    assert client.get(f"/api/v1/posts/{test_post.id}").status_code == status.HTTP_404_NOT_FOUND


def test_delete_post_removes_comments_and_reactions(
    client: TestClient, test_post, auth_token, other_auth_token
) -> None:
    r = client.post(
        f"/api/v1/posts/{test_post.id}/comments", json={"content": "Nice"}, headers=other_auth_token
    )
    comment_id = r.json()["id"]
    client.post(f"/api/v1/posts/{test_post.id}/reactions", json={}, headers=other_auth_token)
    client.post(f"/api/v1/posts/comments/{comment_id}/reactions", json={}, headers=auth_token)

    r = client.delete(f"/api/v1/posts/{test_post.id}", headers=auth_token)
    assert r.status_code == status.HTTP_204_NO_CONTENT
    r = client.get(f"/api/v1/posts/comments/{comment_id}/reactions")
    assert r.status_code == status.HTTP_404_NOT_FOUND


def test_organization_post_requires_editor(
    client: TestClient, organization, org_owner, auth_token, other_auth_token
) -> None:
    r = client.post(
        "/api/v1/organization-posts/", json={"content": "Hello"}, headers=auth_token
    )
    assert r.status_code == status.HTTP_400_BAD_REQUEST

    payload = {"content": "Volunteer day Saturday", "organization_id": organization.id}
    r = client.post("/api/v1/organization-posts/", json=payload, headers=other_auth_token)
    assert r.status_code == status.HTTP_403_FORBIDDEN

    r = client.post("/api/v1/organization-posts/", json=payload, headers=auth_token)
    assert r.status_code == status.HTTP_201_CREATED
    assert r.json()["organization_id"] == organization.id

    r = client.post(
        "/api/v1/organization-posts/",
        json={"content": "x", "organization_id": 9999},
        headers=auth_token,
    )
    assert r.status_code == status.HTTP_404_NOT_FOUND


def test_list_organization_posts_by_organization(
    client: TestClient, db_session, org_post, test_user
) -> None:
    from onerfp.models import Organization, OrganizationPost

    other_org = Organization(slug="eastside", name="Eastside Foundation", type="foundation")
    db_session.add(other_org)
    db_session.flush()
    db_session.add(
        OrganizationPost(organization_id=other_org.id, profile_id=test_user.id, content="x")
    )
    db_session.flush()

    r = client.get(
        "/api/v1/organization-posts/", params={"organization_id": org_post.organization_id}
    )
    assert [post["id"] for post in r.json()] == [org_post.id]
    assert len(client.get("/api/v1/organization-posts/").json()) == 2


def test_organization_editor_can_delete_colleagues_post(
    client: TestClient, db_session, organization, org_post, other_user, other_auth_token
) -> None:
    add_member(db_session, organization, other_user, role="admin")
    r = client.delete(f"/api/v1/organization-posts/{org_post.id}", headers=other_auth_token)
    assert r.status_code == status.HTTP_204_NO_CONTENT
