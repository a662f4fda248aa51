# tests/v1/test_conversations.py
"""Tests for conversation endpoints."""

from fastapi import status

from tests.conftest import CID_V0, USER1, USER2


def _log(client, headers, content_ref=CID_V0):
    return client.post("/api/v1/conversations/", json={"content_ref": content_ref}, headers=headers)


def test_log_conversation(client, auth_headers) -> None:
    response = _log(client, auth_headers(USER1))

    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["id"] == 1
    assert body["owner"] == USER1
    assert body["is_shared"] is False
    assert body["like_count"] == 0


def test_log_conversation_requires_auth(client) -> None:
    response = client.post("/api/v1/conversations/", json={"content_ref": CID_V0})
    assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)


def test_log_conversation_rejects_bad_token(client) -> None:
    response = client.post(
        "/api/v1/conversations/",
        json={"content_ref": CID_V0},
        headers={"Authorization": "Bearer not-a-token"},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_log_conversation_invalid_content(client, auth_headers) -> None:
    response = _log(client, auth_headers(USER1), content_ref="invalid")

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json() == {
        "detail": "invalid content reference format",
        "error": "InvalidContent",
    }


def test_get_conversation(client, auth_headers) -> None:
    _log(client, auth_headers(USER1))

    assert client.get("/api/v1/conversations/1").json()["content_ref"] == CID_V0
    missing = client.get("/api/v1/conversations/99")
    assert missing.status_code == status.HTTP_404_NOT_FOUND
    assert missing.json()["error"] == "NotFound"


def test_share_conversation(client, auth_headers) -> None:
    _log(client, auth_headers(USER1))

    response = client.post(
        "/api/v1/conversations/1/share", json={"category": 1}, headers=auth_headers(USER1)
    )

    assert response.status_code == status.HTTP_201_CREATED
    post = response.json()
    assert post["id"] == 1
    assert post["category"] == 1
    assert post["source_conversation_id"] == 1
    assert client.get("/api/v1/conversations/1").json()["is_shared"] is True


def test_share_conversation_errors(client, auth_headers) -> None:
    _log(client, auth_headers(USER1))

    forbidden = client.post(
        "/api/v1/conversations/1/share", json={"category": 0}, headers=auth_headers(USER2)
    )
    assert forbidden.status_code == status.HTTP_403_FORBIDDEN
    assert forbidden.json()["error"] == "Forbidden"

    bad_category = client.post(
        "/api/v1/conversations/1/share", json={"category": 7}, headers=auth_headers(USER1)
    )
    assert bad_category.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert bad_category.json()["error"] == "InvalidCategory"

    client.post("/api/v1/conversations/1/share", json={"category": 0}, headers=auth_headers(USER1))
    again = client.post(
        "/api/v1/conversations/1/share", json={"category": 0}, headers=auth_headers(USER1)
    )
    assert again.status_code == status.HTTP_409_CONFLICT
    assert again.json()["error"] == "AlreadyShared"


def test_like_and_unlike_conversation(client, auth_headers) -> None:
    _log(client, auth_headers(USER1))

    liked = client.post("/api/v1/conversations/1/like", headers=auth_headers(USER2))
    assert liked.json() == {"id": 1, "like_count": 1, "liked": True}
    assert client.get(f"/api/v1/conversations/1/liked/{USER2}").json()["liked"] is True

    duplicate = client.post("/api/v1/conversations/1/like", headers=auth_headers(USER2))
    assert duplicate.status_code == status.HTTP_409_CONFLICT
    assert duplicate.json()["error"] == "AlreadyLiked"

    unliked = client.delete("/api/v1/conversations/1/like", headers=auth_headers(USER2))
    assert unliked.json() == {"id": 1, "like_count": 0, "liked": False}

    not_liked = client.delete("/api/v1/conversations/1/like", headers=auth_headers(USER2))
    assert not_liked.status_code == status.HTTP_409_CONFLICT
    assert not_liked.json()["error"] == "NotLiked"
