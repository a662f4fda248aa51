# tests/v1/test_system.py
"""Tests for system, transparency and admin endpoints."""

from fastapi import status

from tests.conftest import ADMIN, CID_V0, USER1


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/").json()["docs"] == "/docs"


def test_stats(client, auth_headers) -> None:
    client.post("/api/v1/conversations/", json={"content_ref": CID_V0}, headers=auth_headers(USER1))

    assert client.get("/api/v1/system/stats").json() == {
        "total_conversations": 1,
        "total_posts": 0,
        "total_rewarded_items": 0,
    }


def test_public_config_hides_secrets(client) -> None:
    body = client.get("/api/v1/system/config").json()

    assert body["admin_account"] == ADMIN
    assert body["rewards"]["top_k"] == 10
    assert body["categories"]["tea_culture"] == 0
    assert "secret" not in str(body).lower()
    assert "database" not in str(body).lower()


def test_recent_events(client, auth_headers) -> None:
    client.post("/api/v1/conversations/", json={"content_ref": CID_V0}, headers=auth_headers(USER1))
    client.post("/api/v1/conversations/1/like", headers=auth_headers(USER1))

    events = client.get("/api/v1/system/events").json()
    assert [e["name"] for e in events] == ["ConversationLogged", "ConversationLiked"]

    filtered = client.get("/api/v1/system/events", params={"name": "ConversationLiked"}).json()
    assert filtered[0]["payload"] == {"conversation_id": 1, "liker": USER1, "likes": 1}


def test_ipfs_gateway_admin(client, auth_headers) -> None:
    new_gateway = "https://new-gateway.ipfs.io/ipfs/"

    denied = client.put(
        "/api/v1/system/ipfs-gateway", json={"value": new_gateway}, headers=auth_headers(USER1)
    )
    assert denied.status_code == status.HTTP_403_FORBIDDEN

    empty = client.put("/api/v1/system/ipfs-gateway", json={"value": ""}, headers=auth_headers(ADMIN))
    assert empty.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    updated = client.put(
        "/api/v1/system/ipfs-gateway", json={"value": new_gateway}, headers=auth_headers(ADMIN)
    )
    assert updated.json() == {"value": new_gateway}
    assert client.get(f"/api/v1/system/ipfs-url/{CID_V0}").json() == {"value": new_gateway + CID_V0}


def test_base_token_uri_admin(client, auth_headers) -> None:
    uri = "https://new-api.teacupai.com/nft/"

    response = client.put("/api/v1/system/base-token-uri", json={"value": uri}, headers=auth_headers(ADMIN))

    assert response.json() == {"value": uri}
    assert client.get("/api/v1/system/base-token-uri").json() == {"value": uri}
