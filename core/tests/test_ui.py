from __future__ import annotations

from fastapi.testclient import TestClient


def test_login_page_is_public(client: TestClient) -> None:
    r = client.get("/login")
    assert r.status_code == 200
    assert "login-form" in r.text
    assert "/static/login.js" in r.text


def test_room_page_passes_public_livekit_url(authed_client: TestClient) -> None:
    r = authed_client.get("/", params={"room": "standup"})
    assert r.status_code == 200
    assert 'data-livekit-url="wss://example.livekit.cloud"' in r.text
    assert 'value="standup"' in r.text
    assert "/static/room.js" in r.text


def test_static_assets_are_public(client: TestClient) -> None:
    r = client.get("/static/room.js")
    assert r.status_code == 200
    assert "transition" in r.text


def test_room_page_offers_sign_out(authed_client: TestClient) -> None:
    page = authed_client.get("/")
    assert 'id="sign-out"' in page.text

    script = authed_client.get("/static/room.js")
    assert '"/api/auth/logout"' in script.text
    assert '$("sign-out").addEventListener("click", signOut)' in script.text

