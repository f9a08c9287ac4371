"""Tests for the user OAuth connection endpoints."""

from unittest.mock import AsyncMock, patch
from urllib.parse import parse_qs, urlsplit

import httpx
import pytest

from wafir_bridge.config import settings
from wafir_bridge.main import app
from wafir_bridge.services.github.github_oauth import (
    build_authorize_url,
    decode_oauth_state,
    encode_oauth_state,
)


@pytest.fixture
def oauth_settings(monkeypatch):
    monkeypatch.setattr(settings, "GITHUB_CLIENT_ID", "Iv1.client")
    monkeypatch.setattr(settings, "GITHUB_CLIENT_SECRET", "secret")
    monkeypatch.setattr(settings, "BASE_URL", "https://bridge.example.com")
    return settings


def query_of(url: str) -> dict:
    return {k: v[0] for k, v in parse_qs(urlsplit(url).query).items()}


class TestOAuthState:
    def test_round_trip(self):
        state = encode_oauth_state(42, "https://app.example.com/connect")

        decoded = decode_oauth_state(state)

        assert "=" not in state
        assert decoded.installationId == 42
        assert decoded.returnUrl == "https://app.example.com/connect"

    def test_return_url_is_optional(self):
        assert decode_oauth_state(encode_oauth_state(7)).returnUrl is None

    @pytest.mark.parametrize("state", ["%%%", "bm90IGpzb24", "eyJmb28iOjF9"])
    def test_invalid_state_raises_value_error(self, state):
        with pytest.raises(ValueError):
            decode_oauth_state(state)

    def test_authorize_url(self, oauth_settings):
        url = build_authorize_url(oauth_settings, "abc")

        assert url.startswith("https://github.com/login/oauth/authorize?")
        assert query_of(url) == {
            "client_id": "Iv1.client",
            "redirect_uri": "https://bridge.example.com/auth/github/callback",
            "scope": "read:user,project",
            "state": "abc",
        }


def test_start_requires_client_id(client, monkeypatch):
    monkeypatch.setattr(settings, "GITHUB_CLIENT_ID", None)

    response = client.get("/auth/github", params={"installationId": 42})

    assert response.status_code == 500
    assert response.json() == {"error": "OAuth not configured"}


def test_start_redirects_to_github(client, oauth_settings):
    response = client.get(
        "/auth/github",
        params={"installationId": 42, "returnUrl": "https://app.example.com/done"},
        follow_redirects=False,
    )

    assert response.status_code == 307
    location = response.headers["location"]
    assert location.startswith("https://github.com/login/oauth/authorize")
    state = decode_oauth_state(query_of(location)["state"])
    assert state.installationId == 42
    assert state.returnUrl == "https://app.example.com/done"


def test_callback_stores_token_and_redirects(client, oauth_settings):
    state = encode_oauth_state(42, "https://app.example.com/done?tab=1")

    with patch(
        "wafir_bridge.api.auth.exchange_code_for_token",
        new=AsyncMock(return_value={"access_token": "gho_user"}),
    ) as exchange:
        response = client.get(
            "/auth/github/callback",
            params={"code": "abc", "state": state},
            follow_redirects=False,
        )

    assert response.status_code == 307
    assert query_of(response.headers["location"]) == {
        "tab": "1",
        "success": "true",
        "installationId": "42",
    }
    exchange.assert_awaited_once()
    assert app.state.token_store.get(42) == "gho_user"


def test_callback_uses_default_return_url(client, oauth_settings):
    with patch(
        "wafir_bridge.api.auth.exchange_code_for_token",
        new=AsyncMock(return_value={"access_token": "gho_user"}),
    ):
        response = client.get(
            "/auth/github/callback",
            params={"code": "abc", "state": encode_oauth_state(5)},
            follow_redirects=False,
        )

    assert response.headers["location"].startswith(settings.OAUTH_DEFAULT_RETURN_URL)


def test_callback_rejects_invalid_state(client, oauth_settings):
    response = client.get(
        "/auth/github/callback", params={"code": "abc", "state": "not-base64!"}
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid state parameter"}


def test_callback_redirects_with_oauth_error(client, oauth_settings):
    with patch(
        "wafir_bridge.api.auth.exchange_code_for_token",
        new=AsyncMock(return_value={"error": "bad_verification_code"}),
    ):
        response = client.get(
            "/auth/github/callback",
            params={"code": "stale", "state": encode_oauth_state(42, "https://a.test/x")},
            follow_redirects=False,
        )

    assert response.status_code == 307
    assert query_of(response.headers["location"]) == {"error": "bad_verification_code"}
    assert not app.state.token_store.has(42)


def test_callback_exchange_failure_returns_500(client, oauth_settings):
    with patch(
        "wafir_bridge.api.auth.exchange_code_for_token",
        new=AsyncMock(side_effect=httpx.ConnectError("unreachable")),
    ):
        response = client.get(
            "/auth/github/callback",
            params={"code": "abc", "state": encode_oauth_state(42)},
        )

    assert response.status_code == 500
    assert response.json() == {"error": "OAuth failed"}


def test_callback_requires_oauth_configuration(client, monkeypatch):
    monkeypatch.setattr(settings, "GITHUB_CLIENT_SECRET", None)

    response = client.get(
        "/auth/github/callback",
        params={"code": "abc", "state": encode_oauth_state(42)},
    )

    assert response.status_code == 500


def test_status_and_disconnect(client):
    app.state.token_store.set(42, "gho_user")

    assert client.get("/auth/status/42").json() == {
        "connected": True,
        "installationId": 42,
    }

    response = client.delete("/auth/42")
    assert response.status_code == 200
    assert response.json() == {"success": True, "installationId": 42}

    assert client.get("/auth/status/42").json()["connected"] is False
    assert client.delete("/auth/42").status_code == 404
