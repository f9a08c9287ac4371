"""GitHub OAuth helper utilities for connecting a user token to an installation."""

from __future__ import annotations

import base64
import logging
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import httpx

from wafir_bridge.config import Settings
from wafir_bridge.dtos.auth import OAuthState

GITHUB_AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
GITHUB_TOKEN_URL = "https://github.com/login/oauth/access_token"

logger = logging.getLogger(__name__)


def encode_oauth_state(installation_id: int, return_url: Optional[str] = None) -> str:
    state = OAuthState(installationId=installation_id, returnUrl=return_url)
    raw = state.model_dump_json(exclude_none=True).encode("utf-8")
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def decode_oauth_state(state: str) -> OAuthState:
    """Decode the ``state`` round-tripped through GitHub.

    Raises:
        ValueError: if the value is not base64url JSON of the expected shape
    """
    padded = state + "=" * (-len(state) % 4)
    raw = base64.urlsafe_b64decode(padded.encode("ascii"))
    return OAuthState.model_validate_json(raw)


def redirect_uri(config: Settings) -> str:
    return f"{config.BASE_URL.rstrip('/')}/auth/github/callback"


def build_authorize_url(config: Settings, state: str) -> str:
    query = urlencode(
        {
            "client_id": config.GITHUB_CLIENT_ID,
            "redirect_uri": redirect_uri(config),
            "scope": ",".join(config.OAUTH_SCOPES),
            "state": state,
        }
    )
    return f"{GITHUB_AUTHORIZE_URL}?{query}"


async def exchange_code_for_token(
    config: Settings,
    code: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Dict[str, Any]:
    """Trade an OAuth ``code`` for a token payload.

    GitHub answers 200 even for bad codes; such payloads carry ``error``
    instead of ``access_token`` and are returned unchanged.
    """
    async with httpx.AsyncClient(timeout=10, transport=transport) as client:
        token_response = await client.post(
            GITHUB_TOKEN_URL,
            headers={"Accept": "application/json"},
            json={
                "client_id": config.GITHUB_CLIENT_ID,
                "client_secret": config.GITHUB_CLIENT_SECRET,
                "code": code,
            },
        )
    token_response.raise_for_status()
    return token_response.json()
