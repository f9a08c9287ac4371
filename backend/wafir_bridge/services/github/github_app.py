"""Helpers for GitHub App authentication (installation access tokens)."""

from __future__ import annotations

import logging
import time
from pathlib import Path

import httpx
from jose import jwt

from wafir_bridge.config import Settings
from wafir_bridge.services.github.exceptions import (
    GithubAuthenticationError,
    GithubConfigurationError,
)
from wafir_bridge.services.github.github_client import GitHubClient

logger = logging.getLogger(__name__)


def load_private_key(raw: str) -> str:
    """Accept a PEM string (single-line env values use literal ``\\n``) or a file path."""
    if "PRIVATE KEY" in raw:
        return raw.replace("\\n", "\n")
    path = Path(raw.strip().strip('"'))
    if path.is_file():
        return path.read_text()
    raise GithubConfigurationError(
        "GITHUB_PRIVATE_KEY must be a PEM string or path to a private key file",
    )


class GitHubApp:
    """Exchanges installation ids for installation-scoped GitHub clients."""

    def __init__(
        self,
        app_id: str,
        private_key: str,
        api_url: str = "https://api.github.com",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not app_id or not private_key:
            raise GithubConfigurationError(
                "GitHub App credentials are not configured. "
                "Set GITHUB_APP_ID and GITHUB_PRIVATE_KEY."
            )
        self.app_id = app_id
        self._private_key = load_private_key(private_key)
        self._api_url = api_url.rstrip("/")
        self._transport = transport

    def generate_jwt(self) -> str:
        now = int(time.time())
        payload = {
            "iat": now - 60,
            "exp": now + 540,
            "iss": self.app_id,
        }
        return jwt.encode(payload, self._private_key, algorithm="RS256")

    async def create_installation_token(self, installation_id: int) -> str:
        url = f"{self._api_url}/app/installations/{installation_id}/access_tokens"
        headers = {
            "Authorization": f"Bearer {self.generate_jwt()}",
            "Accept": "application/vnd.github+json",
            "User-Agent": "wafir-bridge",
        }
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(url, headers=headers)
        except httpx.RequestError as exc:
            raise GithubAuthenticationError(
                f"Installation token request failed for {installation_id}: {exc}"
            ) from exc

        if not response.is_success:
            raise GithubAuthenticationError(
                f"GitHub refused an installation token for {installation_id} "
                f"(HTTP {response.status_code})"
            )

        token = response.json().get("token")
        if not token:
            raise GithubAuthenticationError(
                "GitHub installation token response missing token"
            )
        return token

    async def get_installation_client(self, installation_id: int) -> GitHubClient:
        token = await self.create_installation_token(installation_id)
        return GitHubClient(
            token=token, api_url=self._api_url, transport=self._transport
        )

    def client_for_token(self, token: str) -> GitHubClient:
        return GitHubClient(token=token, api_url=self._api_url, transport=self._transport)


def build_github_app(config: Settings) -> GitHubApp | None:
    if not config.github_app_configured():
        logger.warning(
            "GITHUB_APP_ID or GITHUB_PRIVATE_KEY missing. "
            "GitHub App routes will fail until they are configured."
        )
        return None
    try:
        return GitHubApp(
            app_id=config.GITHUB_APP_ID,
            private_key=config.GITHUB_PRIVATE_KEY,
            api_url=config.GITHUB_API_URL,
        )
    except GithubConfigurationError as e:
        logger.error(f"GitHub App disabled: {e}")
        return None
