"""Turns an installation id into an authenticated GitHub client."""

from __future__ import annotations

import logging
from typing import Optional

from wafir_bridge.config import settings
from wafir_bridge.services.github.exceptions import GithubConfigurationError
from wafir_bridge.services.github.github_app import GitHubApp
from wafir_bridge.services.github.github_client import GitHubClient
from wafir_bridge.services.token_store import TokenStore

logger = logging.getLogger(__name__)


class GitHubClientResolver:
    def __init__(
        self,
        github_app: Optional[GitHubApp],
        token_store: TokenStore,
        api_url: str | None = None,
    ) -> None:
        self._github_app = github_app
        self._token_store = token_store
        self._api_url = api_url or settings.GITHUB_API_URL

    async def resolve(self, installation_id: int) -> GitHubClient:
        """
        Get a client for an installation.

        Uses the GitHub App installation token when the app is configured,
        otherwise a user token connected for that installation.

        Raises:
            GithubConfigurationError: if neither credential source is available
            GithubAuthenticationError: if the installation token exchange fails
        """
        if self._github_app is not None:
            return await self._github_app.get_installation_client(installation_id)

        token = self._token_store.get(installation_id)
        if token:
            logger.info(
                "GitHub App not configured, using user token installation_id=%s",
                installation_id,
            )
            return self.resolve_from_token(token)

        raise GithubConfigurationError(
            f"No GitHub credentials available for installation {installation_id}"
        )

    def resolve_from_token(self, token: str) -> GitHubClient:
        """Wrap a personal access token. The token is not checked until first use."""
        if self._github_app is not None:
            return self._github_app.client_for_token(token)
        return GitHubClient(token=token, api_url=self._api_url)

