from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol
from urllib.parse import quote

import httpx

from wafir_bridge.config import settings
from wafir_bridge.services.github.exceptions import (
    GithubConfigurationError,
    GithubNotFoundError,
    GithubRateLimitError,
    GithubUpstreamError,
)


API_PREVIEW_HEADERS = {
    "Accept": "application/vnd.github+json",
}

logger = logging.getLogger(__name__)


class GitHubApi(Protocol):
    """The subset of the GitHub API the bridge depends on."""

    async def get_content(self, owner: str, repo: str, path: str) -> Any: ...

    async def get_user(self, username: str) -> Dict[str, Any]: ...

    async def request(self, method: str, path: str, **kwargs: Any) -> Any: ...

    async def create_issue(
        self,
        owner: str,
        repo: str,
        title: str,
        body: str,
        labels: Optional[List[str]] = None,
    ) -> Dict[str, Any]: ...

    async def graphql(
        self, query: str, variables: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]: ...


class GitHubClient:
    def __init__(
        self,
        token: str,
        api_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize GitHubClient.

        Args:
            token: Installation access token or personal access token
            api_url: GitHub API URL (defaults to api.github.com)
            transport: Optional httpx transport (used by tests)
        """
        self._token = token

        if not self._token:
            raise GithubConfigurationError("GitHub token is required to call the API")

        self._api_url = (api_url or settings.GITHUB_API_URL).rstrip("/")
        self._rest = httpx.AsyncClient(base_url=self._api_url, transport=transport)

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self._token}",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "wafir-bridge",
        }
        headers.update(API_PREVIEW_HEADERS)
        return headers

    def _handle_response(self, response: httpx.Response) -> httpx.Response:
        if response.is_success:
            return response

        if response.status_code == 404:
            raise GithubNotFoundError(f"GitHub resource not found: {response.request.url}")

        if response.status_code == 429 or (
            response.status_code == 403
            and (
                "rate limit" in response.text.lower()
                or response.headers.get("X-RateLimit-Remaining") == "0"
            )
        ):
            self._handle_rate_limit(response)

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        message = payload.get("message") if isinstance(payload, dict) else None
        raise GithubUpstreamError(
            f"GitHub API returned {response.status_code}: {message or response.reason_phrase}",
            status=response.status_code,
            payload=payload if isinstance(payload, dict) else None,
        )

    def _handle_rate_limit(self, response: httpx.Response) -> None:
        reset_header = response.headers.get("X-RateLimit-Reset")
        retry_after_header = response.headers.get("Retry-After")
        wait_seconds = 60.0

        if retry_after_header:
            try:
                wait_seconds = float(retry_after_header)
            except ValueError:
                pass
        elif reset_header:
            try:
                reset_epoch = float(reset_header)
                now_epoch = datetime.now(timezone.utc).timestamp()
                wait_seconds = max(reset_epoch - now_epoch, 1.0)
            except ValueError:
                pass

        logger.warning(f"GitHub rate limit reached, retry after {wait_seconds}s")
        raise GithubRateLimitError(
            "GitHub rate limit reached",
            status=response.status_code,
            retry_after=wait_seconds,
        )

    async def _rest_request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._rest.request(
                method, path, headers=self._headers(), **kwargs
            )
        except httpx.RequestError as exc:
            raise GithubUpstreamError(f"GitHub request failed: {exc}") from exc

        self._handle_response(response)
        if not response.content:
            return {}
        return response.json()

    async def request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Raw REST call for endpoints without a dedicated helper."""
        return await self._rest_request(method, path, **kwargs)

    async def get_content(self, owner: str, repo: str, path: str) -> Any:
        """Contents API: a file object, or a list when ``path`` is a directory."""
        return await self._rest_request(
            "GET", f"/repos/{owner}/{repo}/contents/{quote(path, safe='/')}"
        )

    async def get_user(self, username: str) -> Dict[str, Any]:
        return await self._rest_request("GET", f"/users/{username}")

    async def create_issue(
        self,
        owner: str,
        repo: str,
        title: str,
        body: str,
        labels: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"title": title, "body": body}
        if labels:
            payload["labels"] = labels
        return await self._rest_request(
            "POST", f"/repos/{owner}/{repo}/issues", json=payload
        )

    async def graphql(
        self, query: str, variables: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Run a GraphQL query and return its ``data``.

        GraphQL reports errors with a 200 status; they are raised as
        GithubUpstreamError with the error list as payload.
        """
        result = await self._rest_request(
            "POST", "/graphql", json={"query": query, "variables": variables or {}}
        )
        errors = result.get("errors")
        if errors:
            message = "; ".join(str(e.get("message", e)) for e in errors)
            raise GithubUpstreamError(
                f"GitHub GraphQL error: {message}", payload={"errors": errors}
            )
        return result.get("data") or {}

    async def close(self) -> None:
        await self._rest.aclose()

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
