"""Exceptions raised while talking to the GitHub API."""

from __future__ import annotations


class GithubError(Exception):
    """Base exception for GitHub failures."""

    status: int | None = None


class GithubAuthenticationError(GithubError):
    """Raised when an installation token cannot be obtained."""


class GithubConfigurationError(GithubAuthenticationError):
    """Raised when required credentials are missing."""


class GithubNotFoundError(GithubError):
    """Raised when the requested resource does not exist upstream."""

    status = 404


class GithubUpstreamError(GithubError):
    """Raised for any other failed call to the GitHub API."""

    def __init__(
        self,
        message: str,
        status: int | None = None,
        payload: dict | None = None,
    ):
        super().__init__(message)
        self.status = status
        self.payload = payload or {}


class GithubRateLimitError(GithubUpstreamError):
    """Raised when the upstream service enforces a rate limit."""

    def __init__(
        self,
        message: str,
        status: int | None = 403,
        retry_after: int | float | None = None,
    ):
        super().__init__(message, status=status)
        self.retry_after = retry_after
