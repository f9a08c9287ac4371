"""Maps GitHub failures to client-safe messages.

Upstream error payloads are never passed through; callers log the original
exception and reply with the mapped message.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from wafir_bridge.services.github.exceptions import (
    GithubAuthenticationError,
    GithubConfigurationError,
    GithubRateLimitError,
)

Operation = Literal["installation", "repo", "issue"]


@dataclass(frozen=True)
class MappedError:
    message: str
    status_code: int


def map_github_error(error: Exception, operation: Optional[Operation] = None) -> MappedError:
    status = getattr(error, "status", None) or 500

    if isinstance(error, GithubRateLimitError) or status == 429:
        return MappedError(
            "GitHub API rate limit exceeded. Please try again later.", 429
        )

    if isinstance(error, GithubConfigurationError):
        return MappedError(
            "The bridge is not configured to access GitHub for this installation.",
            500,
        )

    if isinstance(error, GithubAuthenticationError) or (
        status == 404 and operation == "installation"
    ):
        return MappedError(
            "GitHub App installation not found or access was revoked. "
            "Please reinstall the app on the target repository.",
            404,
        )

    if status in (401, 403):
        return MappedError(
            "The GitHub App does not have permission to perform this action. "
            "Check the app's repository permissions.",
            403,
        )

    if status == 404:
        return MappedError(
            "Repository not found or the GitHub App is not installed on it.", 404
        )

    if status == 422 and operation == "issue":
        return MappedError(
            "GitHub rejected the issue. Check the title and labels.", 422
        )

    return MappedError("An unexpected error occurred while contacting GitHub.", 500)
