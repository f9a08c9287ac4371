from .exceptions import (
    GithubAuthenticationError,
    GithubConfigurationError,
    GithubError,
    GithubNotFoundError,
    GithubRateLimitError,
    GithubUpstreamError,
)
from .github_app import GitHubApp, build_github_app, load_private_key
from .github_client import GitHubApi, GitHubClient
from .github_oauth import (
    build_authorize_url,
    decode_oauth_state,
    encode_oauth_state,
    exchange_code_for_token,
)

__all__ = [
    "GitHubApi",
    "GitHubApp",
    "GitHubClient",
    "GithubAuthenticationError",
    "GithubConfigurationError",
    "GithubError",
    "GithubNotFoundError",
    "GithubRateLimitError",
    "GithubUpstreamError",
    "build_authorize_url",
    "build_github_app",
    "decode_oauth_state",
    "encode_oauth_state",
    "exchange_code_for_token",
    "load_private_key",
]
