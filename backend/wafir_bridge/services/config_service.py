"""Config service - fetches and parses the wafir config of a repository."""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any, List

import yaml
from fastapi.encoders import jsonable_encoder
from pydantic import ValidationError

from wafir_bridge.dtos.config import IssueType
from wafir_bridge.dtos.wafir_config import validate_wafir_config
from wafir_bridge.services.github.exceptions import GithubError, GithubNotFoundError
from wafir_bridge.services.github.github_client import GitHubApi

CONFIG_PATH = ".github/wafir.yaml"

logger = logging.getLogger(__name__)


class ConfigNotFoundError(GithubNotFoundError):
    """Raised when the config path is missing or is not a file."""


class ConfigParseError(GithubError):
    """Raised when the config file cannot be decoded or is not valid YAML."""


def decode_config_content(content: str) -> Any:
    """Decode a contents-API payload: base64, then UTF-8, then YAML.

    YAML timestamps come back as ISO-8601 strings so the result is JSON safe.
    """
    try:
        text = base64.b64decode(content).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise ConfigParseError(f"Config is not base64 encoded UTF-8 text: {e}") from e

    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigParseError(f"Config is not valid YAML: {e}") from e

    return jsonable_encoder(parsed)


async def fetch_wafir_config(
    client: GitHubApi, owner: str, repo: str, path: str = CONFIG_PATH
) -> Any:
    """
    Fetch and parse the wafir config from the default branch of a repository.

    Makes exactly one remote call and never retries.

    Raises:
        GithubNotFoundError: the path does not exist (ConfigNotFoundError when
            it resolves to a directory instead of a file)
        ConfigParseError: the file is not valid YAML
        GithubError: any other upstream failure
    """
    data = await client.get_content(owner, repo, path)

    if not isinstance(data, dict) or "content" not in data:
        raise ConfigNotFoundError(f"{path} in {owner}/{repo} is not a file")

    return decode_config_content(data["content"])


async def fetch_issue_types(client: GitHubApi, owner: str) -> List[IssueType]:
    """
    Issue types configured for the owner's organization.

    Best effort: personal accounts, missing permissions and API errors all
    yield an empty list.
    """
    try:
        account = await client.get_user(owner)
        if account.get("type") != "Organization":
            return []

        data = await client.request("GET", f"/orgs/{owner}/issue-types")
        return [
            IssueType(id=item["id"], name=item["name"], color=item.get("color"))
            for item in data or []
        ]
    except Exception as e:
        logger.info(f"Issue types unavailable for {owner}: {e}")
        return []


def check_config_shape(config: Any) -> List[str]:
    """Describe how ``config`` deviates from the wafir config schema."""
    try:
        validate_wafir_config(config)
    except ValidationError as e:
        return [
            f"{'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['msg']}"
            for error in e.errors()
        ]
    return []
