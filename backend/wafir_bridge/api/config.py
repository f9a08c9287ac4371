"""Wafir config API endpoints."""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from wafir_bridge.api.deps import get_client_resolver
from wafir_bridge.config import settings
from wafir_bridge.dtos.config import ErrorResponse, IssueTypesResponse
from wafir_bridge.dtos.wafir_config import WafirConfig
from wafir_bridge.services.client_resolver import GitHubClientResolver
from wafir_bridge.services.config_service import (
    check_config_shape,
    fetch_issue_types,
    fetch_wafir_config,
)
from wafir_bridge.services.github.exceptions import GithubNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/config", tags=["WAFIR"])

CONFIG_NOT_FOUND = {
    "error": "Config Not Found",
    "message": "No .github/wafir.yaml found in repo",
}
CONFIG_FETCH_FAILED = {
    "error": "Internal Server Error",
    "message": "Failed to fetch config",
}


@router.get(
    "",
    summary="Get WAFIR Configuration",
    responses={
        200: {"model": WafirConfig, "description": "Parsed .github/wafir.yaml"},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def get_config(
    installationId: int = Query(..., description="GitHub App installation id"),
    owner: str = Query(..., min_length=1),
    repo: str = Query(..., min_length=1),
    resolver: GitHubClientResolver = Depends(get_client_resolver),
):
    """
    Fetch and parse .github/wafir.yaml from the target repository.

    The parsed YAML is returned as-is; schema mismatches are only logged.
    """
    try:
        client = await resolver.resolve(installationId)
        try:
            config = await fetch_wafir_config(
                client, owner, repo, settings.WAFIR_CONFIG_PATH
            )
        finally:
            await client.close()
    except GithubNotFoundError:
        logger.error(
            f"Config not found for {owner}/{repo} (installation {installationId})",
            exc_info=True,
        )
        return JSONResponse(status_code=404, content=CONFIG_NOT_FOUND)
    except Exception:
        logger.exception(
            f"Failed to fetch config for {owner}/{repo} (installation {installationId})"
        )
        return JSONResponse(status_code=500, content=CONFIG_FETCH_FAILED)

    problems = check_config_shape(config)
    if problems:
        logger.warning(f"Config for {owner}/{repo} does not match schema: {problems}")

    return JSONResponse(content=config)


@router.get("/issue-types", response_model=IssueTypesResponse)
async def get_issue_types(
    installationId: int = Query(...),
    owner: str = Query(..., min_length=1),
    resolver: GitHubClientResolver = Depends(get_client_resolver),
):
    """Issue types of the owner's organization (empty for personal accounts)."""
    try:
        client = await resolver.resolve(installationId)
    except Exception:
        logger.exception(f"Failed to resolve client for installation {installationId}")
        return JSONResponse(status_code=500, content=CONFIG_FETCH_FAILED)

    try:
        issue_types = await fetch_issue_types(client, owner)
    finally:
        await client.close()
    return IssueTypesResponse(issueTypes=issue_types)
