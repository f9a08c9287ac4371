"""User OAuth connection endpoints.

A user can connect their own GitHub token to an installation; it is kept in
the in-memory token store until disconnected or the process restarts.
"""

import logging
from typing import Optional
from urllib.parse import urlencode, urlsplit, urlunsplit, parse_qsl

import httpx
from fastapi import APIRouter, Depends, Path, Query
from fastapi.responses import JSONResponse, RedirectResponse

from wafir_bridge.api.deps import get_token_store
from wafir_bridge.config import settings
from wafir_bridge.dtos.auth import AuthStatusResponse, DisconnectResponse
from wafir_bridge.services.github.github_oauth import (
    build_authorize_url,
    decode_oauth_state,
    encode_oauth_state,
    exchange_code_for_token,
)
from wafir_bridge.services.token_store import TokenStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])

OAUTH_NOT_CONFIGURED = {"error": "OAuth not configured"}


def _with_query(url: str, **params: str) -> str:
    parts = urlsplit(url)
    query = dict(parse_qsl(parts.query))
    query.update(params)
    return urlunsplit(parts._replace(query=urlencode(query)))


@router.get("/github", summary="Initiate GitHub OAuth")
async def start_github_oauth(
    installationId: int = Query(...),
    returnUrl: Optional[str] = Query(default=None),
):
    """Redirect to GitHub OAuth for user authorization."""
    if not settings.GITHUB_CLIENT_ID:
        return JSONResponse(status_code=500, content=OAUTH_NOT_CONFIGURED)

    state = encode_oauth_state(installationId, returnUrl)
    return RedirectResponse(build_authorize_url(settings, state))


@router.get("/github/callback", summary="GitHub OAuth Callback")
async def github_oauth_callback(
    code: str = Query(...),
    state: str = Query(...),
    token_store: TokenStore = Depends(get_token_store),
):
    """Exchange the OAuth code and store the user token for the installation."""
    if not settings.oauth_configured():
        return JSONResponse(status_code=500, content=OAUTH_NOT_CONFIGURED)

    try:
        oauth_state = decode_oauth_state(state)
    except ValueError:
        return JSONResponse(status_code=400, content={"error": "Invalid state parameter"})

    return_url = oauth_state.returnUrl or settings.OAUTH_DEFAULT_RETURN_URL

    try:
        token_data = await exchange_code_for_token(settings, code)
    except httpx.HTTPError as e:
        logger.error(f"OAuth callback failed: {e}")
        return JSONResponse(status_code=500, content={"error": "OAuth failed"})

    access_token = token_data.get("access_token")
    if token_data.get("error") or not access_token:
        logger.error(f"OAuth token exchange failed: {token_data.get('error')}")
        return RedirectResponse(
            _with_query(return_url, error=token_data.get("error") or "unknown")
        )

    token_store.set(oauth_state.installationId, access_token)
    return RedirectResponse(
        _with_query(
            return_url,
            success="true",
            installationId=str(oauth_state.installationId),
        )
    )


@router.get("/status/{installationId}", response_model=AuthStatusResponse)
async def auth_status(
    installationId: int = Path(...),
    token_store: TokenStore = Depends(get_token_store),
):
    """Check if a user token exists for the installation."""
    return AuthStatusResponse(
        connected=token_store.has(installationId),
        installationId=installationId,
    )


@router.delete("/{installationId}", response_model=DisconnectResponse)
async def disconnect(
    installationId: int = Path(...),
    token_store: TokenStore = Depends(get_token_store),
):
    """Remove the stored user token for the installation."""
    deleted = token_store.delete(installationId)
    return JSONResponse(
        status_code=200 if deleted else 404,
        content=DisconnectResponse(
            success=deleted, installationId=installationId
        ).model_dump(),
    )
