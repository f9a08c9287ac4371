"""Dependencies shared by the API routers.

Process-wide objects are created at startup and kept on ``app.state``.
"""

from typing import Optional

from fastapi import Depends, Request

from wafir_bridge.config import settings
from wafir_bridge.services.client_resolver import GitHubClientResolver
from wafir_bridge.services.github.github_app import GitHubApp
from wafir_bridge.services.snapshot_store import SnapshotStore
from wafir_bridge.services.submit_service import SubmitService
from wafir_bridge.services.token_store import TokenStore


def get_token_store(request: Request) -> TokenStore:
    return request.app.state.token_store


def get_github_app(request: Request) -> Optional[GitHubApp]:
    return request.app.state.github_app


def get_snapshot_store(request: Request) -> Optional[SnapshotStore]:
    return request.app.state.snapshot_store


def get_client_resolver(
    github_app: Optional[GitHubApp] = Depends(get_github_app),
    token_store: TokenStore = Depends(get_token_store),
) -> GitHubClientResolver:
    return GitHubClientResolver(github_app=github_app, token_store=token_store)


def get_submit_service(
    resolver: GitHubClientResolver = Depends(get_client_resolver),
    snapshot_store: Optional[SnapshotStore] = Depends(get_snapshot_store),
) -> SubmitService:
    return SubmitService(
        resolver=resolver,
        snapshot_store=snapshot_store,
        default_labels=settings.SUBMIT_DEFAULT_LABELS,
    )
