"""Shared fixtures for API tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from wafir_bridge.api.deps import get_client_resolver, get_snapshot_store
from wafir_bridge.main import app
from wafir_bridge.services.github.github_client import GitHubClient


@pytest.fixture
def github_client():
    """Stand-in for an installation-scoped GitHub client."""
    return AsyncMock(spec=GitHubClient)


@pytest.fixture
def resolver(github_client):
    fake = MagicMock()
    fake.resolve = AsyncMock(return_value=github_client)
    return fake


@pytest.fixture
def snapshot_store():
    return None


@pytest.fixture
def client(resolver, snapshot_store):
    app.dependency_overrides[get_client_resolver] = lambda: resolver
    app.dependency_overrides[get_snapshot_store] = lambda: snapshot_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
