"""Tests for GET /config and GET /config/issue-types."""

import base64

import pytest
import yaml

from wafir_bridge.dtos.config import IssueType
from wafir_bridge.services.github.exceptions import (
    GithubAuthenticationError,
    GithubConfigurationError,
    GithubNotFoundError,
    GithubUpstreamError,
)

CONFIG_NOT_FOUND = {
    "error": "Config Not Found",
    "message": "No .github/wafir.yaml found in repo",
}
CONFIG_FETCH_FAILED = {
    "error": "Internal Server Error",
    "message": "Failed to fetch config",
}

QUERY = {"installationId": "42", "owner": "acme", "repo": "widget"}


def file_response(text: str) -> dict:
    return {
        "type": "file",
        "path": ".github/wafir.yaml",
        "encoding": "base64",
        "content": base64.b64encode(text.encode("utf-8")).decode("ascii"),
    }


class TestConfigValidation:
    """Requests with missing or malformed parameters never reach GitHub."""

    @pytest.mark.parametrize("missing", ["installationId", "owner", "repo"])
    def test_missing_parameter_returns_400(self, client, resolver, github_client, missing):
        params = {k: v for k, v in QUERY.items() if k != missing}

        response = client.get("/config", params=params)

        assert response.status_code == 400
        body = response.json()
        assert body["statusCode"] == 400
        assert body["error"] == "Bad Request"
        assert any(missing in detail["field"] for detail in body["details"])
        resolver.resolve.assert_not_awaited()
        github_client.get_content.assert_not_awaited()

    def test_non_numeric_installation_id_returns_400(self, client, resolver, github_client):
        response = client.get("/config", params={**QUERY, "installationId": "abc"})

        assert response.status_code == 400
        resolver.resolve.assert_not_awaited()
        github_client.get_content.assert_not_awaited()

    def test_no_parameters_returns_400(self, client, resolver):
        response = client.get("/config")

        assert response.status_code == 400
        assert len(response.json()["details"]) == 3
        resolver.resolve.assert_not_awaited()


class TestConfigFetch:
    def test_returns_parsed_yaml(self, client, resolver, github_client):
        github_client.get_content.return_value = file_response("storage:\n  type: issue\n")

        response = client.get("/config", params=QUERY)

        assert response.status_code == 200
        assert response.json() == {"storage": {"type": "issue"}}
        resolver.resolve.assert_awaited_once_with(42)
        github_client.get_content.assert_awaited_once_with(
            "acme", "widget", ".github/wafir.yaml"
        )
        github_client.close.assert_awaited_once()

    def test_config_outside_schema_is_returned_unchanged(self, client, github_client):
        github_client.get_content.return_value = file_response(
            "unknown: true\nfeedback:\n  extra: 1\n"
        )

        response = client.get("/config", params=QUERY)

        assert response.status_code == 200
        assert response.json() == {"unknown": True, "feedback": {"extra": 1}}

    def test_yaml_dates_are_returned_as_iso_strings(self, client, github_client):
        github_client.get_content.return_value = file_response(
            "storage:\n  type: issue\nlaunch: 2026-03-01\n"
            "fields:\n  - name: due\n    label: Due\n    type: text\n    default: 2026-03-01 09:30:00\n"
        )

        response = client.get("/config", params=QUERY)

        assert response.status_code == 200
        body = response.json()
        assert body["launch"] == "2026-03-01"
        assert body["fields"][0]["default"] == "2026-03-01T09:30:00"

    def test_directory_listing_returns_404(self, client, github_client):
        github_client.get_content.return_value = [
            {"type": "file", "name": "wafir.yaml", "path": ".github/wafir.yaml"}
        ]

        response = client.get("/config", params=QUERY)

        assert response.status_code == 404
        assert response.json() == CONFIG_NOT_FOUND

    def test_response_without_content_returns_404(self, client, github_client):
        github_client.get_content.return_value = {"type": "dir", "path": ".github/wafir.yaml"}

        response = client.get("/config", params=QUERY)

        assert response.status_code == 404
        assert response.json() == CONFIG_NOT_FOUND

    def test_upstream_404_returns_404(self, client, github_client):
        github_client.get_content.side_effect = GithubNotFoundError("Not Found")

        response = client.get("/config", params=QUERY)

        assert response.status_code == 404
        assert response.json() == CONFIG_NOT_FOUND
        github_client.close.assert_awaited_once()

    @pytest.mark.parametrize(
        "error",
        [
            GithubUpstreamError("boom", status=502),
            GithubUpstreamError("connection reset"),
            RuntimeError("unexpected"),
        ],
    )
    def test_other_errors_return_500(self, client, github_client, error):
        github_client.get_content.side_effect = error

        response = client.get("/config", params=QUERY)

        assert response.status_code == 500
        assert response.json() == CONFIG_FETCH_FAILED

    def test_malformed_yaml_returns_500(self, client, github_client):
        github_client.get_content.return_value = file_response("storage: [unclosed\n")

        response = client.get("/config", params=QUERY)

        assert response.status_code == 500
        assert response.json() == CONFIG_FETCH_FAILED

    @pytest.mark.parametrize(
        "error",
        [
            GithubConfigurationError("GitHub App is not configured"),
            GithubAuthenticationError("installation revoked"),
        ],
    )
    def test_resolver_failure_returns_500(self, client, resolver, github_client, error):
        resolver.resolve.side_effect = error

        response = client.get("/config", params=QUERY)

        assert response.status_code == 500
        assert response.json() == CONFIG_FETCH_FAILED
        github_client.get_content.assert_not_awaited()

    def test_error_body_hides_upstream_detail(self, client, github_client):
        github_client.get_content.side_effect = GithubUpstreamError(
            "Bad credentials", status=401, payload={"message": "Bad credentials"}
        )

        response = client.get("/config", params=QUERY)

        assert "Bad credentials" not in response.text

    @pytest.mark.parametrize(
        "config",
        [
            {"storage": {"type": "both", "owner": "acme", "repo": "board", "projectId": 7}},
            {"feedback": {"title": "Tell us", "labels": ["feedback", "ux"]}},
            {
                "issue": {"screenshot": True, "browserInfo": False, "consoleLog": True},
                "fields": [
                    {"name": "severity", "label": "Severity", "type": "select",
                     "options": ["low", "high"], "required": True},
                    {"name": "notes", "label": "Notes", "type": "textarea"},
                ],
            },
        ],
    )
    def test_yaml_round_trip(self, client, github_client, config):
        github_client.get_content.return_value = file_response(yaml.safe_dump(config))

        response = client.get("/config", params=QUERY)

        assert response.status_code == 200
        assert response.json() == config


class TestIssueTypes:
    def test_returns_issue_types(self, client, resolver, monkeypatch):
        async def fake_fetch(github_client, owner):
            assert owner == "acme"
            return [IssueType(id=1, name="Bug", color="red")]

        monkeypatch.setattr("wafir_bridge.api.config.fetch_issue_types", fake_fetch)

        response = client.get(
            "/config/issue-types", params={"installationId": "42", "owner": "acme"}
        )

        assert response.status_code == 200
        assert response.json() == {
            "issueTypes": [{"id": 1, "name": "Bug", "color": "red"}]
        }

    def test_personal_account_has_no_issue_types(self, client, github_client):
        github_client.get_user.return_value = {"login": "octocat", "type": "User"}

        response = client.get(
            "/config/issue-types", params={"installationId": "42", "owner": "octocat"}
        )

        assert response.status_code == 200
        assert response.json() == {"issueTypes": []}
        github_client.request.assert_not_awaited()

    def test_missing_owner_returns_400(self, client, resolver):
        response = client.get("/config/issue-types", params={"installationId": "42"})

        assert response.status_code == 400
        resolver.resolve.assert_not_awaited()

    def test_resolver_failure_returns_500(self, client, resolver):
        resolver.resolve.side_effect = GithubConfigurationError("not configured")

        response = client.get(
            "/config/issue-types", params={"installationId": "42", "owner": "acme"}
        )

        assert response.status_code == 500
        assert response.json() == CONFIG_FETCH_FAILED
