"""Service that turns widget submissions into GitHub issues and project items."""

from __future__ import annotations

import json
import logging
from typing import List, Optional

from wafir_bridge.dtos.submit import SubmissionRequest, SubmitResponse
from wafir_bridge.services.client_resolver import GitHubClientResolver
from wafir_bridge.services.project_service import add_to_project
from wafir_bridge.services.snapshot_store import SnapshotStore

logger = logging.getLogger(__name__)


def parse_labels(raw: Optional[str]) -> Optional[List[str]]:
    """Labels arrive as a JSON array string, or as a comma separated list."""
    if raw is None or not raw.strip():
        return None
    try:
        parsed = json.loads(raw)
    except ValueError:
        parsed = None
    if isinstance(parsed, list):
        return [str(label) for label in parsed]
    return [label.strip() for label in raw.split(",") if label.strip()]


class SubmitService:
    def __init__(
        self,
        resolver: GitHubClientResolver,
        snapshot_store: Optional[SnapshotStore],
        default_labels: List[str],
    ) -> None:
        self._resolver = resolver
        self._snapshots = snapshot_store
        self._default_labels = default_labels

    async def _attach_screenshot(
        self, body: str, screenshot: bytes, content_type: str
    ) -> str:
        if self._snapshots is None:
            logger.warning("S3_BUCKET_NAME not set, skipping screenshot upload")
            return body
        try:
            url = await self._snapshots.upload(screenshot, content_type)
        except Exception:
            logger.exception("Screenshot upload failed, submitting without it")
            return body
        return f"{body}\n\n![Screenshot]({url})"

    def _labels_for(self, submission: SubmissionRequest) -> List[str]:
        # An explicit empty list means "no labels", only a missing one gets defaults
        if submission.labels is None:
            return self._default_labels
        return submission.labels

    async def submit(
        self,
        submission: SubmissionRequest,
        screenshot: Optional[bytes] = None,
        screenshot_type: str = "image/png",
    ) -> SubmitResponse:
        """
        Store a submission as an issue, a project item, or both.

        With ``both`` the created issue is linked to the project; with
        ``project`` a draft item is added instead. A project that cannot be
        found or updated does not fail the submission and is reported as a
        ``warning``.
        """
        body = submission.body
        if screenshot:
            body = await self._attach_screenshot(body, screenshot, screenshot_type)

        issue = None
        project = None
        client = await self._resolver.resolve(submission.installationId)
        try:
            if submission.storageType in ("issue", "both"):
                issue = await client.create_issue(
                    submission.owner,
                    submission.repo,
                    title=submission.title,
                    body=body,
                    labels=self._labels_for(submission),
                )
                logger.info(
                    f"Created issue #{issue['number']} in "
                    f"{submission.owner}/{submission.repo}"
                )

            if submission.storageType in ("project", "both"):
                project = await add_to_project(
                    client,
                    submission.projectOwner or submission.owner,
                    submission.projectNumber,
                    title=submission.title,
                    body=body,
                    issue_node_id=issue.get("node_id") if issue else None,
                )
        finally:
            await client.close()

        return SubmitResponse(
            success=True,
            issueUrl=issue["html_url"] if issue else None,
            issueNumber=issue["number"] if issue else None,
            projectAdded=project.added if project else None,
            projectItemId=project.item_id if project else None,
            warning=project.error if project else None,
        )
