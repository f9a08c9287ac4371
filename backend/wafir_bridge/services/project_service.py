"""GitHub Projects (V2) items for submissions stored on a project board."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from wafir_bridge.services.github.exceptions import GithubError
from wafir_bridge.services.github.github_client import GitHubApi

logger = logging.getLogger(__name__)

FIND_ORG_PROJECT_QUERY = """
query FindOrgProject($owner: String!, $number: Int!) {
  organization(login: $owner) { projectV2(number: $number) { id } }
}
"""

FIND_USER_PROJECT_QUERY = """
query FindUserProject($owner: String!, $number: Int!) {
  user(login: $owner) { projectV2(number: $number) { id } }
}
"""

ADD_TO_PROJECT_MUTATION = """
mutation AddToProject($projectId: ID!, $contentId: ID!) {
  addProjectV2ItemById(input: { projectId: $projectId, contentId: $contentId }) {
    item { id }
  }
}
"""

ADD_DRAFT_TO_PROJECT_MUTATION = """
mutation AddDraftToProject($projectId: ID!, $title: String!, $body: String) {
  addProjectV2DraftIssue(input: { projectId: $projectId, title: $title, body: $body }) {
    projectItem { id }
  }
}
"""


@dataclass
class ProjectAddResult:
    added: bool
    item_id: Optional[str] = None
    error: Optional[str] = None


async def find_project_node_id(
    client: GitHubApi, owner: str, number: int
) -> Optional[str]:
    """Node id of project ``number``, looked up as an org project, then a user one."""
    lookups = (
        (FIND_ORG_PROJECT_QUERY, "organization"),
        (FIND_USER_PROJECT_QUERY, "user"),
    )
    for query, account in lookups:
        try:
            data = await client.graphql(query, {"owner": owner, "number": number})
        except GithubError as e:
            logger.debug(f"{account} project lookup for {owner} #{number} failed: {e}")
            continue

        project = ((data.get(account) or {}).get("projectV2")) or {}
        if project.get("id"):
            return project["id"]
    return None


async def add_to_project(
    client: GitHubApi,
    owner: str,
    number: int,
    title: str,
    body: str,
    issue_node_id: Optional[str] = None,
) -> ProjectAddResult:
    """
    Add an item to a project board.

    Links the issue when ``issue_node_id`` is given, otherwise creates a draft
    issue from ``title`` and ``body``. Failures are returned, not raised.
    """
    project_id = await find_project_node_id(client, owner, number)
    if project_id is None:
        return ProjectAddResult(
            added=False, error=f"Could not find project #{number} for owner {owner}"
        )

    try:
        if issue_node_id:
            data = await client.graphql(
                ADD_TO_PROJECT_MUTATION,
                {"projectId": project_id, "contentId": issue_node_id},
            )
            item_id = data["addProjectV2ItemById"]["item"]["id"]
        else:
            data = await client.graphql(
                ADD_DRAFT_TO_PROJECT_MUTATION,
                {"projectId": project_id, "title": title, "body": body},
            )
            item_id = data["addProjectV2DraftIssue"]["projectItem"]["id"]
    except (GithubError, KeyError, TypeError) as e:
        logger.warning(f"Adding item to project {owner} #{number} failed: {e}")
        return ProjectAddResult(added=False, error=str(e))

    logger.info(f"Added item {item_id} to project {owner} #{number}")
    return ProjectAddResult(added=True, item_id=item_id)
