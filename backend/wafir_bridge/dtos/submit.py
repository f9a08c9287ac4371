"""DTOs for issue submissions."""

from typing import List, Literal, Optional

from pydantic import BaseModel

StorageType = Literal["issue", "project", "both"]


class SubmissionRequest(BaseModel):
    installationId: int
    owner: str
    repo: str
    title: str
    body: str
    labels: Optional[List[str]] = None
    storageType: StorageType = "issue"
    projectOwner: Optional[str] = None
    projectNumber: Optional[int] = None


class SubmitResponse(BaseModel):
    success: bool
    issueUrl: Optional[str] = None
    issueNumber: Optional[int] = None
    projectAdded: Optional[bool] = None
    projectItemId: Optional[str] = None
    warning: Optional[str] = None
