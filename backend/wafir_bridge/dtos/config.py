"""DTOs for the config endpoints."""

from typing import List, Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error: str
    message: Optional[str] = None


class IssueType(BaseModel):
    id: int
    name: str
    color: Optional[str] = None


class IssueTypesResponse(BaseModel):
    issueTypes: List[IssueType]
