"""Shape of the ``.github/wafir.yaml`` file read from target repositories.

These models describe the configuration; the bridge does not reject a
repository's config for failing them. The top level and the ``feedback`` and
``issue`` sections are closed; ``storage`` and individual ``fields`` entries
accept extra keys.
"""

from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class StorageConfig(BaseModel):
    type: Literal["issue", "project", "both"] = "issue"
    owner: Optional[str] = None
    repo: Optional[str] = None
    projectId: Optional[Union[int, float]] = None

    model_config = ConfigDict(extra="allow")


class FeedbackConfig(BaseModel):
    title: str = "Feedback"
    labels: List[str] = Field(default_factory=lambda: ["feedback"])

    model_config = ConfigDict(extra="forbid")


class IssueConfig(BaseModel):
    screenshot: bool = False
    browserInfo: bool = False
    consoleLog: bool = False
    labels: List[str] = Field(default_factory=lambda: ["bug"])

    model_config = ConfigDict(extra="forbid")


class FieldConfig(BaseModel):
    name: str
    label: str
    type: Literal["text", "textarea", "select", "checkbox"]
    required: bool = False
    options: Optional[List[str]] = Field(
        default=None, description="Options for select type"
    )

    model_config = ConfigDict(extra="allow")


class WafirConfig(BaseModel):
    storage: Optional[StorageConfig] = None
    feedback: Optional[FeedbackConfig] = None
    issue: Optional[IssueConfig] = None
    fields: Optional[List[FieldConfig]] = None

    model_config = ConfigDict(extra="forbid")


def validate_wafir_config(data: Any) -> WafirConfig:
    """Validate a parsed config.

    Raises:
        pydantic.ValidationError: if ``data`` does not match the schema
    """
    return WafirConfig.model_validate(data)
