"""Data Transfer Objects (DTOs) for API requests and responses"""

from .auth import (
    AuthStatusResponse,
    DisconnectResponse,
    OAuthState,
)
from .config import (
    ErrorResponse,
    IssueType,
    IssueTypesResponse,
)
from .health import HealthResponse
from .submit import SubmissionRequest, SubmitResponse
from .wafir_config import (
    FeedbackConfig,
    FieldConfig,
    IssueConfig,
    StorageConfig,
    WafirConfig,
    validate_wafir_config,
)

__all__ = [
    "AuthStatusResponse",
    "DisconnectResponse",
    "ErrorResponse",
    "FeedbackConfig",
    "FieldConfig",
    "HealthResponse",
    "IssueConfig",
    "IssueType",
    "IssueTypesResponse",
    "OAuthState",
    "StorageConfig",
    "SubmissionRequest",
    "SubmitResponse",
    "WafirConfig",
    "validate_wafir_config",
]
