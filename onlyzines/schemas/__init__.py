"""Pydantic schemas used by the FastAPI application."""

from .auth import (
    AuthResponse,
    LoginRequest,
    MeResponse,
    RefreshRequest,
    RefreshResponse,
    SignupRequest,
    SuccessResponse,
    TokenPair,
    UserProfile,
    UserRead,
)
from .builder import BuilderElement, BuilderPage, BuilderProject, BuilderState
from .issue import (
    DraftListResponse,
    IssueCreate,
    IssueCreatedResponse,
    IssueEditorResponse,
    IssuePublishResponse,
    IssueRead,
    IssueSaveRequest,
    IssueSaveResponse,
    IssueSaveSummary,
    IssueUnpublishResponse,
    PublicIssueResponse,
    SpreadRead,
)
from .publisher import (
    PublisherAccountResponse,
    PublisherCreate,
    PublisherCreatedResponse,
    PublisherRead,
)
from .zine import ZineCreate, ZineCreatedResponse, ZineListResponse, ZineRead

__all__ = [
    # Auth schemas
    "AuthResponse",
    "LoginRequest",
    "MeResponse",
    "RefreshRequest",
    "RefreshResponse",
    "SignupRequest",
    "SuccessResponse",
    "TokenPair",
    "UserProfile",
    "UserRead",
    # Builder schemas
    "BuilderElement",
    "BuilderPage",
    "BuilderProject",
    "BuilderState",
    # Issue schemas
    "DraftListResponse",
    "IssueCreate",
    "IssueCreatedResponse",
    "IssueEditorResponse",
    "IssuePublishResponse",
    "IssueRead",
    "IssueSaveRequest",
    "IssueSaveResponse",
    "IssueSaveSummary",
    "IssueUnpublishResponse",
    "PublicIssueResponse",
    "SpreadRead",
    # Publisher schemas
    "PublisherAccountResponse",
    "PublisherCreate",
    "PublisherCreatedResponse",
    "PublisherRead",
    # Zine schemas
    "ZineCreate",
    "ZineCreatedResponse",
    "ZineListResponse",
    "ZineRead",
]
