"""Pydantic request/response models for the API."""

from .common import OwnerInfo, PaginationInfo, ProjectCard, StatusResponse
from .interests import InterestStateResponse, NotificationItem, NotificationListResponse
from .projects import (
    BrowseResponse,
    CreateProjectRequest,
    InterestedUserCard,
    InterestedUsersResponse,
    ProjectListResponse,
    UpdateProjectRequest,
)
from .users import (
    CompletionResponse,
    ProfileResponse,
    UpdateProfileRequest,
    UserEnterRequest,
    UserEnterResponse,
)

__all__ = [
    "OwnerInfo",
    "PaginationInfo",
    "ProjectCard",
    "StatusResponse",
    "InterestStateResponse",
    "NotificationItem",
    "NotificationListResponse",
    "BrowseResponse",
    "CreateProjectRequest",
    "InterestedUserCard",
    "InterestedUsersResponse",
    "ProjectListResponse",
    "UpdateProjectRequest",
    "CompletionResponse",
    "ProfileResponse",
    "UpdateProfileRequest",
    "UserEnterRequest",
    "UserEnterResponse",
]
