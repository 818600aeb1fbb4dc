"""Data models for matching and ranked retrieval."""

from .config import DEFAULT_CONFIG, MatchingConfig, resolve_config
from .interest import NOTIFICATION_TYPES, Interest, Notification, interest_key
from .profile import (
    EXPERIENCE_LEVELS,
    ProfileCompletion,
    UserProfile,
    ensure_profile,
    ensure_profiles,
    profile_completion,
)
from .project import (
    PROJECT_CATEGORIES,
    PROJECT_DURATIONS,
    PROJECT_EXPERIENCE_LEVELS,
    PROJECT_STATUSES,
    SHORT_DESCRIPTION_MAX,
    STATUS_COMPLETED,
    STATUS_IN_PROGRESS,
    STATUS_LOOKING,
    TEAM_SIZES,
    Project,
    ensure_project,
    ensure_projects,
)
from .query import ProjectQuery
from .scoring import InterestedUser, Pagination, ProjectPage, ScoredProject

__all__ = [
    "DEFAULT_CONFIG",
    "EXPERIENCE_LEVELS",
    "Interest",
    "InterestedUser",
    "MatchingConfig",
    "NOTIFICATION_TYPES",
    "Notification",
    "PROJECT_CATEGORIES",
    "PROJECT_DURATIONS",
    "PROJECT_EXPERIENCE_LEVELS",
    "PROJECT_STATUSES",
    "Pagination",
    "ProfileCompletion",
    "Project",
    "ProjectPage",
    "ProjectQuery",
    "SHORT_DESCRIPTION_MAX",
    "STATUS_COMPLETED",
    "STATUS_IN_PROGRESS",
    "STATUS_LOOKING",
    "ScoredProject",
    "TEAM_SIZES",
    "UserProfile",
    "ensure_profile",
    "ensure_profiles",
    "ensure_project",
    "ensure_projects",
    "interest_key",
    "profile_completion",
    "resolve_config",
]
