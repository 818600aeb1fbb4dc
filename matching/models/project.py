"""
Project model: the side-project descriptor developers browse and match against.

interest_count is a cached counter: it is changed only by the store's atomic
increment when an Interest is created or deleted, never recomputed from Interest rows.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

PROJECT_CATEGORIES = ["Web App", "Mobile App", "AI/ML", "Game", "DevTools", "Other"]
PROJECT_EXPERIENCE_LEVELS = ["Beginner", "Intermediate", "Advanced", "Any"]
TEAM_SIZES = ["1-2", "3-5", "5+"]
PROJECT_DURATIONS = ["< 1 month", "1-3 months", "3-6 months", "6+ months"]

STATUS_LOOKING = "Looking for collaborators"
STATUS_IN_PROGRESS = "In Progress"
STATUS_COMPLETED = "Completed"
PROJECT_STATUSES = [STATUS_LOOKING, STATUS_IN_PROGRESS, STATUS_COMPLETED]

SHORT_DESCRIPTION_MAX = 100


class Project(BaseModel):
    """Project payload used by the retrievers and returned to the API layer."""

    model_config = ConfigDict(extra="allow")

    id: str
    title: str = ""
    description: str = ""
    short_description: Optional[str] = ""
    owner_id: str = ""
    tech_stack: List[str] = Field(default_factory=list)
    category: Optional[str] = "Web App"
    experience_level: Optional[str] = "Beginner"
    team_size: Optional[str] = "1-2"
    duration: Optional[str] = "1-3 months"
    status: Optional[str] = STATUS_LOOKING
    interest_count: int = 0
    created_at: Optional[str] = ""
    updated_at: Optional[str] = ""

    def is_owned_by(self, user_id: Optional[str]) -> bool:
        return bool(user_id) and self.owner_id == user_id


def ensure_project(project: Union[Dict[str, Any], "Project"]) -> "Project":
    return Project.model_validate(project) if isinstance(project, dict) else project


def ensure_projects(projects: List[Union[Dict[str, Any], "Project"]]) -> List["Project"]:
    """Convert list of dicts or Projects to list of Project models."""
    return [ensure_project(p) for p in projects]
