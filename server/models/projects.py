"""Project Pydantic models: create/update bodies and list responses."""

from typing import List, Optional, Union

from pydantic import BaseModel

from .common import PaginationInfo, ProjectCard
from .users import ProfileResponse


class CreateProjectRequest(BaseModel):
    title: str
    description: str
    short_description: str = ""
    tech_stack: Union[List[str], str] = []
    category: Optional[str] = None
    experience_level: Optional[str] = None
    team_size: Optional[str] = None
    duration: Optional[str] = None
    status: Optional[str] = None


class UpdateProjectRequest(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    short_description: Optional[str] = None
    tech_stack: Optional[Union[List[str], str]] = None
    category: Optional[str] = None
    experience_level: Optional[str] = None
    team_size: Optional[str] = None
    duration: Optional[str] = None
    status: Optional[str] = None


class BrowseResponse(BaseModel):
    projects: List[ProjectCard]
    pagination: PaginationInfo


class ProjectListResponse(BaseModel):
    projects: List[ProjectCard]


class InterestedUserCard(BaseModel):
    user: ProfileResponse
    match_score: int
    matching_skills: List[str] = []
    interested_at: Optional[str] = None


class InterestedUsersResponse(BaseModel):
    project_id: str
    users: List[InterestedUserCard]
