"""Common Pydantic models shared across routes."""

from typing import List, Optional

from pydantic import BaseModel


class OwnerInfo(BaseModel):
    id: str
    name: str = ""
    image: Optional[str] = None


class ProjectCard(BaseModel):
    id: str
    title: str
    short_description: Optional[str] = ""
    description: Optional[str] = ""
    tech_stack: List[str] = []
    category: Optional[str] = ""
    experience_level: Optional[str] = ""
    team_size: Optional[str] = ""
    duration: Optional[str] = ""
    status: Optional[str] = ""
    interest_count: int = 0
    owner_id: str = ""
    owner: Optional[OwnerInfo] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    match_score: Optional[int] = None


class PaginationInfo(BaseModel):
    page: int
    page_size: int
    total_count: int
    total_pages: int
    has_more: bool


class StatusResponse(BaseModel):
    status: str = "ok"
    message: Optional[str] = None
