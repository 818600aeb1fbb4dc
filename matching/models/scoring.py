"""
Scoring results: ephemeral, computed per request and never persisted.

Contains:
- ScoredProject: a project with its match score (None when nobody is viewing)
- InterestedUser: an interested developer, their score, and the skills that matched
- Pagination / ProjectPage: a browse page and its metadata
"""

import math
from typing import List, Optional

from pydantic import BaseModel

from .profile import UserProfile
from .project import Project


class ScoredProject(BaseModel):
    project: Project
    score: Optional[int] = None


class InterestedUser(BaseModel):
    """An interested developer as seen by the project owner."""

    user: UserProfile
    score: int
    matching_skills: List[str]
    interested_at: Optional[str] = ""


class Pagination(BaseModel):
    page: int
    page_size: int
    total_count: int
    total_pages: int
    has_more: bool

    @classmethod
    def build(cls, page: int, page_size: int, total_count: int) -> "Pagination":
        total_pages = math.ceil(total_count / page_size) if total_count else 0
        return cls(
            page=page,
            page_size=page_size,
            total_count=total_count,
            total_pages=total_pages,
            has_more=page < total_pages,
        )


class ProjectPage(BaseModel):
    items: List[ScoredProject]
    pagination: Pagination
