"""Retrieval stages: match scorer, browse, recommendations, interested users."""

from .browse import normalize_page, retrieve_projects
from .interested_users import rank_interested_users
from .match_score import (
    compute_match_score,
    experience_index,
    matching_skills,
    score_profile_against_project,
)
from .recommend import recommend_for

__all__ = [
    "compute_match_score",
    "experience_index",
    "matching_skills",
    "normalize_page",
    "rank_interested_users",
    "recommend_for",
    "retrieve_projects",
    "score_profile_against_project",
]
