"""
DevMatch matching core: compatibility scoring and ranked retrieval.

Single entry point for the matching package:
- models/: UserProfile, Project, Interest, ProjectQuery, MatchingConfig, score results
- stages/: match scorer, browse retriever, recommendations, interested users
- results: Ok / Err tagged results
- sources: storage protocols the retrievers read from
"""

from .models import (
    DEFAULT_CONFIG,
    InterestedUser,
    MatchingConfig,
    Pagination,
    Project,
    ProjectPage,
    ProjectQuery,
    ScoredProject,
    UserProfile,
    profile_completion,
)
from .results import Err, ErrorKind, Ok, Result
from .stages import (
    compute_match_score,
    matching_skills,
    rank_interested_users,
    recommend_for,
    retrieve_projects,
)

__all__ = [
    "DEFAULT_CONFIG",
    "Err",
    "ErrorKind",
    "InterestedUser",
    "MatchingConfig",
    "Ok",
    "Pagination",
    "Project",
    "ProjectPage",
    "ProjectQuery",
    "Result",
    "ScoredProject",
    "UserProfile",
    "compute_match_score",
    "matching_skills",
    "profile_completion",
    "rank_interested_users",
    "recommend_for",
    "retrieve_projects",
]
