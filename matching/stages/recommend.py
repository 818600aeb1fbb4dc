"""
Dashboard recommendations: top matches across the whole open-project pool.

Unlike browse, this scans every eligible project (open, not the viewer's own),
drops anything under the recommendation floor, and only then sorts and truncates.
Ties on score are broken by created_at descending, then id, so the order never
depends on what the store happened to return.
"""

import logging
from typing import List, Optional

from ..models.config import MatchingConfig, resolve_config
from ..models.profile import UserProfile
from ..models.project import STATUS_LOOKING, ensure_projects
from ..models.query import ProjectQuery
from ..models.scoring import ScoredProject
from ..results import Ok, Result, invalid, storage_unavailable
from ..sources import ProjectSource
from .match_score import score_profile_against_project

logger = logging.getLogger(__name__)


def _rank_key(scored: ScoredProject):
    return (scored.score, scored.project.created_at or "", scored.project.id)


def recommend_for(
    source: ProjectSource,
    viewer: UserProfile,
    limit: Optional[int] = None,
    config: Optional[MatchingConfig] = None,
) -> Result:
    """
    Return Ok(List[ScoredProject]) of at most limit projects scoring >= the floor.
    """
    config = resolve_config(config)
    if limit is None:
        limit = config.recommendation_limit
    if limit < 0:
        return invalid("limit must not be negative")

    query = ProjectQuery(status=STATUS_LOOKING, exclude_owner_id=viewer.id)
    try:
        docs = source.find_projects(query, skip=0, limit=None)
        pool = ensure_projects(docs)
    except Exception:
        logger.exception("recommend_for: storage failure (viewer=%s)", viewer.id)
        return storage_unavailable("Failed to fetch recommendations")

    candidates: List[ScoredProject] = []
    for project in pool:
        # Self-exclusion and status hold regardless of store filtering
        if project.is_owned_by(viewer.id) or project.status != STATUS_LOOKING:
            continue
        score = score_profile_against_project(viewer, project, config)
        if score >= config.recommendation_floor:
            candidates.append(ScoredProject(project=project, score=score))

    candidates.sort(key=_rank_key, reverse=True)
    logger.debug(
        "recommend_for: viewer=%s pool=%s above_floor=%s limit=%s",
        viewer.id, len(docs), len(candidates), limit,
    )
    return Ok(candidates[:limit])
