"""
Ranked project retrieval for the browse page.

Pagination is storage-ordered (newest first). When a viewer is present, the
viewer's own projects are dropped from the fetched page and the remaining items
are scored and re-sorted by score, within that page only. Scores never move a
project across pages; see DESIGN.md for the global re-ranking alternative.

The public entry point is retrieve_projects.
"""

import logging
from typing import List, Optional

from ..models.config import MatchingConfig, resolve_config
from ..models.profile import UserProfile
from ..models.project import Project, ensure_projects
from ..models.query import ProjectQuery
from ..models.scoring import Pagination, ProjectPage, ScoredProject
from ..results import Ok, Result, invalid, storage_unavailable
from ..sources import ProjectSource
from .match_score import score_profile_against_project

logger = logging.getLogger(__name__)


def normalize_page(page: Optional[int]) -> int:
    """Pages are 1-based; anything below 1 (or missing) becomes 1."""
    if page is None or page < 1:
        return 1
    return page


def _score_page(
    projects: List[Project],
    viewer: UserProfile,
    config: MatchingConfig,
) -> List[ScoredProject]:
    """Drop the viewer's own projects, score the rest, sort by score descending (stable)."""
    scored = [
        ScoredProject(project=p, score=score_profile_against_project(viewer, p, config))
        for p in projects
        if not p.is_owned_by(viewer.id)
    ]
    scored.sort(key=lambda s: s.score, reverse=True)
    return scored


def retrieve_projects(
    source: ProjectSource,
    query: ProjectQuery,
    page: Optional[int] = 1,
    page_size: int = 12,
    viewer: Optional[UserProfile] = None,
    config: Optional[MatchingConfig] = None,
) -> Result:
    """
    Fetch one page of projects matching query, scored for viewer when present.

    Returns Ok(ProjectPage) or Err(validation_error | storage_unavailable).
    total_count and total_pages describe the filtered set before the viewer's own
    projects are removed from the page.
    """
    config = resolve_config(config)
    if page_size is None or page_size < 1:
        return invalid("page_size must be a positive integer")
    page = normalize_page(page)
    skip = (page - 1) * page_size

    try:
        total_count = source.count_projects(query)
        docs = source.find_projects(query, skip=skip, limit=page_size)
        projects = ensure_projects(docs)
    except Exception:
        logger.exception("retrieve_projects: storage failure (page=%s, page_size=%s)", page, page_size)
        return storage_unavailable("Failed to fetch projects")

    if viewer is not None:
        items = _score_page(projects, viewer, config)
    else:
        items = [ScoredProject(project=p) for p in projects]

    logger.debug(
        "retrieve_projects: page=%s fetched=%s returned=%s total=%s viewer=%s",
        page, len(projects), len(items), total_count, viewer.id if viewer else None,
    )
    return Ok(ProjectPage(items=items, pagination=Pagination.build(page, page_size, total_count)))
