"""Project endpoints: browse with match scores, recommendations, CRUD, interested users."""

import logging
from typing import Dict, Iterable, List, Optional

from fastapi import APIRouter, Depends, Query

from matching.models.profile import UserProfile
from matching.models.project import Project
from matching.models.query import ProjectQuery

from ..auth import current_user
from ..models import (
    BrowseResponse,
    CreateProjectRequest,
    InterestedUsersResponse,
    ProjectCard,
    ProjectListResponse,
    StatusResponse,
    UpdateProjectRequest,
)
from ..services import StoreError, projects
from ..state import get_state
from ..utils import clamp_page_size, interested_user_card, pagination_info, project_card, unwrap

logger = logging.getLogger(__name__)

router = APIRouter()


def _owners(items: Iterable[Project]) -> Dict[str, Dict]:
    """Owner docs for the cards; cards go out without owner info if the lookup fails."""
    owner_ids = list({p.owner_id for p in items if p.owner_id})
    if not owner_ids:
        return {}
    try:
        return get_state().repos.users.get_many(owner_ids)
    except StoreError:
        logger.warning("owner lookup failed for %s projects", len(owner_ids), exc_info=True)
        return {}


def _split_terms(values: Optional[List[str]]) -> List[str]:
    """Accept repeated ?tech_stack=a&tech_stack=b as well as ?tech_stack=a,b."""
    out: List[str] = []
    for v in values or []:
        out.extend(t.strip() for t in v.split(",") if t.strip())
    return out


@router.get("", response_model=BrowseResponse)
def browse_projects(
    q: Optional[str] = Query(None, description="Keyword search over title, description, and tech stack"),
    tech_stack: Optional[List[str]] = Query(None),
    experience_level: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    page: int = Query(1),
    page_size: Optional[int] = Query(None),
    current: Optional[UserProfile] = Depends(current_user),
):
    """
    Browse projects, newest first. With X-User-Id, each card carries a match score,
    the caller's own projects are left out, and each page is re-sorted by score.
    """
    state = get_state()
    query = ProjectQuery(
        keywords=q,
        tech_stack=_split_terms(tech_stack),
        experience_level=experience_level,
        category=category,
        status=status,
    )
    size = clamp_page_size(page_size, state.config.default_page_size, state.config.max_page_size)
    result = unwrap(
        projects.browse_projects(
            state.repos, query, page, size, current=current, config=state.matching_config
        )
    )
    owners = _owners(s.project for s in result.items)
    return BrowseResponse(
        projects=[project_card(s.project, s.score, owners) for s in result.items],
        pagination=pagination_info(result.pagination),
    )


@router.post("", response_model=ProjectCard, status_code=201)
def create_project(request: CreateProjectRequest, current: Optional[UserProfile] = Depends(current_user)):
    project = unwrap(projects.create_project(get_state().repos, current, request.model_dump()))
    return project_card(project)


@router.get("/recommended", response_model=ProjectListResponse)
def recommended_projects(
    limit: Optional[int] = Query(None, description="Defaults to the configured recommendation limit"),
    current: Optional[UserProfile] = Depends(current_user),
):
    """Top matches for the dashboard: open projects by others scoring at least the floor."""
    state = get_state()
    scored = unwrap(projects.recommended_projects(state.repos, current, limit=limit, config=state.matching_config))
    owners = _owners(s.project for s in scored)
    return ProjectListResponse(projects=[project_card(s.project, s.score, owners) for s in scored])


@router.get("/mine", response_model=ProjectListResponse)
def my_projects(current: Optional[UserProfile] = Depends(current_user)):
    items = unwrap(projects.list_my_projects(get_state().repos, current))
    return ProjectListResponse(projects=[project_card(p) for p in items])


# Must be after literal paths like /recommended and /mine so {project_id} does not match them.


@router.get("/{project_id}", response_model=ProjectCard)
def get_project(project_id: str):
    project = unwrap(projects.get_project(get_state().repos, project_id))
    return project_card(project, owners=_owners([project]))


@router.put("/{project_id}", response_model=ProjectCard)
def update_project(
    project_id: str,
    request: UpdateProjectRequest,
    current: Optional[UserProfile] = Depends(current_user),
):
    """Owner only. Fields missing from the body are left unchanged."""
    data = request.model_dump(exclude_unset=True)
    project = unwrap(projects.update_project(get_state().repos, current, project_id, data))
    return project_card(project)


@router.delete("/{project_id}", response_model=StatusResponse)
def delete_project(project_id: str, current: Optional[UserProfile] = Depends(current_user)):
    """Owner only. Interests in the project are deleted with it."""
    unwrap(projects.delete_project(get_state().repos, current, project_id))
    return StatusResponse(message="Project deleted")


@router.get("/{project_id}/interested-users", response_model=InterestedUsersResponse)
def interested_users(project_id: str, current: Optional[UserProfile] = Depends(current_user)):
    """Owner only: interested developers, best match first."""
    state = get_state()
    entries = unwrap(projects.interested_users(state.repos, current, project_id, config=state.matching_config))
    return InterestedUsersResponse(project_id=project_id, users=[interested_user_card(e) for e in entries])
