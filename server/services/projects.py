"""
Project actions: CRUD with ownership checks, plus the three ranked views
(browse, dashboard recommendations, interested users) wired to the stores.
"""

import logging
from typing import Dict, Optional, Tuple

from matching.models.config import MatchingConfig
from matching.models.profile import UserProfile
from matching.models.project import (
    PROJECT_CATEGORIES,
    PROJECT_DURATIONS,
    PROJECT_EXPERIENCE_LEVELS,
    PROJECT_STATUSES,
    SHORT_DESCRIPTION_MAX,
    TEAM_SIZES,
    Project,
)
from matching.models.query import ProjectQuery
from matching.results import Err, Ok, Result, forbidden, invalid, not_found, unauthorized
from matching.stages import rank_interested_users, recommend_for, retrieve_projects

from .errors import storage_guard
from .profiles import clean_skills
from .repositories import Repositories

logger = logging.getLogger(__name__)

# field -> allowed values
_ENUM_FIELDS = {
    "category": PROJECT_CATEGORIES,
    "experience_level": PROJECT_EXPERIENCE_LEVELS,
    "team_size": TEAM_SIZES,
    "duration": PROJECT_DURATIONS,
    "status": PROJECT_STATUSES,
}
_TEXT_FIELDS = ("title", "description", "short_description")


def clean_project_fields(data: Dict, partial: bool = False) -> Tuple[Optional[Dict], Optional[Err]]:
    """
    Validate and normalise project input.

    Returns (fields, None) or (None, Err). With partial=True only supplied
    fields are checked (updates); otherwise title and description are required.
    """
    fields: Dict = {}
    for key in _TEXT_FIELDS:
        if key in data or not partial:
            fields[key] = (data.get(key) or "").strip()
    if "title" in fields and not fields["title"]:
        return None, invalid("Title cannot be empty")
    if "description" in fields and not fields["description"]:
        return None, invalid("Description cannot be empty")
    if len(fields.get("short_description") or "") > SHORT_DESCRIPTION_MAX:
        return None, invalid(f"Short description must be at most {SHORT_DESCRIPTION_MAX} characters")
    if "tech_stack" in data or not partial:
        fields["tech_stack"] = clean_skills(data.get("tech_stack"))
    for key, allowed in _ENUM_FIELDS.items():
        if data.get(key) is None:
            continue
        if data[key] not in allowed:
            return None, invalid(f"{key} must be one of {allowed}")
        fields[key] = data[key]
    if not partial:
        defaults = Project(id="")
        for key in _ENUM_FIELDS:
            fields.setdefault(key, getattr(defaults, key))
    return fields, None


def _owned_project(repos: Repositories, current: Optional[UserProfile], project_id: str) -> Result:
    """Ok(Project) when current owns project_id; otherwise the matching Err."""
    if current is None:
        return unauthorized()
    doc = repos.projects.get(project_id)
    if not doc:
        return not_found("Project not found")
    project = Project.model_validate(doc)
    if not project.is_owned_by(current.id):
        return forbidden("Not your project!")
    return Ok(project)


@storage_guard("Failed to create project")
def create_project(repos: Repositories, current: Optional[UserProfile], data: Dict) -> Result:
    if current is None:
        return unauthorized()
    fields, err = clean_project_fields(data)
    if err:
        return err
    doc = repos.projects.create(current.id, fields)
    logger.info("create_project: %s by %s", doc["id"], current.id)
    return Ok(Project.model_validate(doc))


@storage_guard("Failed to fetch project")
def get_project(repos: Repositories, project_id: str) -> Result:
    """Public: anyone may view a project."""
    doc = repos.projects.get(project_id)
    if not doc:
        return not_found("Project not found")
    return Ok(Project.model_validate(doc))


@storage_guard("Failed to update project")
def update_project(
    repos: Repositories,
    current: Optional[UserProfile],
    project_id: str,
    data: Dict,
) -> Result:
    owned = _owned_project(repos, current, project_id)
    if not owned:
        return owned
    fields, err = clean_project_fields(data, partial=True)
    if err:
        return err
    doc = repos.projects.update(project_id, fields)
    if not doc:
        return not_found("Project not found")
    return Ok(Project.model_validate(doc))


@storage_guard("Failed to delete project")
def delete_project(repos: Repositories, current: Optional[UserProfile], project_id: str) -> Result:
    """Owner-only delete; interests in the project are removed with it."""
    owned = _owned_project(repos, current, project_id)
    if not owned:
        return owned
    repos.projects.delete(project_id)
    removed = repos.interests.delete_for_project(project_id)
    logger.info("delete_project: %s (cascaded %s interests)", project_id, removed)
    return Ok({"deleted": True, "interests_removed": removed})


@storage_guard("Failed to fetch projects")
def list_projects_by_owner(repos: Repositories, owner_id: str) -> Result:
    if not owner_id or not owner_id.strip():
        return invalid("Invalid user ID")
    docs = repos.projects.find_projects(ProjectQuery(owner_id=owner_id.strip()))
    return Ok([Project.model_validate(d) for d in docs])


def list_my_projects(repos: Repositories, current: Optional[UserProfile]) -> Result:
    if current is None:
        return unauthorized()
    return list_projects_by_owner(repos, current.id)


def browse_projects(
    repos: Repositories,
    query: ProjectQuery,
    page: Optional[int],
    page_size: int,
    current: Optional[UserProfile] = None,
    config: Optional[MatchingConfig] = None,
) -> Result:
    """Browse page; scored and re-sorted within the page when current is known."""
    return retrieve_projects(repos.projects, query, page=page, page_size=page_size, viewer=current, config=config)


def recommended_projects(
    repos: Repositories,
    current: Optional[UserProfile],
    limit: Optional[int] = None,
    config: Optional[MatchingConfig] = None,
) -> Result:
    if current is None:
        return unauthorized("Please log in to see recommendations")
    return recommend_for(repos.projects, current, limit=limit, config=config)


@storage_guard("Failed to fetch interested users")
def interested_users(
    repos: Repositories,
    current: Optional[UserProfile],
    project_id: str,
    config: Optional[MatchingConfig] = None,
) -> Result:
    if current is None:
        return unauthorized()
    doc = repos.projects.get(project_id)
    if not doc:
        return not_found("Project not found")
    return rank_interested_users(
        Project.model_validate(doc),
        current.id,
        repos.interests,
        repos.users,
        config=config,
    )
