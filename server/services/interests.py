"""
Interest actions: show, withdraw, toggle, check, and "my interests".

The interest store's unique key is the only concurrency control. interest_count
moves by exactly +1 when this call created the Interest and -1 when this call
deleted it; a duplicate create is reported as "already interested" and leaves
the counter alone.
"""

import logging
from typing import Optional

from matching.models.profile import UserProfile
from matching.models.project import Project
from matching.results import Ok, Result, invalid, not_found, unauthorized

from .errors import InterestExistsError, StoreError, storage_guard
from .repositories import Repositories

logger = logging.getLogger(__name__)


def _target_project(repos: Repositories, current: Optional[UserProfile], project_id: str) -> Result:
    if current is None:
        return unauthorized()
    doc = repos.projects.get(project_id)
    if not doc:
        return not_found("Project not found")
    project = Project.model_validate(doc)
    if project.is_owned_by(current.id):
        return invalid("Cannot show interest in your own project")
    return Ok(project)


def _notify_owner(repos: Repositories, sender: UserProfile, project: Project) -> None:
    """Tell the owner about a new interest. Never fails the interest itself."""
    if project.owner_id == sender.id:
        return
    try:
        repos.notifications.create(
            recipient_id=project.owner_id,
            sender_id=sender.id,
            notification_type="interest",
            message=f'{sender.name or "Someone"} is interested in your project "{project.title}"',
            project_id=project.id,
        )
    except StoreError:
        logger.warning("notify_owner failed for project=%s sender=%s", project.id, sender.id, exc_info=True)


def _undo_create(repos: Repositories, user_id: str, project_id: str) -> None:
    try:
        repos.interests.delete(user_id, project_id)
    except StoreError:
        logger.exception("rollback of interest create failed user=%s project=%s", user_id, project_id)


def _undo_delete(repos: Repositories, interest: dict) -> None:
    try:
        repos.interests.create(interest["user_id"], interest["project_id"], interest.get("created_at"))
    except InterestExistsError:
        logger.debug("rollback of interest delete: already recreated %s", interest.get("id"))
    except StoreError:
        logger.exception("rollback of interest delete failed for %s", interest.get("id"))


@storage_guard("Failed to update interest")
def show_interest(repos: Repositories, current: Optional[UserProfile], project_id: str) -> Result:
    """Idempotent: Ok({"interested": True, "created": bool})."""
    target = _target_project(repos, current, project_id)
    if not target:
        return target
    project = target.data
    try:
        repos.interests.create(current.id, project.id)
    except InterestExistsError:
        logger.debug("show_interest: already interested user=%s project=%s", current.id, project.id)
        return Ok({"interested": True, "created": False})
    try:
        repos.projects.increment_interest_count(project.id, 1)
    except StoreError:
        # the interest and its count must move together
        _undo_create(repos, current.id, project.id)
        raise
    _notify_owner(repos, current, project)
    return Ok({"interested": True, "created": True})


@storage_guard("Failed to update interest")
def withdraw_interest(repos: Repositories, current: Optional[UserProfile], project_id: str) -> Result:
    """Idempotent: Ok({"interested": False, "removed": bool})."""
    if current is None:
        return unauthorized()
    doc = repos.projects.get(project_id)
    if not doc:
        return not_found("Project not found")
    existing = repos.interests.get(current.id, project_id)
    if existing is None:
        return Ok({"interested": False, "removed": False})
    removed = repos.interests.delete(current.id, project_id)
    if removed:
        try:
            repos.projects.increment_interest_count(project_id, -1)
        except StoreError:
            _undo_delete(repos, existing)
            raise
    return Ok({"interested": False, "removed": removed})


@storage_guard("Failed to update interest")
def toggle_interest(repos: Repositories, current: Optional[UserProfile], project_id: str) -> Result:
    """Withdraw when interested, show interest otherwise. Returns the new state."""
    if current is None:
        return unauthorized()
    if repos.interests.get(current.id, project_id):
        return withdraw_interest(repos, current, project_id)
    return show_interest(repos, current, project_id)


@storage_guard("Failed to check interest")
def check_interest(repos: Repositories, current: Optional[UserProfile], project_id: str) -> Result:
    """Anonymous viewers are simply not interested."""
    if current is None:
        return Ok({"interested": False})
    return Ok({"interested": repos.interests.get(current.id, project_id) is not None})


@storage_guard("Failed to fetch interests")
def my_interests(repos: Repositories, current: Optional[UserProfile]) -> Result:
    """Projects the current user is interested in, most recent interest first."""
    if current is None:
        return unauthorized()
    projects = []
    for interest in repos.interests.find_interests_by_user(current.id):
        doc = repos.projects.get(interest["project_id"])
        if doc:
            projects.append(Project.model_validate(doc))
    return Ok(projects)
