"""
Profile actions: identity resolution, enter (resolve or create), profile CRUD.

Identity is a user id supplied by the caller (X-User-Id); there are no
passwords or tokens here.
"""

import logging
from typing import Dict, List, Optional

from matching.models.profile import EXPERIENCE_LEVELS, UserProfile, profile_completion
from matching.results import Ok, Result, invalid, not_found, unauthorized

from .errors import storage_guard
from .repositories import Repositories

logger = logging.getLogger(__name__)

PROFILE_TEXT_FIELDS = (
    "bio",
    "location",
    "image",
    "github_url",
    "linkedin_url",
    "leetcode_url",
    "codechef_url",
    "codeforces_url",
)


def resolve_current_user(repos: Repositories, user_id: Optional[str]) -> Optional[UserProfile]:
    """UserProfile for user_id, or None when absent or unknown."""
    if not user_id or not user_id.strip():
        return None
    doc = repos.users.get_by_id(user_id.strip())
    return UserProfile.model_validate(doc) if doc else None


def clean_skills(skills) -> List[str]:
    """Accept a list or a comma-separated string; trim, drop blanks and duplicates."""
    if isinstance(skills, str):
        skills = skills.split(",")
    out: List[str] = []
    for s in skills or []:
        s = (s or "").strip()
        if s and s not in out:
            out.append(s)
    return out


@storage_guard("Failed to enter")
def enter(repos: Repositories, name: str, email: str) -> Result:
    """Return Ok({"user": UserProfile, "created": bool}) for the user with this email."""
    if not name or not name.strip():
        return invalid("Name is required")
    if not email or "@" not in email:
        return invalid("A valid email is required")
    existing = repos.users.get_by_email(email)
    if existing:
        return Ok({"user": UserProfile.model_validate(existing), "created": False})
    user = repos.users.resolve_or_create(name, email)
    logger.info("enter: created user %s", user["id"])
    return Ok({"user": UserProfile.model_validate(user), "created": True})


def get_profile(current: Optional[UserProfile]) -> Result:
    if current is None:
        return unauthorized()
    return Ok(current)


@storage_guard("Failed to fetch profile")
def get_public_profile(repos: Repositories, user_id: str) -> Result:
    doc = repos.users.get_by_id(user_id)
    if not doc:
        return not_found("User not found")
    return Ok(UserProfile.model_validate(doc))


@storage_guard("Failed to update profile")
def update_profile(repos: Repositories, current: Optional[UserProfile], data: Dict) -> Result:
    """Update name, profile text fields, skills, and experience level. Name is required."""
    if current is None:
        return unauthorized()
    name = (data.get("name") or "").strip()
    if not name:
        return invalid("Name is required")
    updates: Dict = {"name": name}
    for field in PROFILE_TEXT_FIELDS:
        if field in data:
            updates[field] = (data.get(field) or "").strip()
    if "skills" in data:
        updates["skills"] = clean_skills(data.get("skills"))
    if "experience_level" in data:
        level = data.get("experience_level") or "Beginner"
        if level not in EXPERIENCE_LEVELS:
            return invalid(f"experience_level must be one of {EXPERIENCE_LEVELS}")
        updates["experience_level"] = level
    updated = repos.users.update(current.id, updates)
    if not updated:
        return not_found("User not found")
    return Ok(UserProfile.model_validate(updated))


@storage_guard("Failed to delete account")
def delete_profile(repos: Repositories, current: Optional[UserProfile]) -> Result:
    if current is None:
        return unauthorized()
    if not repos.users.delete(current.id):
        return not_found("User not found")
    return Ok({"deleted": True})


def get_completion(current: Optional[UserProfile]) -> Result:
    if current is None:
        return unauthorized("Not authenticated")
    return Ok(profile_completion(current))
