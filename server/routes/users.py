"""User enter (resolve or create by email, no password) and profile endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends

from matching.models.profile import UserProfile

from ..auth import current_user
from ..models import (
    CompletionResponse,
    ProfileResponse,
    ProjectListResponse,
    StatusResponse,
    UpdateProfileRequest,
    UserEnterRequest,
    UserEnterResponse,
)
from ..services import profiles, projects
from ..state import get_state
from ..utils import profile_response, project_card, unwrap

router = APIRouter()


@router.post("/enter", response_model=UserEnterResponse)
def user_enter(request: UserEnterRequest):
    """
    Enter with name and email.
    Returns the existing user with that email, or creates one (created=True).
    The returned id is what clients send back as X-User-Id.
    """
    data = unwrap(profiles.enter(get_state().repos, request.name, request.email))
    return UserEnterResponse(user=profile_response(data["user"], include_email=True), created=data["created"])


@router.get("/me", response_model=ProfileResponse)
def get_me(current: Optional[UserProfile] = Depends(current_user)):
    return profile_response(unwrap(profiles.get_profile(current)), include_email=True)


@router.put("/me", response_model=ProfileResponse)
def update_me(request: UpdateProfileRequest, current: Optional[UserProfile] = Depends(current_user)):
    """Update profile fields. Only fields present in the body are changed; name is always required."""
    data = request.model_dump(exclude_unset=True)
    user = unwrap(profiles.update_profile(get_state().repos, current, data))
    return profile_response(user, include_email=True)


@router.delete("/me", response_model=StatusResponse)
def delete_me(current: Optional[UserProfile] = Depends(current_user)):
    unwrap(profiles.delete_profile(get_state().repos, current))
    return StatusResponse(message="Account deleted")


@router.get("/me/completion", response_model=CompletionResponse)
def get_my_completion(current: Optional[UserProfile] = Depends(current_user)):
    completion = unwrap(profiles.get_completion(current))
    return CompletionResponse.model_validate(completion.model_dump())


# Must be after /me routes so {user_id} does not match them.


@router.get("/{user_id}", response_model=ProfileResponse)
def get_user(user_id: str):
    """Public profile (no email)."""
    return profile_response(unwrap(profiles.get_public_profile(get_state().repos, user_id)))


@router.get("/{user_id}/projects", response_model=ProjectListResponse)
def get_user_projects(user_id: str):
    items = unwrap(projects.list_projects_by_owner(get_state().repos, user_id))
    return ProjectListResponse(projects=[project_card(p) for p in items])
