"""Interest endpoints: show, withdraw, toggle, check, and the caller's interests."""

import logging
from typing import Dict, Optional

from fastapi import APIRouter, Depends

from matching.models.profile import UserProfile

from ..auth import current_user
from ..models import InterestStateResponse, ProjectListResponse
from ..services import StoreError, interests
from ..state import get_state
from ..utils import project_card, unwrap

logger = logging.getLogger(__name__)

router = APIRouter()


def _state_response(project_id: str, data: Dict) -> InterestStateResponse:
    try:
        doc = get_state().repos.projects.get(project_id)
    except StoreError:
        logger.warning("interest_count lookup failed for %s", project_id, exc_info=True)
        doc = None
    return InterestStateResponse(
        project_id=project_id,
        interested=data["interested"],
        changed=bool(data.get("created") or data.get("removed")),
        interest_count=doc.get("interest_count", 0) if doc else None,
    )


@router.post("/projects/{project_id}/interest", response_model=InterestStateResponse)
def show_interest(project_id: str, current: Optional[UserProfile] = Depends(current_user)):
    """Idempotent: showing interest twice leaves one Interest and the count unchanged."""
    data = unwrap(interests.show_interest(get_state().repos, current, project_id))
    return _state_response(project_id, data)


@router.delete("/projects/{project_id}/interest", response_model=InterestStateResponse)
def withdraw_interest(project_id: str, current: Optional[UserProfile] = Depends(current_user)):
    data = unwrap(interests.withdraw_interest(get_state().repos, current, project_id))
    return _state_response(project_id, data)


@router.post("/projects/{project_id}/interest/toggle", response_model=InterestStateResponse)
def toggle_interest(project_id: str, current: Optional[UserProfile] = Depends(current_user)):
    data = unwrap(interests.toggle_interest(get_state().repos, current, project_id))
    return _state_response(project_id, data)


@router.get("/projects/{project_id}/interest", response_model=InterestStateResponse)
def check_interest(project_id: str, current: Optional[UserProfile] = Depends(current_user)):
    data = unwrap(interests.check_interest(get_state().repos, current, project_id))
    return InterestStateResponse(project_id=project_id, interested=data["interested"])


@router.get("/interests/mine", response_model=ProjectListResponse)
def my_interests(current: Optional[UserProfile] = Depends(current_user)):
    """Projects the caller is interested in, most recent interest first."""
    items = unwrap(interests.my_interests(get_state().repos, current))
    return ProjectListResponse(projects=[project_card(p) for p in items])
