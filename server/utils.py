"""Pure helpers: Err to HTTP translation, page-size clamping, card formatting."""

from typing import Dict, Optional

from fastapi import HTTPException

from matching.models.interest import Notification
from matching.models.profile import UserProfile
from matching.models.project import Project
from matching.models.scoring import InterestedUser, Pagination
from matching.results import Err, ErrorKind, Result

from .models import (
    InterestedUserCard,
    NotificationItem,
    OwnerInfo,
    PaginationInfo,
    ProfileResponse,
    ProjectCard,
)

# Err kind -> HTTP status
ERROR_STATUS = {
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION_ERROR: 400,
    ErrorKind.STORAGE_UNAVAILABLE: 503,
    ErrorKind.CONFLICT: 409,
}


def unwrap(result: Result):
    """Return result.data, or raise the HTTPException for an Err."""
    if isinstance(result, Err):
        raise HTTPException(status_code=ERROR_STATUS.get(result.kind, 500), detail=result.message)
    return result.data


def clamp_page_size(page_size: Optional[int], default: int, maximum: int) -> int:
    """None -> default; above maximum -> maximum. Non-positive values pass through for validation."""
    if page_size is None:
        return default
    return min(page_size, maximum)


def profile_response(user: UserProfile, include_email: bool = False) -> ProfileResponse:
    data = user.model_dump() if include_email else user.public_dict()
    return ProfileResponse.model_validate(data)


def project_card(
    project: Project,
    score: Optional[int] = None,
    owners: Optional[Dict[str, Dict]] = None,
) -> ProjectCard:
    """Format a Project for the API, with its match score and owner summary when known."""
    owner = None
    if owners and project.owner_id in owners:
        doc = owners[project.owner_id]
        owner = OwnerInfo(id=project.owner_id, name=doc.get("name") or "", image=doc.get("image"))
    return ProjectCard(
        id=project.id,
        title=project.title,
        short_description=project.short_description,
        description=project.description,
        tech_stack=project.tech_stack,
        category=project.category,
        experience_level=project.experience_level,
        team_size=project.team_size,
        duration=project.duration,
        status=project.status,
        interest_count=project.interest_count,
        owner_id=project.owner_id,
        owner=owner,
        created_at=project.created_at,
        updated_at=project.updated_at,
        match_score=score,
    )


def pagination_info(pagination: Pagination) -> PaginationInfo:
    return PaginationInfo.model_validate(pagination.model_dump())


def interested_user_card(entry: InterestedUser) -> InterestedUserCard:
    # owners see interested users' contact email
    return InterestedUserCard(
        user=profile_response(entry.user, include_email=True),
        match_score=entry.score,
        matching_skills=entry.matching_skills,
        interested_at=entry.interested_at,
    )


def notification_item(notification: Notification) -> NotificationItem:
    return NotificationItem(
        id=notification.id,
        type=notification.type,
        message=notification.message,
        sender_id=notification.sender_id,
        project_id=notification.project_id,
        is_read=notification.is_read,
        created_at=notification.created_at,
    )
