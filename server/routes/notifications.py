"""Notification endpoints, all scoped to the caller."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from matching.models.profile import UserProfile

from ..auth import current_user
from ..models import NotificationListResponse
from ..services import notifications
from ..services.notification_store import NOTIFICATIONS_READ_LIMIT
from ..state import get_state
from ..utils import notification_item, unwrap

router = APIRouter()


@router.get("", response_model=NotificationListResponse)
def list_notifications(
    limit: int = Query(NOTIFICATIONS_READ_LIMIT),
    current: Optional[UserProfile] = Depends(current_user),
):
    repos = get_state().repos
    items = unwrap(notifications.list_notifications(repos, current, limit=limit))
    count = unwrap(notifications.unread_count(repos, current))["count"]
    return NotificationListResponse(notifications=[notification_item(n) for n in items], unread_count=count)


@router.get("/unread-count")
def unread_count(current: Optional[UserProfile] = Depends(current_user)):
    return unwrap(notifications.unread_count(get_state().repos, current))


@router.post("/read-all")
def mark_all_read(current: Optional[UserProfile] = Depends(current_user)):
    return unwrap(notifications.mark_all_read(get_state().repos, current))


@router.post("/{notification_id}/read")
def mark_read(notification_id: str, current: Optional[UserProfile] = Depends(current_user)):
    return unwrap(notifications.mark_read(get_state().repos, current, notification_id))


@router.delete("/{notification_id}")
def delete_notification(notification_id: str, current: Optional[UserProfile] = Depends(current_user)):
    return unwrap(notifications.delete_notification(get_state().repos, current, notification_id))


@router.delete("")
def clear_notifications(current: Optional[UserProfile] = Depends(current_user)):
    return unwrap(notifications.clear_notifications(get_state().repos, current))
