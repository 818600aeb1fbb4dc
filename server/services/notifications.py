"""Notification actions for the current user."""

from typing import Optional

from matching.models.interest import Notification
from matching.models.profile import UserProfile
from matching.results import Ok, Result, invalid, not_found, unauthorized

from .errors import storage_guard
from .notification_store import NOTIFICATIONS_READ_LIMIT
from .repositories import Repositories


@storage_guard("Failed to fetch notifications")
def list_notifications(
    repos: Repositories,
    current: Optional[UserProfile],
    limit: int = NOTIFICATIONS_READ_LIMIT,
) -> Result:
    if current is None:
        return unauthorized()
    if limit < 1:
        return invalid("limit must be a positive integer")
    docs = repos.notifications.find_for_recipient(current.id, limit=limit)
    return Ok([Notification.model_validate(d) for d in docs])


@storage_guard("Failed to count notifications")
def unread_count(repos: Repositories, current: Optional[UserProfile]) -> Result:
    if current is None:
        return Ok({"count": 0})
    return Ok({"count": repos.notifications.count_unread(current.id)})


@storage_guard("Failed to mark notification as read")
def mark_read(repos: Repositories, current: Optional[UserProfile], notification_id: str) -> Result:
    if current is None:
        return unauthorized()
    if not repos.notifications.mark_read(current.id, notification_id):
        return not_found("Notification not found")
    return Ok({"id": notification_id, "is_read": True})


@storage_guard("Failed to mark notifications as read")
def mark_all_read(repos: Repositories, current: Optional[UserProfile]) -> Result:
    if current is None:
        return unauthorized()
    return Ok({"updated": repos.notifications.mark_all_read(current.id)})


@storage_guard("Failed to delete notification")
def delete_notification(repos: Repositories, current: Optional[UserProfile], notification_id: str) -> Result:
    if current is None:
        return unauthorized()
    if not repos.notifications.delete(current.id, notification_id):
        return not_found("Notification not found")
    return Ok({"deleted": True})


@storage_guard("Failed to clear notifications")
def clear_notifications(repos: Repositories, current: Optional[UserProfile]) -> Result:
    if current is None:
        return unauthorized()
    return Ok({"deleted": repos.notifications.delete_all(current.id)})
