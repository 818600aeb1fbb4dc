"""Interest and notification Pydantic models."""

from typing import List, Optional

from pydantic import BaseModel


class InterestStateResponse(BaseModel):
    project_id: str
    interested: bool
    # True only when this request created or removed the Interest
    changed: bool = False
    interest_count: Optional[int] = None


class NotificationItem(BaseModel):
    id: str
    type: str
    message: str = ""
    sender_id: str = ""
    project_id: Optional[str] = None
    is_read: bool = False
    created_at: Optional[str] = None


class NotificationListResponse(BaseModel):
    notifications: List[NotificationItem]
    unread_count: int = 0
