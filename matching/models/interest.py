"""
Interest and Notification models.

Interest is the (user, project) join entity; at most one exists per pair.
Notification is what a project owner receives when someone shows interest.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict

NOTIFICATION_TYPES = ["interest", "message"]


def interest_key(user_id: str, project_id: str) -> str:
    """Deterministic id for the (user, project) pair; the store's unique key."""
    return f"{user_id}__{project_id}"


class Interest(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str = ""
    user_id: str
    project_id: str
    created_at: Optional[str] = ""


class Notification(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    recipient_id: str
    sender_id: str
    type: str = "interest"
    project_id: Optional[str] = None
    message: str
    is_read: bool = False
    created_at: Optional[str] = ""
