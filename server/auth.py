"""
Caller identity: the X-User-Id header resolved against the user store.

There are no passwords or tokens; an absent or unknown id is an anonymous caller.
"""

import logging
from typing import Optional

from fastapi import Header, HTTPException

from matching.models.profile import UserProfile

from .services import StoreError
from .services.profiles import resolve_current_user
from .state import get_state

logger = logging.getLogger(__name__)


def current_user(x_user_id: Optional[str] = Header(None)) -> Optional[UserProfile]:
    """FastAPI dependency: the calling user's profile, or None."""
    try:
        return resolve_current_user(get_state().repos, x_user_id)
    except StoreError:
        logger.exception("current_user: user store unavailable")
        raise HTTPException(status_code=503, detail="User store unavailable")
