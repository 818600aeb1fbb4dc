"""Store-level exceptions shared by the JSON and Firestore backends."""

import functools
import logging

from matching.results import storage_unavailable

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Base class for store failures."""


class StorageUnavailableError(StoreError):
    """The backing store could not be read or written."""


class InterestExistsError(StoreError):
    """An Interest for this (user, project) pair already exists (unique constraint)."""

    def __init__(self, user_id: str, project_id: str):
        super().__init__(f"Interest already exists for user={user_id!r} project={project_id!r}")
        self.user_id = user_id
        self.project_id = project_id


def storage_guard(message: str):
    """
    Decorator for actions returning a Result: store failures become
    Err(storage_unavailable, message) instead of propagating.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except StoreError:
                logger.exception("%s: store failure", func.__name__)
                return storage_unavailable(message)

        return wrapper

    return decorator
