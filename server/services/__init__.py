"""Backing logic: stores, repositories, and the actions routes call."""

from .errors import InterestExistsError, StorageUnavailableError, StoreError, storage_guard
from .firestore_client import get_firestore_client
from .interest_store import FirestoreInterestStore, InterestStore, JsonInterestStore
from .notification_store import (
    NOTIFICATIONS_READ_LIMIT,
    FirestoreNotificationStore,
    JsonNotificationStore,
    NotificationStore,
)
from .project_store import FirestoreProjectStore, JsonProjectStore, ProjectStore
from .repositories import Repositories
from .user_store import FirestoreUserStore, JsonUserStore, UserStore

__all__ = [
    "InterestExistsError",
    "StorageUnavailableError",
    "StoreError",
    "storage_guard",
    "get_firestore_client",
    "FirestoreInterestStore",
    "InterestStore",
    "JsonInterestStore",
    "NOTIFICATIONS_READ_LIMIT",
    "FirestoreNotificationStore",
    "JsonNotificationStore",
    "NotificationStore",
    "FirestoreProjectStore",
    "JsonProjectStore",
    "ProjectStore",
    "Repositories",
    "FirestoreUserStore",
    "JsonUserStore",
    "UserStore",
]
