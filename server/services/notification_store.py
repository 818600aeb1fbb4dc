"""
Notification store: per-recipient notifications (interest alerts, messages).

Every operation is scoped by recipient_id, so one user can never read, mark,
or delete another user's notifications. Implementations: JSON file and
Firestore subcollection users/{recipient_id}/notifications.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Union

from .firestore_client import firestore_errors, get_firestore_client
from .json_collection import JsonCollection, new_id

NOTIFICATIONS_READ_LIMIT = 10
_BATCH_SIZE = 500


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class NotificationStore(Protocol):
    """Protocol for notification read/write. Implement for JSON file or Firestore."""

    def create(
        self,
        recipient_id: str,
        sender_id: str,
        notification_type: str,
        message: str,
        project_id: Optional[str] = None,
    ) -> Dict:
        ...

    def find_for_recipient(self, recipient_id: str, limit: int = NOTIFICATIONS_READ_LIMIT) -> List[Dict]:
        """Most recent notifications first."""
        ...

    def mark_read(self, recipient_id: str, notification_id: str) -> bool:
        ...

    def mark_all_read(self, recipient_id: str) -> int:
        ...

    def count_unread(self, recipient_id: str) -> int:
        ...

    def delete(self, recipient_id: str, notification_id: str) -> bool:
        ...

    def delete_all(self, recipient_id: str) -> int:
        ...


def _new_notification(
    recipient_id: str,
    sender_id: str,
    notification_type: str,
    message: str,
    project_id: Optional[str],
) -> Dict:
    return {
        "recipient_id": recipient_id,
        "sender_id": sender_id,
        "type": notification_type or "interest",
        "project_id": project_id,
        "message": message,
        "is_read": False,
        "created_at": _now(),
    }


class JsonNotificationStore:
    """Notification store backed by a JSON file (e.g. data/notifications.json), or memory."""

    def __init__(self, path: Optional[Union[Path, str]] = None):
        self._notifications = JsonCollection("notifications", path)

    def _owned(self, recipient_id: str, notification_id: str) -> Optional[Dict]:
        doc = self._notifications.get(notification_id)
        if doc is None or doc.get("recipient_id") != recipient_id:
            return None
        return doc

    def create(
        self,
        recipient_id: str,
        sender_id: str,
        notification_type: str,
        message: str,
        project_id: Optional[str] = None,
    ) -> Dict:
        doc = _new_notification(recipient_id, sender_id, notification_type, message, project_id)
        doc["id"] = new_id()
        return self._notifications.put(doc)

    def find_for_recipient(self, recipient_id: str, limit: int = NOTIFICATIONS_READ_LIMIT) -> List[Dict]:
        docs = self._notifications.filter(lambda d: d.get("recipient_id") == recipient_id)
        docs.sort(key=lambda d: d.get("created_at") or "", reverse=True)
        return docs[:limit]

    def mark_read(self, recipient_id: str, notification_id: str) -> bool:
        with self._notifications.lock:
            if self._owned(recipient_id, notification_id) is None:
                return False
            self._notifications.update(notification_id, {"is_read": True})
            return True

    def mark_all_read(self, recipient_id: str) -> int:
        with self._notifications.lock:
            unread = self._notifications.filter(
                lambda d: d.get("recipient_id") == recipient_id and not d.get("is_read")
            )
            updated = self._notifications.update_many({doc["id"]: {"is_read": True} for doc in unread})
            return len(updated)

    def count_unread(self, recipient_id: str) -> int:
        return len(
            self._notifications.filter(
                lambda d: d.get("recipient_id") == recipient_id and not d.get("is_read")
            )
        )

    def delete(self, recipient_id: str, notification_id: str) -> bool:
        with self._notifications.lock:
            if self._owned(recipient_id, notification_id) is None:
                return False
            return self._notifications.delete(notification_id)

    def delete_all(self, recipient_id: str) -> int:
        return self._notifications.delete_where(lambda d: d.get("recipient_id") == recipient_id)


class FirestoreNotificationStore:
    """
    Notification store backed by Firestore subcollection users/{recipient_id}/notifications.
    Each document: { sender_id, type, project_id, message, is_read, created_at }.
    """

    def __init__(
        self,
        project_id: Optional[str] = None,
        credentials_path: Optional[Union[Path, str]] = None,
        client=None,
    ):
        self._db = client or get_firestore_client(project_id, credentials_path)

    def _notifications_ref(self, recipient_id: str):
        """Reference to users/{recipient_id}/notifications subcollection."""
        return self._db.collection("users").document(recipient_id).collection("notifications")

    def _doc_to_notification(self, doc, recipient_id: str) -> Dict:
        d = doc.to_dict()
        d["id"] = doc.id
        d["recipient_id"] = recipient_id
        return d

    def create(
        self,
        recipient_id: str,
        sender_id: str,
        notification_type: str,
        message: str,
        project_id: Optional[str] = None,
    ) -> Dict:
        data = _new_notification(recipient_id, sender_id, notification_type, message, project_id)
        with firestore_errors("create notification"):
            _, ref = self._notifications_ref(recipient_id).add(data)
        data["id"] = ref.id
        return data

    def find_for_recipient(self, recipient_id: str, limit: int = NOTIFICATIONS_READ_LIMIT) -> List[Dict]:
        from firebase_admin import firestore

        query = (
            self._notifications_ref(recipient_id)
            .order_by("created_at", direction=firestore.Query.DESCENDING)
            .limit(limit)
        )
        with firestore_errors("list notifications"):
            return [self._doc_to_notification(doc, recipient_id) for doc in query.stream()]

    def mark_read(self, recipient_id: str, notification_id: str) -> bool:
        doc_ref = self._notifications_ref(recipient_id).document(notification_id)
        with firestore_errors("mark notification read"):
            if not doc_ref.get().exists:
                return False
            doc_ref.update({"is_read": True})
        return True

    def mark_all_read(self, recipient_id: str) -> int:
        query = self._notifications_ref(recipient_id).where("is_read", "==", False)
        updated = 0
        with firestore_errors("mark all notifications read"):
            while True:
                docs = list(query.limit(_BATCH_SIZE).stream())
                if not docs:
                    break
                batch = self._db.batch()
                for doc in docs:
                    batch.update(doc.reference, {"is_read": True})
                batch.commit()
                updated += len(docs)
        return updated

    def count_unread(self, recipient_id: str) -> int:
        query = self._notifications_ref(recipient_id).where("is_read", "==", False)
        with firestore_errors("count unread notifications"):
            return sum(1 for _ in query.stream())

    def delete(self, recipient_id: str, notification_id: str) -> bool:
        doc_ref = self._notifications_ref(recipient_id).document(notification_id)
        with firestore_errors("delete notification"):
            if not doc_ref.get().exists:
                return False
            doc_ref.delete()
        return True

    def delete_all(self, recipient_id: str) -> int:
        """Delete all documents in users/{recipient_id}/notifications (batch delete in chunks)."""
        ref = self._notifications_ref(recipient_id)
        deleted = 0
        with firestore_errors("clear notifications"):
            while True:
                docs = list(ref.limit(_BATCH_SIZE).stream())
                if not docs:
                    break
                batch = self._db.batch()
                for doc in docs:
                    batch.delete(doc.reference)
                batch.commit()
                deleted += len(docs)
        return deleted
