"""
User store: resolve or create users by email (no password).
Persistence to a JSON file or Firestore depending on DATA_SOURCE.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Union

from .firestore_client import firestore_errors, get_firestore_client
from .json_collection import JsonCollection, new_id


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class UserStore(Protocol):
    """Protocol for user persistence. Implement for JSON file or Firestore."""

    def get_by_id(self, user_id: str) -> Optional[Dict]:
        """Return user dict if exists, else None."""
        ...

    def get_by_email(self, email: str) -> Optional[Dict]:
        ...

    def get_many(self, user_ids: List[str]) -> Dict[str, Dict]:
        """Map user_id -> user dict for the ids that exist."""
        ...

    def create(self, name: str, email: str, **profile) -> Dict:
        ...

    def resolve_or_create(self, name: str, email: str) -> Dict:
        """Return existing user with this email, or create and return a new one."""
        ...

    def update(self, user_id: str, updates: Dict) -> Optional[Dict]:
        """Apply updates; returns updated user or None if not found."""
        ...

    def delete(self, user_id: str) -> bool:
        ...


def _new_user(name: str, email: str, profile: Dict) -> Dict:
    name = name.strip()
    if not name:
        raise ValueError("name cannot be empty")
    email = _normalize_email(email)
    if not email:
        raise ValueError("email cannot be empty")
    user = {
        "name": name,
        "email": email,
        "bio": "",
        "location": "",
        "skills": [],
        "experience_level": "Beginner",
        "created_at": _now(),
    }
    user.update(profile)
    return user


class JsonUserStore:
    """User store backed by a JSON file (e.g. data/users.json), or memory when path is None."""

    def __init__(self, path: Optional[Union[Path, str]] = None):
        self._users = JsonCollection("users", path)

    def get_by_id(self, user_id: str) -> Optional[Dict]:
        return self._users.get(user_id)

    def get_by_email(self, email: str) -> Optional[Dict]:
        key = _normalize_email(email)
        if not key:
            return None
        found = self._users.filter(lambda u: u.get("email") == key)
        return found[0] if found else None

    def get_many(self, user_ids: List[str]) -> Dict[str, Dict]:
        out = {}
        for uid in user_ids:
            user = self._users.get(uid)
            if user:
                out[uid] = user
        return out

    def create(self, name: str, email: str, **profile) -> Dict:
        user = _new_user(name, email, profile)
        user["id"] = new_id()
        return self._users.put(user)

    def resolve_or_create(self, name: str, email: str) -> Dict:
        with self._users.lock:
            existing = self.get_by_email(email)
            if existing:
                return existing
            return self.create(name, email)

    def update(self, user_id: str, updates: Dict) -> Optional[Dict]:
        return self._users.update(user_id, updates)

    def delete(self, user_id: str) -> bool:
        return self._users.delete(user_id)


class FirestoreUserStore:
    """User store backed by Firestore 'users' collection."""

    def __init__(
        self,
        project_id: Optional[str] = None,
        credentials_path: Optional[Union[Path, str]] = None,
        client=None,
    ):
        self._db = client or get_firestore_client(project_id, credentials_path)
        self._coll = self._db.collection("users")

    def _doc_to_user(self, doc) -> Dict:
        d = doc.to_dict()
        d["id"] = doc.id
        return d

    def get_by_id(self, user_id: str) -> Optional[Dict]:
        if not user_id:
            return None
        with firestore_errors("get user"):
            doc = self._coll.document(user_id).get()
        if doc.exists:
            return self._doc_to_user(doc)
        return None

    def get_by_email(self, email: str) -> Optional[Dict]:
        key = _normalize_email(email)
        if not key:
            return None
        with firestore_errors("find user by email"):
            docs = list(self._coll.where("email", "==", key).limit(1).stream())
        return self._doc_to_user(docs[0]) if docs else None

    def get_many(self, user_ids: List[str]) -> Dict[str, Dict]:
        ids = [uid for uid in dict.fromkeys(user_ids) if uid]
        if not ids:
            return {}
        refs = [self._coll.document(uid) for uid in ids]
        with firestore_errors("get users"):
            docs = list(self._db.get_all(refs))
        return {doc.id: self._doc_to_user(doc) for doc in docs if doc.exists}

    def create(self, name: str, email: str, **profile) -> Dict:
        user = _new_user(name, email, profile)
        ref = self._coll.document()
        with firestore_errors("create user"):
            ref.set(user)
        user["id"] = ref.id
        return user

    def resolve_or_create(self, name: str, email: str) -> Dict:
        existing = self.get_by_email(email)
        if existing:
            return existing
        return self.create(name, email)

    def update(self, user_id: str, updates: Dict) -> Optional[Dict]:
        doc_ref = self._coll.document(user_id)
        with firestore_errors("update user"):
            doc = doc_ref.get()
            if not doc.exists:
                return None
            doc_ref.update({k: v for k, v in updates.items() if k != "id"})
            return self._doc_to_user(doc_ref.get())

    def delete(self, user_id: str) -> bool:
        doc_ref = self._coll.document(user_id)
        with firestore_errors("delete user"):
            if not doc_ref.get().exists:
                return False
            doc_ref.delete()
        return True
