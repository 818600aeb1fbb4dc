"""
Interest store: the (user, project) join collection.

The document key is interest_key(user_id, project_id), so the store itself is
the unique index: create() raises InterestExistsError for a duplicate pair and
delete() reports whether a record was actually removed. Callers rely on those
two signals, not on a prior read, to decide whether to touch interest_count.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Union

from matching.models.interest import interest_key

from .errors import InterestExistsError
from .firestore_client import firestore_errors, get_firestore_client
from .json_collection import JsonCollection

_BATCH_SIZE = 500


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _newest_first(docs: List[Dict]) -> List[Dict]:
    return sorted(docs, key=lambda d: d.get("created_at") or "", reverse=True)


class InterestStore(Protocol):
    """Protocol for interest persistence. Implement for JSON file or Firestore."""

    def find_interests_by_project(self, project_id: str) -> List[Dict]:
        """Interests for one project, newest first."""
        ...

    def find_interests_by_user(self, user_id: str) -> List[Dict]:
        """Interests for one user, newest first."""
        ...

    def get(self, user_id: str, project_id: str) -> Optional[Dict]:
        ...

    def create(self, user_id: str, project_id: str, created_at: Optional[str] = None) -> Dict:
        """Create the interest (created_at defaults to now). Raises InterestExistsError if the pair already exists."""
        ...

    def delete(self, user_id: str, project_id: str) -> bool:
        """Delete the interest. True only if a record was removed by this call."""
        ...

    def delete_for_project(self, project_id: str) -> int:
        """Cascade delete for a removed project; returns number deleted."""
        ...


class JsonInterestStore:
    """Interest store backed by a JSON file (e.g. data/interests.json), or memory when path is None."""

    def __init__(self, path: Optional[Union[Path, str]] = None):
        self._interests = JsonCollection("interests", path)

    def find_interests_by_project(self, project_id: str) -> List[Dict]:
        return _newest_first(self._interests.filter(lambda d: d.get("project_id") == project_id))

    def find_interests_by_user(self, user_id: str) -> List[Dict]:
        return _newest_first(self._interests.filter(lambda d: d.get("user_id") == user_id))

    def get(self, user_id: str, project_id: str) -> Optional[Dict]:
        return self._interests.get(interest_key(user_id, project_id))

    def create(self, user_id: str, project_id: str, created_at: Optional[str] = None) -> Dict:
        key = interest_key(user_id, project_id)
        with self._interests.lock:
            if key in self._interests:
                raise InterestExistsError(user_id, project_id)
            return self._interests.put(
                {"id": key, "user_id": user_id, "project_id": project_id, "created_at": created_at or _now()}
            )

    def delete(self, user_id: str, project_id: str) -> bool:
        return self._interests.delete(interest_key(user_id, project_id))

    def delete_for_project(self, project_id: str) -> int:
        return self._interests.delete_where(lambda d: d.get("project_id") == project_id)


class FirestoreInterestStore:
    """Interest store backed by Firestore 'interests' collection (doc id = user_id__project_id)."""

    def __init__(
        self,
        project_id: Optional[str] = None,
        credentials_path: Optional[Union[Path, str]] = None,
        client=None,
    ):
        self._db = client or get_firestore_client(project_id, credentials_path)
        self._coll = self._db.collection("interests")

    def _doc_to_interest(self, doc) -> Dict:
        d = doc.to_dict()
        d["id"] = doc.id
        return d

    def _find(self, field: str, value: str) -> List[Dict]:
        with firestore_errors(f"find interests by {field}"):
            docs = [self._doc_to_interest(doc) for doc in self._coll.where(field, "==", value).stream()]
        return _newest_first(docs)

    def find_interests_by_project(self, project_id: str) -> List[Dict]:
        return self._find("project_id", project_id)

    def find_interests_by_user(self, user_id: str) -> List[Dict]:
        return self._find("user_id", user_id)

    def get(self, user_id: str, project_id: str) -> Optional[Dict]:
        with firestore_errors("get interest"):
            doc = self._coll.document(interest_key(user_id, project_id)).get()
        return self._doc_to_interest(doc) if doc.exists else None

    def create(self, user_id: str, project_id: str, created_at: Optional[str] = None) -> Dict:
        from google.api_core.exceptions import AlreadyExists

        key = interest_key(user_id, project_id)
        data = {"user_id": user_id, "project_id": project_id, "created_at": created_at or _now()}
        with firestore_errors("create interest"):
            try:
                # create() fails if the document exists: the unique index
                self._coll.document(key).create(data)
            except AlreadyExists as e:
                raise InterestExistsError(user_id, project_id) from e
        data["id"] = key
        return data

    def delete(self, user_id: str, project_id: str) -> bool:
        from google.api_core.exceptions import NotFound

        doc_ref = self._coll.document(interest_key(user_id, project_id))
        with firestore_errors("delete interest"):
            try:
                doc_ref.delete(option=self._db.write_option(exists=True))
            except NotFound:
                return False
        return True

    def delete_for_project(self, project_id: str) -> int:
        deleted = 0
        query = self._coll.where("project_id", "==", project_id)
        with firestore_errors("delete interests for project"):
            while True:
                docs = list(query.limit(_BATCH_SIZE).stream())
                if not docs:
                    break
                batch = self._db.batch()
                for doc in docs:
                    batch.delete(doc.reference)
                batch.commit()
                deleted += len(docs)
        return deleted
