"""
Project store: the projects collection behind browse, recommendations, and CRUD.

find_projects / count_projects take a ProjectQuery; results are ordered by
created_at descending (newest first). interest_count is only ever changed via
increment_interest_count, an atomic +/- on the stored counter.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Union

from matching.models.query import ProjectQuery

from .firestore_client import firestore_errors, get_firestore_client
from .json_collection import JsonCollection, new_id

# Firestore caps array_contains_any at 30 values
_ARRAY_CONTAINS_ANY_MAX = 30


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _newest_first(docs: List[Dict]) -> List[Dict]:
    return sorted(docs, key=lambda d: (d.get("created_at") or "", d.get("id") or ""), reverse=True)


def _page(docs: List[Dict], skip: int, limit: Optional[int]) -> List[Dict]:
    if skip:
        docs = docs[skip:]
    if limit is not None:
        docs = docs[:limit]
    return docs


class ProjectStore(Protocol):
    """Protocol for project persistence. Implement for JSON file or Firestore."""

    def find_projects(
        self,
        query: ProjectQuery,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[Dict]:
        """Matching projects, newest first. limit=None means all."""
        ...

    def count_projects(self, query: ProjectQuery) -> int:
        ...

    def get(self, project_id: str) -> Optional[Dict]:
        ...

    def create(self, owner_id: str, data: Dict) -> Dict:
        """Create a project owned by owner_id. interest_count starts at 0."""
        ...

    def update(self, project_id: str, updates: Dict) -> Optional[Dict]:
        ...

    def delete(self, project_id: str) -> bool:
        ...

    def increment_interest_count(self, project_id: str, delta: int) -> None:
        """Atomically add delta to interest_count."""
        ...


def _new_project(owner_id: str, data: Dict) -> Dict:
    now = _now()
    project = dict(data)
    project.update(
        {
            "owner_id": owner_id,
            "interest_count": 0,
            "created_at": now,
            "updated_at": now,
        }
    )
    project.pop("id", None)
    return project


def _protected(updates: Dict) -> Dict:
    """Drop fields callers may not set directly."""
    return {
        k: v
        for k, v in updates.items()
        if k not in ("id", "owner_id", "interest_count", "created_at")
    }


class JsonProjectStore:
    """Project store backed by a JSON file (e.g. data/projects.json), or memory when path is None."""

    def __init__(self, path: Optional[Union[Path, str]] = None):
        self._projects = JsonCollection("projects", path)

    def find_projects(
        self,
        query: ProjectQuery,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[Dict]:
        return _page(_newest_first(self._projects.filter(query.matches)), skip, limit)

    def count_projects(self, query: ProjectQuery) -> int:
        return len(self._projects.filter(query.matches))

    def get(self, project_id: str) -> Optional[Dict]:
        return self._projects.get(project_id)

    def create(self, owner_id: str, data: Dict) -> Dict:
        project = _new_project(owner_id, data)
        project["id"] = new_id()
        return self._projects.put(project)

    def update(self, project_id: str, updates: Dict) -> Optional[Dict]:
        changes = _protected(updates)
        changes["updated_at"] = _now()
        return self._projects.update(project_id, changes)

    def delete(self, project_id: str) -> bool:
        return self._projects.delete(project_id)

    def increment_interest_count(self, project_id: str, delta: int) -> None:
        with self._projects.lock:
            project = self._projects.get(project_id)
            if project is None:
                return
            self._projects.update(
                project_id, {"interest_count": (project.get("interest_count") or 0) + delta}
            )


class FirestoreProjectStore:
    """
    Project store backed by Firestore 'projects' collection.

    Equality filters and the tech-stack intersection run in Firestore; keyword
    search, owner exclusion, ordering, and pagination run in Python over the
    result using ProjectQuery.matches, so both stores agree on semantics.
    """

    def __init__(
        self,
        project_id: Optional[str] = None,
        credentials_path: Optional[Union[Path, str]] = None,
        client=None,
    ):
        self._db = client or get_firestore_client(project_id, credentials_path)
        self._coll = self._db.collection("projects")

    def _doc_to_project(self, doc) -> Dict:
        d = doc.to_dict()
        d["id"] = doc.id
        return d

    def _native_query(self, query: ProjectQuery):
        ref = self._coll
        if query.category:
            ref = ref.where("category", "==", query.category)
        if query.experience_level:
            ref = ref.where("experience_level", "==", query.experience_level)
        if query.status:
            ref = ref.where("status", "==", query.status)
        if query.owner_id:
            ref = ref.where("owner_id", "==", query.owner_id)
        if query.tech_stack and len(query.tech_stack) <= _ARRAY_CONTAINS_ANY_MAX:
            ref = ref.where("tech_stack", "array_contains_any", list(query.tech_stack))
        return ref

    def _matching(self, query: ProjectQuery) -> List[Dict]:
        with firestore_errors("query projects"):
            docs = [self._doc_to_project(doc) for doc in self._native_query(query).stream()]
        return [d for d in docs if query.matches(d)]

    def find_projects(
        self,
        query: ProjectQuery,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[Dict]:
        return _page(_newest_first(self._matching(query)), skip, limit)

    def count_projects(self, query: ProjectQuery) -> int:
        return len(self._matching(query))

    def get(self, project_id: str) -> Optional[Dict]:
        if not project_id:
            return None
        with firestore_errors("get project"):
            doc = self._coll.document(project_id).get()
        return self._doc_to_project(doc) if doc.exists else None

    def create(self, owner_id: str, data: Dict) -> Dict:
        project = _new_project(owner_id, data)
        ref = self._coll.document()
        with firestore_errors("create project"):
            ref.set(project)
        project["id"] = ref.id
        return project

    def update(self, project_id: str, updates: Dict) -> Optional[Dict]:
        doc_ref = self._coll.document(project_id)
        changes = _protected(updates)
        changes["updated_at"] = _now()
        with firestore_errors("update project"):
            if not doc_ref.get().exists:
                return None
            doc_ref.update(changes)
            return self._doc_to_project(doc_ref.get())

    def delete(self, project_id: str) -> bool:
        doc_ref = self._coll.document(project_id)
        with firestore_errors("delete project"):
            if not doc_ref.get().exists:
                return False
            doc_ref.delete()
        return True

    def increment_interest_count(self, project_id: str, delta: int) -> None:
        from firebase_admin import firestore
        from google.api_core.exceptions import NotFound

        with firestore_errors("increment interest_count"):
            try:
                self._coll.document(project_id).update({"interest_count": firestore.Increment(delta)})
            except NotFound:
                # project deleted in the meantime
                return
