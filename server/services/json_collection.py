"""
JSON-file backed document collection.

One file per collection (e.g. data/projects.json) holding {"<name>": [doc, ...]}.
With path=None nothing is written, which is what tests and DATA_SOURCE=memory use.
All reads and writes go through one lock per collection, so check-then-act
sequences done under `with collection.lock:` are atomic within the process.
"""

import json
import logging
import threading
import uuid
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Union

from .errors import StorageUnavailableError

logger = logging.getLogger(__name__)


def new_id() -> str:
    return uuid.uuid4().hex[:24]


class JsonCollection:
    """In-memory dict of id -> document, optionally mirrored to a JSON file."""

    def __init__(self, name: str, path: Optional[Union[Path, str]] = None):
        self.name = name
        self._path = Path(path) if path else None
        self._docs: Dict[str, Dict] = {}
        self.lock = threading.RLock()
        if self._path:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._load()

    def _load(self) -> None:
        if not self._path.exists():
            return
        try:
            with open(self._path) as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            raise StorageUnavailableError(f"Cannot read {self._path}: {e}") from e
        docs = data.get(self.name, data) if isinstance(data, dict) else data
        if isinstance(docs, list):
            for d in docs:
                if d.get("id"):
                    self._docs[d["id"]] = d
        elif isinstance(docs, dict):
            for doc_id, d in docs.items():
                d["id"] = doc_id
                self._docs[doc_id] = d

    def _save(self, docs: Dict[str, Dict]) -> None:
        if not self._path:
            return
        out = {self.name: list(docs.values())}
        try:
            with open(self._path, "w") as f:
                json.dump(out, f, indent=2)
        except IOError as e:
            raise StorageUnavailableError(f"Cannot write {self._path}: {e}") from e

    def get(self, doc_id: str) -> Optional[Dict]:
        with self.lock:
            doc = self._docs.get(doc_id)
            return dict(doc) if doc else None

    def __contains__(self, doc_id: str) -> bool:
        with self.lock:
            return doc_id in self._docs

    def values(self) -> Iterator[Dict]:
        with self.lock:
            docs = [dict(d) for d in self._docs.values()]
        return iter(docs)

    def filter(self, predicate: Callable[[Dict], bool]) -> List[Dict]:
        return [d for d in self.values() if predicate(d)]

    def _commit(self, docs: Dict[str, Dict]) -> None:
        """Write docs to disk, then make them current; a failed write leaves memory untouched."""
        self._save(docs)
        self._docs = docs

    def put(self, doc: Dict) -> Dict:
        with self.lock:
            docs = dict(self._docs)
            docs[doc["id"]] = dict(doc)
            self._commit(docs)
            return dict(doc)

    def update(self, doc_id: str, updates: Dict) -> Optional[Dict]:
        with self.lock:
            updated = self.update_many({doc_id: updates})
            return updated[0] if updated else None

    def update_many(self, updates_by_id: Dict[str, Dict]) -> List[Dict]:
        """Apply several updates with one write. Unknown ids are skipped."""
        with self.lock:
            docs = dict(self._docs)
            changed = []
            for doc_id, updates in updates_by_id.items():
                if doc_id not in docs:
                    continue
                doc = dict(docs[doc_id])
                doc.update({k: v for k, v in updates.items() if k != "id"})
                docs[doc_id] = doc
                changed.append(dict(doc))
            if changed:
                self._commit(docs)
            return changed

    def delete(self, doc_id: str) -> bool:
        with self.lock:
            if doc_id not in self._docs:
                return False
            docs = dict(self._docs)
            del docs[doc_id]
            self._commit(docs)
            return True

    def delete_where(self, predicate: Callable[[Dict], bool]) -> int:
        with self.lock:
            docs = {k: d for k, d in self._docs.items() if not predicate(d)}
            removed = len(self._docs) - len(docs)
            if removed:
                self._commit(docs)
            return removed
