#!/usr/bin/env python3
"""
Upload the JSON stores in a data directory to Cloud Firestore.

Reads users.json, projects.json, interests.json, and notifications.json (the
files written by DATA_SOURCE=json) and writes:
  - users                          (document ID = user id)
  - projects                       (document ID = project id)
  - interests                      (document ID = <user_id>__<project_id>)
  - users/{recipient_id}/notifications

Existing documents with the same ID are overwritten, so re-running is safe.

Requires:
  - GOOGLE_APPLICATION_CREDENTIALS env var pointing to a Firebase service account JSON key.
    Download from Firebase Console > Project Settings > Service Accounts > Generate new key.

Usage:
  From repo root (with credentials file path):
    python -m server.scripts.upload_to_firestore --credentials path/to/serviceAccountKey.json
  Custom data directory:
    python -m server.scripts.upload_to_firestore --credentials key.json --data-dir data
"""

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Callable, Dict, List

from matching.models.interest import interest_key
from server.services.firestore_client import get_firestore_client

_REPO_ROOT = Path(__file__).resolve().parent.parent.parent

BATCH_SIZE = 500  # Firestore batch write limit

COLLECTIONS = ("users", "projects", "interests", "notifications")


def _load_docs(path: Path, name: str) -> List[Dict]:
    """Docs from a collection file ({"<name>": [...]}); missing file -> []."""
    if not path.exists():
        return []
    with open(path) as f:
        data = json.load(f)
    docs = data.get(name, []) if isinstance(data, dict) else data
    return [d for d in docs if isinstance(d, dict)]


def _sanitize_for_firestore(obj):
    """Recursively drop None values; ids live in the document path, not the body."""
    if isinstance(obj, dict):
        return {k: _sanitize_for_firestore(v) for k, v in obj.items() if v is not None and k != "id"}
    if isinstance(obj, list):
        return [_sanitize_for_firestore(x) for x in obj]
    return obj


def _interest_ref(db, doc: Dict):
    if not doc.get("user_id") or not doc.get("project_id"):
        return None
    return db.collection("interests").document(interest_key(doc["user_id"], doc["project_id"]))


def _notification_ref(db, doc: Dict):
    if not doc.get("recipient_id") or not doc.get("id"):
        return None
    return db.collection("users").document(doc["recipient_id"]).collection("notifications").document(doc["id"])


def _plain_ref(collection: str) -> Callable:
    def ref(db, doc: Dict):
        return db.collection(collection).document(doc["id"]) if doc.get("id") else None

    return ref


REFS = {
    "users": _plain_ref("users"),
    "projects": _plain_ref("projects"),
    "interests": _interest_ref,
    "notifications": _notification_ref,
}


def upload_collection(db, name: str, docs: List[Dict]) -> int:
    """Batch-write docs; returns number written (docs without a usable id are skipped)."""
    ref_for = REFS[name]
    total = 0
    for i in range(0, len(docs), BATCH_SIZE):
        batch = db.batch()
        chunk = docs[i : i + BATCH_SIZE]
        for doc in chunk:
            ref = ref_for(db, doc)
            if ref is None:
                continue
            batch.set(ref, _sanitize_for_firestore(doc))
            total += 1
        batch.commit()
        print(f"  {name}: committed batch {i // BATCH_SIZE + 1} ({len(chunk)} docs)")
    return total


def main():
    parser = argparse.ArgumentParser(description="Upload JSON stores to Firestore")
    parser.add_argument(
        "--data-dir",
        type=str,
        default=os.environ.get("DATA_DIR", str(_REPO_ROOT / "data")),
        help="Directory containing users.json, projects.json, interests.json, notifications.json",
    )
    parser.add_argument(
        "--credentials",
        type=str,
        default=None,
        metavar="PATH",
        help="Path to Firebase service account JSON key. Else uses GOOGLE_APPLICATION_CREDENTIALS.",
    )
    parser.add_argument("--project-id", type=str, default=os.environ.get("FIREBASE_PROJECT_ID"))
    args = parser.parse_args()
    data_dir = Path(args.data_dir)

    if not data_dir.is_dir():
        print(f"Data directory not found: {data_dir}")
        sys.exit(1)

    cred_path = args.credentials or os.environ.get("GOOGLE_APPLICATION_CREDENTIALS")
    if not cred_path:
        print("Provide --credentials PATH or set GOOGLE_APPLICATION_CREDENTIALS.")
        sys.exit(1)
    cred_path = Path(cred_path)
    if not cred_path.is_absolute():
        cred_path = (_REPO_ROOT / cred_path).resolve()
    if not cred_path.exists():
        print(f"Credentials file not found: {cred_path}")
        sys.exit(1)

    print("Loading data...")
    docs = {name: _load_docs(data_dir / f"{name}.json", name) for name in COLLECTIONS}
    print("  " + ", ".join(f"{len(v)} {k}" for k, v in docs.items()))

    print("Initializing Firebase Admin...")
    db = get_firestore_client(args.project_id, cred_path)

    print("Uploading to Firestore...")
    counts = {name: upload_collection(db, name, docs[name]) for name in COLLECTIONS}
    print("Done. " + ", ".join(f"{k}={v}" for k, v in counts.items()))


if __name__ == "__main__":
    main()
