"""
Shared Firebase app initialisation for the Firestore-backed stores.

All stores reuse one firebase_admin app (same credentials_path and project_id).
"""

import json
from contextlib import contextmanager
from pathlib import Path
from typing import Optional, Union

from .errors import StorageUnavailableError


def _project_id_from_credentials_file(credentials_path: Union[Path, str]) -> Optional[str]:
    """Read project_id from a Google service account JSON file if present."""
    path = Path(credentials_path)
    if not path.is_file():
        return None
    with open(path) as f:
        data = json.load(f)
    return data.get("project_id") or data.get("projectId")


def get_firestore_client(
    project_id: Optional[str] = None,
    credentials_path: Optional[Union[Path, str]] = None,
):
    """Initialise firebase_admin once and return a Firestore client."""
    try:
        import firebase_admin
        from firebase_admin import credentials, firestore
    except ImportError:
        raise ImportError(
            "firebase-admin is required for the Firestore stores. pip install firebase-admin"
        )
    if not firebase_admin._apps:
        if credentials_path:
            project_id = project_id or _project_id_from_credentials_file(credentials_path)
            cred = credentials.Certificate(str(Path(credentials_path).resolve()))
            opts = {"projectId": project_id} if project_id else None
            firebase_admin.initialize_app(cred, opts)
        else:
            firebase_admin.initialize_app(options={"projectId": project_id} if project_id else None)
    return firestore.client()


@contextmanager
def firestore_errors(operation: str):
    """Translate Google API failures into StorageUnavailableError."""
    from google.api_core import exceptions as google_exceptions

    try:
        yield
    except google_exceptions.GoogleAPIError as e:
        raise StorageUnavailableError(f"{operation} failed: {e}") from e
