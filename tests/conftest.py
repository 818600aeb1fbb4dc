"""
Shared fixtures.

DATA_SOURCE is forced to memory before anything imports server, so importing
the app never touches the data directory.
"""

import json
import os
from pathlib import Path
from typing import Dict, List

import pytest

os.environ["DATA_SOURCE"] = "memory"
os.environ.pop("MATCHING_CONFIG_PATH", None)

from matching.models.profile import UserProfile  # noqa: E402
from server.config import ServerConfig  # noqa: E402
from server.services import (  # noqa: E402
    JsonInterestStore,
    JsonProjectStore,
    JsonUserStore,
    Repositories,
)


def write_collection(path: Path, name: str, docs: List[Dict]) -> Path:
    """Write docs in the JSON store file format ({"<name>": [...]})."""
    with open(path, "w") as f:
        json.dump({name: docs}, f)
    return path


def project_doc(
    project_id: str,
    created_at: str,
    owner_id: str = "owner",
    tech_stack=None,
    experience_level: str = "Beginner",
    status: str = "Looking for collaborators",
    **extra,
) -> Dict:
    doc = {
        "id": project_id,
        "title": f"Project {project_id}",
        "description": f"Description of {project_id}",
        "short_description": "",
        "owner_id": owner_id,
        "tech_stack": list(tech_stack or []),
        "category": "Web App",
        "experience_level": experience_level,
        "team_size": "1-2",
        "duration": "1-3 months",
        "status": status,
        "interest_count": 0,
        "created_at": created_at,
        "updated_at": created_at,
    }
    doc.update(extra)
    return doc


def ts(n: int) -> str:
    """Monotonic ISO timestamp: ts(2) is newer than ts(1)."""
    return f"2026-01-01T{n // 3600:02d}:{(n // 60) % 60:02d}:{n % 60:02d}+00:00"


@pytest.fixture
def project_store_factory(tmp_path):
    """Build a JsonProjectStore preloaded with docs."""

    def factory(docs: List[Dict]) -> JsonProjectStore:
        return JsonProjectStore(write_collection(tmp_path / "projects.json", "projects", docs))

    return factory


@pytest.fixture
def interest_store_factory(tmp_path):
    def factory(docs: List[Dict]) -> JsonInterestStore:
        return JsonInterestStore(write_collection(tmp_path / "interests.json", "interests", docs))

    return factory


@pytest.fixture
def user_store_factory(tmp_path):
    def factory(docs: List[Dict]) -> JsonUserStore:
        return JsonUserStore(write_collection(tmp_path / "users.json", "users", docs))

    return factory


@pytest.fixture
def repos() -> Repositories:
    return Repositories.in_memory()


@pytest.fixture
def beginner_viewer() -> UserProfile:
    """Incomplete profile: only skills and experience filled."""
    return UserProfile(id="viewer", name="Vee", skills=["React", "TypeScript"], experience_level="Beginner")


@pytest.fixture
def complete_viewer() -> UserProfile:
    return UserProfile(
        id="viewer",
        name="Vee",
        bio="Full-stack dev",
        location="Berlin",
        skills=["React", "Node.js", "MongoDB"],
        experience_level="Intermediate",
    )


@pytest.fixture
def memory_config() -> ServerConfig:
    return ServerConfig(data_source="memory")
