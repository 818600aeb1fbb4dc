"""
Storage interfaces the retrievers read from.

The server's stores satisfy these structurally. Any exception a source raises
is treated as the storage being unavailable.
"""

from typing import Dict, List, Optional, Protocol

from .models.query import ProjectQuery


class ProjectSource(Protocol):
    def find_projects(
        self,
        query: ProjectQuery,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[Dict]:
        """Return matching project dicts ordered by created_at descending. limit=None means all."""
        ...

    def count_projects(self, query: ProjectQuery) -> int:
        """Number of projects matching query, ignoring pagination."""
        ...


class InterestSource(Protocol):
    def find_interests_by_project(self, project_id: str) -> List[Dict]:
        """Interest dicts for one project, newest first."""
        ...

    def find_interests_by_user(self, user_id: str) -> List[Dict]:
        """Interest dicts for one user, newest first."""
        ...


class UserSource(Protocol):
    def get_many(self, user_ids: List[str]) -> Dict[str, Dict]:
        """Map user_id -> user dict for the ids that exist."""
        ...
