"""
Repositories: the four stores the actions and retrievers work against.

Built from config by server.state; tests use Repositories.in_memory().
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .interest_store import FirestoreInterestStore, InterestStore, JsonInterestStore
from .notification_store import FirestoreNotificationStore, JsonNotificationStore, NotificationStore
from .project_store import FirestoreProjectStore, JsonProjectStore, ProjectStore
from .user_store import FirestoreUserStore, JsonUserStore, UserStore


@dataclass
class Repositories:
    users: UserStore
    projects: ProjectStore
    interests: InterestStore
    notifications: NotificationStore

    @classmethod
    def in_memory(cls) -> "Repositories":
        """Nothing persisted; used by tests and DATA_SOURCE=memory."""
        return cls(
            users=JsonUserStore(),
            projects=JsonProjectStore(),
            interests=JsonInterestStore(),
            notifications=JsonNotificationStore(),
        )

    @classmethod
    def json_files(cls, data_dir: Union[Path, str]) -> "Repositories":
        """One JSON file per collection under data_dir."""
        data_dir = Path(data_dir)
        return cls(
            users=JsonUserStore(data_dir / "users.json"),
            projects=JsonProjectStore(data_dir / "projects.json"),
            interests=JsonInterestStore(data_dir / "interests.json"),
            notifications=JsonNotificationStore(data_dir / "notifications.json"),
        )

    @classmethod
    def firestore(
        cls,
        project_id: Optional[str] = None,
        credentials_path: Optional[Union[Path, str]] = None,
    ) -> "Repositories":
        users = FirestoreUserStore(project_id=project_id, credentials_path=credentials_path)
        client = users._db
        return cls(
            users=users,
            projects=FirestoreProjectStore(client=client),
            interests=FirestoreInterestStore(client=client),
            notifications=FirestoreNotificationStore(client=client),
        )
