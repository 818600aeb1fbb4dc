"""Application state: config, stores, and scorer configuration."""

from pathlib import Path
from typing import Optional

from matching.models.config import MatchingConfig

from .config import ServerConfig, get_config
from .services import Repositories


class AppState:
    """Global application state."""

    def __init__(
        self,
        config: ServerConfig,
        repos: Optional[Repositories] = None,
        matching_config: Optional[MatchingConfig] = None,
    ):
        self.config = config
        self.repos = repos if repos is not None else self._create_repositories(config)
        self.matching_config = matching_config or self._load_matching_config(config)

    def _create_repositories(self, config: ServerConfig) -> Repositories:
        """Create stores from config (Firestore, JSON files, or memory)."""
        if config.data_source == "firebase":
            cred_path = Path(config.firebase_credentials_path) if config.firebase_credentials_path else None
            if cred_path is None or not cred_path.is_file():
                print(
                    f"[startup] Firestore stores skipped: credentials file not found ({cred_path}); using JSON files in {config.data_dir}"
                )
            else:
                try:
                    repos = Repositories.firestore(
                        project_id=config.firebase_project_id,
                        credentials_path=cred_path,
                    )
                    print("[startup] Stores: Firestore")
                    return repos
                except Exception as e:
                    print(f"[startup] Firestore init failed: {e}, using JSON files in {config.data_dir}")
            config.data_dir.mkdir(parents=True, exist_ok=True)
            return Repositories.json_files(config.data_dir)
        if config.data_source == "memory":
            print("[startup] Stores: in-memory (nothing persisted)")
            return Repositories.in_memory()
        print(f"[startup] Stores: JSON files in {config.data_dir}")
        return Repositories.json_files(config.data_dir)

    def _load_matching_config(self, config: ServerConfig) -> MatchingConfig:
        try:
            matching_config = config.load_matching_config()
        except (OSError, ValueError) as e:
            print(f"[startup] WARNING: Failed to load matching config {config.matching_config_path}: {e}; using defaults")
            return MatchingConfig()
        if config.matching_config_path:
            print(f"[startup] Matching config: {config.matching_config_path}")
        return matching_config


_state: Optional[AppState] = None


def get_state() -> AppState:
    global _state
    if _state is None:
        config = get_config()
        _state = AppState(config)
    return _state


def set_state(state: Optional[AppState]) -> None:
    """Replace the global state (tests pass an in-memory AppState; None resets)."""
    global _state
    _state = state
