"""
Server Configuration

Loads configuration from environment variables and provides defaults.
Supports loading from .env file using python-dotenv.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from matching.models.config import MatchingConfig

# Single .env at the project root
root_env = Path(__file__).resolve().parent.parent / ".env"
if root_env.exists():
    load_dotenv(root_env)

DATA_SOURCES = ("json", "firebase", "memory")


@dataclass
class ServerConfig:
    """Server configuration."""

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # Data source: "json" (files under data_dir) | "firebase" | "memory" (nothing persisted)
    data_source: str = "json"
    data_dir: Path = Path(__file__).parent.parent / "data"
    # When data_source=firebase: path to service account JSON and optional project id
    firebase_credentials_path: Optional[Path] = None
    firebase_project_id: Optional[str] = None

    # Optional JSON file overriding scorer weights and thresholds
    matching_config_path: Optional[Path] = None

    # Browse pagination
    default_page_size: int = 12
    max_page_size: int = 50

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Load configuration from environment variables."""
        base_dir = Path(__file__).parent.parent
        data_source = os.getenv("DATA_SOURCE", "").strip().lower() or "json"
        if data_source not in DATA_SOURCES:
            data_source = "json"

        def _path_env(key: str, default: Optional[Path] = None) -> Optional[Path]:
            v = os.getenv(key)
            if not v:
                return default
            p = Path(v)
            return p if p.is_absolute() else (base_dir / p).resolve()

        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            data_source=data_source,
            data_dir=_path_env("DATA_DIR", base_dir / "data"),
            firebase_credentials_path=_path_env("FIREBASE_CREDENTIALS_PATH") or _path_env("GOOGLE_APPLICATION_CREDENTIALS"),
            firebase_project_id=os.getenv("FIREBASE_PROJECT_ID") or None,
            matching_config_path=_path_env("MATCHING_CONFIG_PATH"),
            default_page_size=int(os.getenv("DEFAULT_PAGE_SIZE", "12")),
            max_page_size=int(os.getenv("MAX_PAGE_SIZE", "50")),
        )

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate the configuration.

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []

        if self.data_source == "firebase":
            if not self.firebase_credentials_path:
                errors.append("DATA_SOURCE=firebase requires FIREBASE_CREDENTIALS_PATH")
            elif not Path(self.firebase_credentials_path).is_file():
                errors.append(f"Firebase credentials file not found: {self.firebase_credentials_path}")

        if self.matching_config_path and not Path(self.matching_config_path).is_file():
            errors.append(f"Matching config not found: {self.matching_config_path}")

        if self.default_page_size < 1:
            errors.append(f"default_page_size must be positive, got {self.default_page_size}")
        if self.max_page_size < self.default_page_size:
            errors.append("max_page_size must be >= default_page_size")

        return len(errors) == 0, errors

    def ensure_directories(self):
        """Create required directories if they don't exist."""
        if self.data_source == "json":
            self.data_dir.mkdir(parents=True, exist_ok=True)

    def load_matching_config(self) -> MatchingConfig:
        """MatchingConfig from matching_config_path, or defaults when unset."""
        if not self.matching_config_path:
            return MatchingConfig()
        with open(self.matching_config_path) as f:
            return MatchingConfig.from_dict(json.load(f))


# Global config instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
        _config.ensure_directories()
    return _config


def reload_config() -> ServerConfig:
    """Reload configuration from environment."""
    global _config
    _config = None
    return get_config()
