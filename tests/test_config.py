"""Server configuration tests."""

import json

import pytest
from pydantic import ValidationError

from matching.models.config import MatchingConfig
from server.config import ServerConfig
from server.services import JsonUserStore, Repositories
from server.state import AppState


@pytest.fixture
def clean_env(monkeypatch):
    for key in (
        "HOST",
        "PORT",
        "LOG_LEVEL",
        "DATA_SOURCE",
        "DATA_DIR",
        "FIREBASE_CREDENTIALS_PATH",
        "GOOGLE_APPLICATION_CREDENTIALS",
        "FIREBASE_PROJECT_ID",
        "MATCHING_CONFIG_PATH",
        "DEFAULT_PAGE_SIZE",
        "MAX_PAGE_SIZE",
    ):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


class TestFromEnv:
    def test_defaults(self, clean_env):
        config = ServerConfig.from_env()
        assert config.port == 8000
        assert config.data_source == "json"
        assert config.default_page_size == 12
        assert config.max_page_size == 50
        assert config.log_level == "INFO"

    def test_overrides(self, clean_env, tmp_path):
        clean_env.setenv("PORT", "9001")
        clean_env.setenv("DATA_SOURCE", "MEMORY")
        clean_env.setenv("DATA_DIR", str(tmp_path))
        clean_env.setenv("LOG_LEVEL", "debug")
        config = ServerConfig.from_env()
        assert config.port == 9001
        assert config.data_source == "memory"
        assert config.data_dir == tmp_path
        assert config.log_level == "DEBUG"

    def test_unknown_data_source_falls_back_to_json(self, clean_env):
        clean_env.setenv("DATA_SOURCE", "postgres")
        assert ServerConfig.from_env().data_source == "json"


class TestValidate:
    def test_firebase_needs_credentials(self):
        ok, errors = ServerConfig(data_source="firebase").validate()
        assert not ok
        assert any("FIREBASE_CREDENTIALS_PATH" in e for e in errors)

    def test_page_sizes(self):
        ok, errors = ServerConfig(default_page_size=20, max_page_size=10).validate()
        assert not ok
        assert errors == ["max_page_size must be >= default_page_size"]

    def test_valid(self):
        assert ServerConfig(data_source="memory").validate() == (True, [])


class TestMatchingConfigFile:
    def test_loaded_from_file(self, tmp_path):
        path = tmp_path / "matching.json"
        path.write_text(json.dumps({"recommendations": {"floor": 55}}))
        config = ServerConfig(data_source="memory", matching_config_path=path)
        assert config.load_matching_config().recommendation_floor == 55

    def test_defaults_without_file(self):
        assert ServerConfig().load_matching_config() == MatchingConfig()

    def test_invalid_weights_rejected(self, tmp_path):
        path = tmp_path / "matching.json"
        path.write_text(json.dumps({"weights": {"skills": 0.9}}))
        with pytest.raises(ValidationError):
            ServerConfig(matching_config_path=path).load_matching_config()

    def test_state_falls_back_to_defaults_on_bad_file(self, tmp_path):
        path = tmp_path / "matching.json"
        path.write_text("{broken")
        state = AppState(ServerConfig(data_source="memory", matching_config_path=path))
        assert state.matching_config == MatchingConfig()


class TestAppState:
    def test_memory_stores(self):
        state = AppState(ServerConfig(data_source="memory"))
        assert isinstance(state.repos.users, JsonUserStore)

    def test_json_stores_write_under_data_dir(self, tmp_path):
        state = AppState(ServerConfig(data_source="json", data_dir=tmp_path))
        state.repos.users.create("Ada", "ada@example.com")
        assert (tmp_path / "users.json").exists()

    def test_firebase_without_credentials_uses_json_files(self, tmp_path):
        state = AppState(ServerConfig(data_source="firebase", data_dir=tmp_path / "data"))
        assert isinstance(state.repos.users, JsonUserStore)

    def test_injected_repositories(self):
        repos = Repositories.in_memory()
        assert AppState(ServerConfig(data_source="memory"), repos=repos).repos is repos
