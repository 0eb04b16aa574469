"""Unit tests for settings loading."""
import os

import pytest

from src.utils import config
from src.utils.config import Settings, get_settings, load_env_file

CONFIG_VARS = [
    "ADMIN_PASSWORD",
    "EVENT_TITLE",
    "EVENT_DATE_LONG",
    "EVENT_DATE",
    "EVENT_VENUE",
    "EVENT_FOOTER",
    "LOGO_PATH",
    "RECORD_STORE",
    "DATA_FILE",
    "FIRESTORE_COLLECTION",
    "FIREBASE_SERVICE_ACCOUNT_JSON",
    "FIREBASE_CREDENTIALS_FILE",
    "STORE_TIMEOUT",
    "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Clear config variables and skip .env loading."""
    for name in CONFIG_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config, "_ENV_LOADED", True)


class TestGetSettings:
    """Test get_settings function."""

    def test_defaults(self, clean_env):
        """Defaults describe the EKATHRA event with a JSON store."""
        settings = get_settings()

        assert settings.admin_password == ""
        assert settings.event_title == "EKATHRA BATCH EVENT 25"
        assert settings.event_date == "4 Nov 2025"
        assert settings.event_date_long == "4 November 2025"
        assert settings.event_venue == "Hyatt Regency"
        assert settings.record_store == "json"
        assert settings.firestore_collection == "people"
        assert settings.store_timeout == 10.0

    def test_reads_environment(self, clean_env, monkeypatch):
        monkeypatch.setenv("ADMIN_PASSWORD", "secret")
        monkeypatch.setenv("RECORD_STORE", "Firestore")
        monkeypatch.setenv("STORE_TIMEOUT", "2.5")
        monkeypatch.setenv("EVENT_VENUE", "Town Hall")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = get_settings()

        assert settings.admin_password == "secret"
        assert settings.record_store == "firestore"
        assert settings.store_timeout == 2.5
        assert settings.event_venue == "Town Hall"
        assert settings.log_level == "DEBUG"

    def test_empty_logo_path_disables_logo(self, clean_env, monkeypatch):
        monkeypatch.setenv("LOGO_PATH", "")

        assert get_settings().logo_path is None

    def test_invalid_timeout_raises_error(self, clean_env, monkeypatch):
        monkeypatch.setenv("STORE_TIMEOUT", "soon")

        with pytest.raises(ValueError, match="STORE_TIMEOUT must be a number"):
            get_settings()

    def test_unknown_store_raises_error(self, clean_env, monkeypatch):
        monkeypatch.setenv("RECORD_STORE", "postgres")

        with pytest.raises(ValueError, match="RECORD_STORE must be one of"):
            get_settings()


class TestSettings:
    """Test Settings validation."""

    def test_non_positive_timeout_rejected(self):
        with pytest.raises(ValueError, match="STORE_TIMEOUT must be positive"):
            Settings(store_timeout=0)


class TestLoadEnvFile:
    """Test load_env_file function."""

    def test_loads_values_without_overriding(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text(
            "# comment\n"
            "ADMIN_PASSWORD='from-file'\n"
            "EVENT_VENUE=\"Hall A\"\n"
            "not a pair\n",
            encoding="utf-8",
        )
        monkeypatch.setattr(config, "_ENV_LOADED", False)
        monkeypatch.setenv("ADMIN_PASSWORD", "placeholder")
        monkeypatch.delenv("ADMIN_PASSWORD")
        monkeypatch.setenv("EVENT_VENUE", "Existing")

        load_env_file(env_file)

        assert os.environ["ADMIN_PASSWORD"] == "from-file"
        assert os.environ["EVENT_VENUE"] == "Existing"

    def test_loads_only_once(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("EVENT_FOOTER=first\n", encoding="utf-8")
        monkeypatch.setattr(config, "_ENV_LOADED", False)
        monkeypatch.setenv("EVENT_FOOTER", "placeholder")
        monkeypatch.delenv("EVENT_FOOTER")

        load_env_file(env_file)
        monkeypatch.delenv("EVENT_FOOTER")
        load_env_file(env_file)

        assert "EVENT_FOOTER" not in os.environ
