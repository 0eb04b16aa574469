"""Application settings loaded from environment variables and .env."""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from threading import Lock
from typing import Optional

logger = logging.getLogger(__name__)

STORE_BACKENDS = ("json", "firestore")

_ENV_LOADED = False
_ENV_LOCK = Lock()


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the registration app."""

    admin_password: str = ""
    event_title: str = "EKATHRA BATCH EVENT 25"
    event_date_long: str = "4 November 2025"
    event_date: str = "4 Nov 2025"
    event_venue: str = "Hyatt Regency"
    event_footer: str = "CREATED BY RASHIN"
    logo_path: Optional[str] = "resource/ekathra-logo.jpg"
    record_store: str = "json"
    data_file: str = "data/registrations.json"
    firestore_collection: str = "people"
    firebase_service_account_json: Optional[str] = None
    firebase_credentials_file: Optional[str] = None
    store_timeout: float = 10.0
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate settings after initialization."""
        if self.record_store not in STORE_BACKENDS:
            raise ValueError(
                f"RECORD_STORE must be one of {list(STORE_BACKENDS)}, got: {self.record_store}"
            )

        if self.store_timeout <= 0:
            raise ValueError("STORE_TIMEOUT must be positive")


def load_env_file(env_path: Path = Path(".env")) -> None:
    """
    Load KEY=VALUE pairs from a .env file into os.environ.

    Runs once per process. Variables already present in the environment
    are never overwritten.
    """
    global _ENV_LOADED

    if _ENV_LOADED:
        return

    with _ENV_LOCK:
        if _ENV_LOADED:
            return

        if env_path.exists():
            for raw_line in env_path.read_text(encoding="utf-8").splitlines():
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue

                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip().strip('"\'')

                if key and key not in os.environ:
                    os.environ[key] = value

        _ENV_LOADED = True


def _optional(name: str) -> Optional[str]:
    value = os.getenv(name, "").strip()
    return value or None


def get_settings() -> Settings:
    """
    Build settings from the environment.

    Returns:
        Settings instance

    Raises:
        ValueError: If STORE_TIMEOUT is not a number or RECORD_STORE is unknown
    """
    load_env_file()

    defaults = Settings()

    raw_timeout = os.getenv("STORE_TIMEOUT", str(defaults.store_timeout))
    try:
        store_timeout = float(raw_timeout)
    except ValueError as e:
        raise ValueError(f"STORE_TIMEOUT must be a number: {raw_timeout}") from e

    settings = Settings(
        admin_password=os.getenv("ADMIN_PASSWORD", ""),
        event_title=os.getenv("EVENT_TITLE", defaults.event_title),
        event_date_long=os.getenv("EVENT_DATE_LONG", defaults.event_date_long),
        event_date=os.getenv("EVENT_DATE", defaults.event_date),
        event_venue=os.getenv("EVENT_VENUE", defaults.event_venue),
        event_footer=os.getenv("EVENT_FOOTER", defaults.event_footer),
        logo_path=os.getenv("LOGO_PATH", defaults.logo_path) or None,
        record_store=os.getenv("RECORD_STORE", defaults.record_store).strip().lower(),
        data_file=os.getenv("DATA_FILE", defaults.data_file),
        firestore_collection=os.getenv("FIRESTORE_COLLECTION", defaults.firestore_collection),
        firebase_service_account_json=_optional("FIREBASE_SERVICE_ACCOUNT_JSON"),
        firebase_credentials_file=_optional("FIREBASE_CREDENTIALS_FILE"),
        store_timeout=store_timeout,
        log_level=os.getenv("LOG_LEVEL", defaults.log_level).upper(),
    )

    if not settings.admin_password:
        logger.warning("ADMIN_PASSWORD is not set; admin login is disabled")

    return settings
