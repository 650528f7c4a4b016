"""
Service configuration loaded from environment variables.

Settings are resolved once at startup and passed to every component
that needs them. The CLI builds on top of the environment values and
replaces individual fields with whatever flags were given.
"""

import os
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import load_dotenv

STORAGE_BACKENDS = ("memory", "sql")


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


def _env_optional_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    return int(value)


@dataclass(frozen=True)
class Settings:
    """Immutable service settings."""

    host: str = "0.0.0.0"
    port: int = 3000
    cache_dir: str = "./cache"
    storage: str = "memory"

    # Relational storage
    db_host: str = "backend_db"
    db_user: str = "root"
    db_password: str = "rootpassword"
    db_name: str = "inventorydb"
    database_url: Optional[str] = None
    db_retry_interval: float = 2.0
    db_retry_attempts: Optional[int] = None  # None retries forever

    debug: bool = False
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.storage not in STORAGE_BACKENDS:
            raise ValueError(
                f"Unknown storage backend '{self.storage}', "
                f"expected one of {', '.join(STORAGE_BACKENDS)}"
            )

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment (and a .env file)."""
        load_dotenv()

        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3000")),
            cache_dir=os.getenv("CACHE_DIR", "./cache"),
            storage=os.getenv("STORAGE", "memory").lower(),
            db_host=os.getenv("DB_HOST", "backend_db"),
            db_user=os.getenv("DB_USER", "root"),
            db_password=os.getenv("DB_PASSWORD", "rootpassword"),
            db_name=os.getenv("DB_NAME", "inventorydb"),
            database_url=os.getenv("DATABASE_URL") or None,
            db_retry_interval=float(os.getenv("DB_RETRY_INTERVAL", "2")),
            db_retry_attempts=_env_optional_int("DB_RETRY_ATTEMPTS"),
            debug=_env_bool("DEBUG"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def with_overrides(self, **overrides) -> "Settings":
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)

    @property
    def sqlalchemy_url(self) -> str:
        """Connection URL for the relational store."""
        if self.database_url:
            return self.database_url
        return (
            f"mysql+pymysql://{self.db_user}:{self.db_password}"
            f"@{self.db_host}/{self.db_name}"
        )
