"""
Configuration management for the server store.

Loads database connection parameters from environment variables with validation.
"""

import os
from dataclasses import dataclass
from urllib.parse import quote

from decouple import config

SUPPORTED_DB_TYPES = ["postgres", "postgresql", "sqlite"]


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    """Store connection parameters. Shared read-only for the process lifetime."""

    host: str = "localhost"
    port: int = 5432
    username: str = "pxeboot"
    password: str = ""
    database_name: str = "pxeboot"

    db_type: str = "postgres"  # postgres, postgresql, sqlite
    sslmode: str = "disable"
    connect_timeout: int = 10  # seconds
    pool_size: int = 0  # 0 opens and closes a real connection per call

    # PyDAL work folder; a relative sqlite database_name resolves against it
    folder: str = "databases"

    log_level: str = "INFO"

    def __post_init__(self):
        if self.db_type.lower() not in SUPPORTED_DB_TYPES:
            raise ValueError(
                f"Unsupported DB_TYPE: {self.db_type}. Supported: postgres, sqlite"
            )
        if not 0 < self.port < 65536:
            raise ValueError(f"Invalid DB_PORT: {self.port}")
        if self.pool_size < 0:
            raise ValueError(f"Invalid DB_POOL_SIZE: {self.pool_size}")

    @classmethod
    def from_env(cls) -> "DatabaseConfig":
        """Load configuration from environment variables."""
        return cls(
            host=config("DB_HOST", default="localhost"),
            port=config("DB_PORT", default=5432, cast=int),
            username=config("DB_USER", default="pxeboot"),
            password=config("DB_PASS", default=""),
            database_name=config("DB_NAME", default="pxeboot"),
            db_type=config("DB_TYPE", default="postgres"),
            sslmode=config("DB_SSLMODE", default="disable"),
            connect_timeout=config("DB_CONNECT_TIMEOUT", default=10, cast=int),
            pool_size=config("DB_POOL_SIZE", default=0, cast=int),
            folder=config("PYDAL_FOLDER", default="databases"),
            log_level=config("LOG_LEVEL", default="INFO"),
        )

    @property
    def is_sqlite(self) -> bool:
        return self.db_type.lower() == "sqlite"

    @property
    def sqlite_path(self) -> str:
        """Absolute SQLite file path, shared by the PyDAL and SQLAlchemy layers."""
        path = self.database_name
        if not os.path.isabs(path):
            path = os.path.join(self.folder, path)
        return os.path.abspath(path)

    def _credentials(self) -> str:
        user = quote(self.username, safe="")
        if self.password:
            return f"{user}:{quote(self.password, safe='')}"
        return user

    def get_pydal_uri(self) -> str:
        """Build the PyDAL connection string for runtime operations."""
        if self.is_sqlite:
            return f"sqlite://{self.sqlite_path}"
        return (
            f"postgres://{self._credentials()}@{self.host}:{self.port}/{self.database_name}"
            f"?sslmode={self.sslmode}"
        )

    def get_sqlalchemy_url(self) -> str:
        """Build the SQLAlchemy connection string for schema creation."""
        if self.is_sqlite:
            return f"sqlite:///{self.sqlite_path}"
        return (
            f"postgresql://{self._credentials()}@{self.host}:{self.port}/{self.database_name}"
            f"?sslmode={self.sslmode}"
        )

    def __repr__(self) -> str:
        return (
            f"DatabaseConfig(db_type={self.db_type!r}, host={self.host!r}, port={self.port}, "
            f"username={self.username!r}, password='***', database_name={self.database_name!r})"
        )
