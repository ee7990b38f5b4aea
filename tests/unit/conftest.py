"""Pytest fixtures for server store unit tests.

Provides shared fixtures for testing:
- SQLite file store with the server schema created through SQLAlchemy
- Repository bound to that store
- Factory for ServerConfig records
"""

import sqlite3

import pytest

from pxeboot.config import DatabaseConfig
from pxeboot.db import init_db_schema
from pxeboot.models import ServerConfig
from pxeboot.repository import ServerRepository


@pytest.fixture(scope="function")
def db_config(tmp_path):
    """Provide a SQLite store configuration backed by a temporary file.

    A file is required because every repository call opens a fresh connection.
    """
    return DatabaseConfig(
        db_type="sqlite",
        database_name=str(tmp_path / "pxeboot_test.db"),
        folder=str(tmp_path),
        connect_timeout=10,
    )


@pytest.fixture(scope="function")
def db_schema(db_config):
    """Create the server table."""
    assert init_db_schema(db_config) is True
    return db_config


@pytest.fixture(scope="function")
def repository(db_schema):
    """Provide a repository against an empty server table."""
    return ServerRepository(db_schema)


@pytest.fixture(scope="function")
def raw_conn(db_schema):
    """Direct sqlite3 connection for arranging rows the repository would never write."""
    conn = sqlite3.connect(db_schema.database_name)
    yield conn
    conn.close()


@pytest.fixture(scope="function")
def make_server():
    """Factory for ServerConfig records with unique MAC addresses."""

    def _make(index: int = 1, **overrides) -> ServerConfig:
        fields = {
            "gateway": "10.0.0.1",
            "hostname": f"node{index}",
            "ip": f"10.0.0.{index + 10}",
            "netmask": "255.255.255.0",
            "mac_address": f"00:1a:2b:3c:4d:{index:02x}",
        }
        fields.update(overrides)
        return ServerConfig(**fields)

    return _make
