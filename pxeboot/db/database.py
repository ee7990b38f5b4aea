"""
PyDAL store access for runtime operations.

USAGE: PyDAL handles ALL runtime reads and writes against the server table.
SQLAlchemy is only used for initial schema creation (see init_db.py).

Connection model:
- One DAL instance per call, never shared between threads
- Liveness is checked with a round-trip before any statement runs
- The connection is closed (or returned to the DAL pool) on every exit path
"""

from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Iterator

import structlog
from pydal import DAL, Field

from ..config import DatabaseConfig
from ..errors import StoreConnectionError

logger = structlog.get_logger()

SERVER_TABLE = "server"


def define_tables(db: DAL) -> None:
    """
    Define the PyDAL schema for the server table.

    The table is owned by the store, so migrations stay disabled here.

    Args:
        db: PyDAL database instance
    """
    db.define_table(
        SERVER_TABLE,
        Field("gateway", "text"),
        Field("hostname", "text"),
        Field("ip", "text"),
        Field("netmask", "text"),
        Field("mac_address", "text", notnull=True, unique=True),
        Field("created_on", "datetime", default=datetime.utcnow),
        migrate=False,
    )


def _driver_args(config: DatabaseConfig) -> Dict[str, Any]:
    if config.is_sqlite:
        return {"timeout": config.connect_timeout}
    return {"connect_timeout": config.connect_timeout}


def connect(config: DatabaseConfig) -> DAL:
    """
    Open a DAL connection and verify it with a liveness round-trip.

    Args:
        config: Store connection parameters

    Returns:
        Connected PyDAL DAL instance

    Raises:
        StoreConnectionError: If the connection cannot be opened or fails the check
    """
    try:
        db = DAL(
            config.get_pydal_uri(),
            pool_size=config.pool_size,
            folder=config.folder,
            migrate=False,
            migrate_enabled=False,
            decode_credentials=True,
            driver_args=_driver_args(config),
            attempts=1,
        )
    except Exception as e:
        logger.error(
            "store_connection_failed",
            db_type=config.db_type,
            host=config.host,
            port=config.port,
            database=config.database_name,
            error=str(e),
        )
        raise StoreConnectionError(
            f"Unable to connect to {config.db_type} store at {config.host}:{config.port}: {e}"
        ) from e

    try:
        db.executesql("SELECT 1")
    except Exception as e:
        logger.error("store_liveness_check_failed", db_type=config.db_type, error=str(e))
        close_db(db)
        raise StoreConnectionError(f"Store connection failed liveness check: {e}") from e

    return db


def close_db(db: DAL) -> None:
    """
    Close a DAL connection.

    Errors while closing are logged, not raised.
    """
    try:
        db.close()
        logger.debug("store_connection_closed")
    except Exception as e:
        logger.error("store_connection_close_failed", error=str(e), exc_info=True)


@contextmanager
def open_connection(config: DatabaseConfig) -> Iterator[DAL]:
    """
    Context manager for a per-call store connection.

    Usage:
        with open_connection(config) as db:
            rows = db(db.server).select()
    """
    db = connect(config)
    try:
        define_tables(db)
        yield db
    finally:
        close_db(db)
