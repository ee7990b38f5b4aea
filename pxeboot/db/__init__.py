"""
Database layer for the server store.

This module provides schema initialization and runtime connections:
- SQLAlchemy: Schema creation only
- PyDAL: All runtime reads and writes
- PostgreSQL in production, SQLite for local runs and tests
"""

from .database import (
    SERVER_TABLE,
    close_db,
    connect,
    define_tables,
    open_connection,
)
from .init_db import ServerModel, drop_tables, init_db_schema

__all__ = [
    # PyDAL runtime operations
    'SERVER_TABLE',
    'close_db',
    'connect',
    'define_tables',
    'open_connection',
    # SQLAlchemy schema initialization
    'ServerModel',
    'drop_tables',
    'init_db_schema',
]
