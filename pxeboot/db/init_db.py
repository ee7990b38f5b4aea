"""
Database schema initialization using SQLAlchemy.

USAGE: SQLAlchemy is used ONLY for initial schema creation.
All runtime operations use PyDAL (see database.py).

create_all() only creates missing tables; an existing server table
is left exactly as it is.
"""

import os
from typing import Optional

import structlog
from sqlalchemy import (
    Column,
    DateTime,
    Integer,
    Text,
    create_engine,
    func,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from ..config import DatabaseConfig

logger = structlog.get_logger()

Base = declarative_base()


class ServerModel(Base):
    """Server configuration schema for SQLAlchemy initialization."""
    __tablename__ = 'server'

    id = Column(Integer, primary_key=True, autoincrement=True)
    gateway = Column(Text)
    hostname = Column(Text)
    ip = Column(Text)
    netmask = Column(Text)
    mac_address = Column(Text, nullable=False, unique=True)
    created_on = Column(DateTime, server_default=func.current_timestamp())


def create_schema_engine(config: DatabaseConfig, echo: bool = False) -> Engine:
    """Create a non-pooled engine for one-off schema work."""
    if config.is_sqlite and not os.path.isabs(config.database_name):
        os.makedirs(os.path.dirname(config.sqlite_path), exist_ok=True)
    return create_engine(
        config.get_sqlalchemy_url(),
        echo=echo,
        poolclass=NullPool,
        connect_args={} if config.is_sqlite else {'connect_timeout': config.connect_timeout},
    )


def init_db_schema(config: Optional[DatabaseConfig] = None, echo: bool = False) -> bool:
    """
    Initialize database schema using SQLAlchemy.

    Args:
        config: Store connection parameters (defaults to DatabaseConfig.from_env())
        echo: Enable SQLAlchemy query logging

    Returns:
        True if schema initialized successfully, False otherwise
    """
    config = config or DatabaseConfig.from_env()
    engine = None
    try:
        logger.info("schema_init_started", db_type=config.db_type)

        engine = create_schema_engine(config, echo=echo)
        Base.metadata.create_all(engine)

        logger.info("schema_initialized", db_type=config.db_type)
        return True

    except Exception as e:
        logger.error("schema_init_failed", error=str(e), exc_info=True)
        return False
    finally:
        if engine is not None:
            engine.dispose()


def drop_tables(config: Optional[DatabaseConfig] = None) -> bool:
    """
    Drop the server table (DANGEROUS - use only for testing).

    Args:
        config: Store connection parameters

    Returns:
        True if tables dropped successfully, False otherwise
    """
    config = config or DatabaseConfig.from_env()
    engine = None
    try:
        logger.warning("schema_drop_started", db_type=config.db_type)

        engine = create_schema_engine(config)
        Base.metadata.drop_all(engine)

        logger.info("schema_dropped", db_type=config.db_type)
        return True

    except Exception as e:
        logger.error("schema_drop_failed", error=str(e), exc_info=True)
        return False
    finally:
        if engine is not None:
            engine.dispose()
