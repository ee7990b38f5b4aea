"""
PXE Boot Server Store

Persists the static network configuration (gateway, hostname, IP,
netmask) assigned to hosts before they network boot, keyed by the
host's MAC address.
"""

from .config import DatabaseConfig
from .errors import (
    DuplicateServerError,
    RepositoryError,
    RowMappingError,
    ServerNotFoundError,
    StatementError,
    StoreConnectionError,
)
from .models import ServerConfig
from .repository import ServerRepository

__version__ = "1.0.0"
__author__ = "Penguin Tech Inc"

__all__ = [
    'DatabaseConfig',
    'DuplicateServerError',
    'RepositoryError',
    'RowMappingError',
    'ServerConfig',
    'ServerNotFoundError',
    'ServerRepository',
    'StatementError',
    'StoreConnectionError',
]
