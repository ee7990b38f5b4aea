"""Exceptions raised by the server configuration store."""

from __future__ import annotations


class RepositoryError(Exception):
    """Base exception for server store operations."""

    pass


class StoreConnectionError(RepositoryError):
    """Raised when a store connection cannot be opened or fails its liveness check."""

    pass


class StatementError(RepositoryError):
    """Raised when a query or statement fails in the store."""

    pass


class DuplicateServerError(StatementError):
    """Raised when the store rejects an insert on the MAC address constraint."""

    def __init__(self, mac_address: str):
        self.mac_address = mac_address
        super().__init__(f"Server already exists for MAC address {mac_address}")


class RowMappingError(RepositoryError):
    """Raised when a stored row does not match the server record layout."""

    pass


class ServerNotFoundError(RepositoryError, LookupError):
    """Raised when no server matches the requested MAC address."""

    def __init__(self, mac_address: str):
        self.mac_address = mac_address
        super().__init__(f"No server found for MAC address {mac_address}")
