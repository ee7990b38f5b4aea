"""Server configuration repository.

Typed CRUD access to the ``server`` table, keyed by MAC address:
- Every call opens its own connection and checks it before issuing a statement
- Each call issues exactly one statement and closes the connection on exit
- Updates and deletes that match no rows succeed silently

The repository holds no mutable state, so one instance may be shared
across threads.
"""

from __future__ import annotations

from typing import Any, Callable

import structlog
from pydal import DAL

from .config import DatabaseConfig
from .db.database import SERVER_TABLE, open_connection
from .errors import DuplicateServerError, ServerNotFoundError, StatementError
from .models import SERVER_COLUMNS, ServerConfig

logger = structlog.get_logger()


UNIQUE_VIOLATION = "23505"  # PostgreSQL SQLSTATE


def _is_unique_violation(db: DAL, exc: Exception) -> bool:
    integrity_error = getattr(db._adapter.driver, "IntegrityError", None)
    if not (isinstance(integrity_error, type) and isinstance(exc, integrity_error)):
        return False
    # NOT NULL and other constraint failures share the IntegrityError class
    if getattr(exc, "pgcode", None) is not None:
        return exc.pgcode == UNIQUE_VIOLATION
    return "unique constraint" in str(exc).lower()


def _rollback(db: DAL) -> None:
    try:
        db.rollback()
    except Exception as e:
        logger.warning("rollback_failed", error=str(e))


class ServerRepository:
    """Store-backed CRUD operations for ServerConfig records."""

    def __init__(self, config: DatabaseConfig):
        """Initialize repository with connection parameters.

        Args:
            config: Store connection parameters, never mutated here
        """
        self.config = config

    @classmethod
    def from_env(cls) -> ServerRepository:
        """Create a repository from DB_* environment variables."""
        return cls(DatabaseConfig.from_env())

    def _run(
        self,
        db: DAL,
        operation: str,
        statement: Callable[[], Any],
        commit: bool = False,
        inserts: bool = False,
        **context,
    ) -> Any:
        """Run a single statement, translating driver failures.

        Raises:
            DuplicateServerError: If an insert violates the MAC address constraint
            StatementError: If the statement fails for any other reason
        """
        try:
            result = statement()
            if commit:
                db.commit()
            return result
        except Exception as e:
            _rollback(db)
            logger.error("statement_failed", operation=operation, error=str(e), **context)
            if inserts and _is_unique_violation(db, e):
                raise DuplicateServerError(context.get("mac_address", "")) from e
            raise StatementError(f"{operation} failed: {e}") from e

    @staticmethod
    def _columns(db: DAL) -> list:
        table = db[SERVER_TABLE]
        return [table[name] for name in SERVER_COLUMNS]

    def list_servers(self) -> list[ServerConfig]:
        """Retrieve all server records.

        Returns:
            List of ServerConfig, empty if the table has no rows

        Raises:
            StoreConnectionError: If the store is unreachable
            StatementError: If the select fails
            RowMappingError: If a row has an unexpected shape
        """
        with open_connection(self.config) as db:
            table = db[SERVER_TABLE]
            rows = self._run(
                db,
                "list_servers",
                lambda: db(table).select(*self._columns(db), orderby=table.id),
            )
            servers = [ServerConfig.from_row(row) for row in rows]

        logger.debug("servers_listed", count=len(servers))
        return servers

    def find_server(self, mac_address: str) -> ServerConfig:
        """Retrieve the server registered for a MAC address.

        Raises:
            ServerNotFoundError: If no server has this MAC address
            StoreConnectionError: If the store is unreachable
            StatementError: If the select fails
            RowMappingError: If the row has an unexpected shape
        """
        with open_connection(self.config) as db:
            table = db[SERVER_TABLE]
            row = self._run(
                db,
                "find_server",
                lambda: db(table.mac_address == mac_address).select(
                    *self._columns(db), limitby=(0, 1)
                ).first(),
                mac_address=mac_address,
            )
            if row is None:
                logger.debug("server_not_found", mac_address=mac_address)
                raise ServerNotFoundError(mac_address)
            return ServerConfig.from_row(row)

    def delete_server(self, mac_address: str) -> None:
        """Delete the server registered for a MAC address.

        Deleting an unknown MAC address is not an error.
        """
        with open_connection(self.config) as db:
            table = db[SERVER_TABLE]
            deleted = self._run(
                db,
                "delete_server",
                lambda: db(table.mac_address == mac_address).delete(),
                commit=True,
                mac_address=mac_address,
            )

        logger.info("server_deleted", mac_address=mac_address, rows=deleted)

    def create_server(self, server: ServerConfig) -> ServerConfig:
        """Persist a new server record.

        The incoming id is ignored; the store assigns one and stamps created_on.

        Args:
            server: Record to create

        Returns:
            Copy of the record carrying the store-assigned id

        Raises:
            DuplicateServerError: If the MAC address is already registered
            StoreConnectionError: If the store is unreachable
            StatementError: If the insert fails
        """
        with open_connection(self.config) as db:
            table = db[SERVER_TABLE]
            record_id = self._run(
                db,
                "create_server",
                lambda: table.insert(
                    gateway=server.gateway,
                    hostname=server.hostname,
                    ip=server.ip,
                    netmask=server.netmask,
                    mac_address=server.mac_address,
                ),
                commit=True,
                inserts=True,
                mac_address=server.mac_address,
            )

        created = server.with_id(record_id)
        logger.info(
            "server_created",
            id=created.id,
            mac_address=created.mac_address,
            hostname=created.hostname,
        )
        return created

    def update_server(self, server: ServerConfig) -> None:
        """Update gateway, hostname, ip and netmask for the server's MAC address.

        The id on the record is ignored. Updating an unknown MAC address is not an error.
        """
        with open_connection(self.config) as db:
            table = db[SERVER_TABLE]
            updated = self._run(
                db,
                "update_server",
                lambda: db(table.mac_address == server.mac_address).update(
                    gateway=server.gateway,
                    hostname=server.hostname,
                    ip=server.ip,
                    netmask=server.netmask,
                ),
                commit=True,
                mac_address=server.mac_address,
            )

        logger.info("server_updated", mac_address=server.mac_address, rows=updated)

    def delete_all(self) -> None:
        """Delete every server record."""
        with open_connection(self.config) as db:
            table = db[SERVER_TABLE]
            deleted = self._run(db, "delete_all", lambda: db(table).delete(), commit=True)

        logger.warning("servers_cleared", rows=deleted)
