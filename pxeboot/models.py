"""Server configuration record assigned to a network-booting host."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from .errors import RowMappingError

# Column order shared by every select against the server table
SERVER_COLUMNS = ("id", "gateway", "hostname", "ip", "netmask", "mac_address")
TEXT_COLUMNS = SERVER_COLUMNS[1:]


@dataclass(slots=True)
class ServerConfig:
    """Static network configuration for one host, keyed by MAC address."""

    gateway: str
    hostname: str
    ip: str
    netmask: str
    mac_address: str
    id: int = 0  # Assigned by the store on create

    @property
    def is_persisted(self) -> bool:
        return self.id != 0

    @classmethod
    def from_row(cls, row: Any) -> ServerConfig:
        """Create ServerConfig from a database row.

        Accepts PyDAL rows, mappings, or sequences in SERVER_COLUMNS order.

        Raises:
            RowMappingError: If the row is missing columns or holds wrong types
        """
        if hasattr(row, "as_dict"):
            row = row.as_dict()

        if isinstance(row, dict):
            try:
                values = [row[name] for name in SERVER_COLUMNS]
            except KeyError as e:
                raise RowMappingError(f"Server row is missing column {e}") from e
        else:
            try:
                values = list(row)
            except TypeError as e:
                raise RowMappingError(f"Unsupported server row type: {type(row).__name__}") from e
            if len(values) != len(SERVER_COLUMNS):
                raise RowMappingError(
                    f"Server row has {len(values)} columns, expected {len(SERVER_COLUMNS)}"
                )

        record_id, *texts = values
        # bool is an int subclass but never a valid key
        if isinstance(record_id, bool) or not isinstance(record_id, int):
            raise RowMappingError(f"Server id must be an integer, got {record_id!r}")

        for name, value in zip(TEXT_COLUMNS, texts):
            if not isinstance(value, str):
                raise RowMappingError(
                    f"Server column {name} must be text, got {type(value).__name__}"
                )

        gateway, hostname, ip, netmask, mac_address = texts
        return cls(
            id=int(record_id),
            gateway=gateway,
            hostname=hostname,
            ip=ip,
            netmask=netmask,
            mac_address=mac_address,
        )

    def with_id(self, record_id: int) -> ServerConfig:
        """Return a copy carrying the store-assigned id."""
        return replace(self, id=int(record_id))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "gateway": self.gateway,
            "hostname": self.hostname,
            "ip": self.ip,
            "netmask": self.netmask,
            "mac_address": self.mac_address,
        }
