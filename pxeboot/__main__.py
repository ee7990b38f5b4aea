#!/usr/bin/env python3
"""Server store operational entry point.

Usage:
    python -m pxeboot check [--retries N] [--delay SECONDS]
    python -m pxeboot init-schema
    python -m pxeboot drop-schema --yes
"""

import argparse
import sys
import time
from typing import List, Optional

import structlog

from .config import DatabaseConfig
from .db import close_db, connect, drop_tables, init_db_schema
from .errors import StoreConnectionError
from .logs import configure_logging

logger = structlog.get_logger()


def wait_for_database(config: DatabaseConfig, max_retries: int = 30, retry_delay: float = 2) -> bool:
    """Wait for the store to accept connections."""
    logger.info("waiting_for_database", db_type=config.db_type, host=config.host, port=config.port)

    for attempt in range(1, max_retries + 1):
        try:
            db = connect(config)
        except StoreConnectionError as e:
            logger.warning(
                "database_connection_attempt_failed",
                attempt=attempt,
                max_retries=max_retries,
                error=str(e),
            )
            if attempt < max_retries:
                time.sleep(retry_delay)
            continue

        close_db(db)
        logger.info("database_connection_successful", attempts=attempt)
        return True

    return False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pxeboot-db",
        description="PXE boot server store maintenance",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="Wait until the store accepts connections")
    check.add_argument("--retries", type=int, default=30)
    check.add_argument("--delay", type=float, default=2.0)

    init = subparsers.add_parser("init-schema", help="Create the server table if it is missing")
    init.add_argument("--retries", type=int, default=30)
    init.add_argument("--delay", type=float, default=2.0)

    drop = subparsers.add_parser("drop-schema", help="Drop the server table")
    drop.add_argument("--yes", action="store_true", help="Confirm dropping all server records")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    config = DatabaseConfig.from_env()
    configure_logging(config.log_level)

    if args.command == "drop-schema":
        if not args.yes:
            logger.error("drop_schema_not_confirmed")
            return 1
        return 0 if drop_tables(config) else 1

    if not wait_for_database(config, max_retries=args.retries, retry_delay=args.delay):
        logger.error("database_unavailable", retries=args.retries)
        return 1

    if args.command == "init-schema":
        return 0 if init_db_schema(config) else 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
