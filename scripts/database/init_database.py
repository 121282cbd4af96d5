#!/usr/bin/env python3
"""
Manually initialize the PostgreSQL schema for the URL shortener.

Runs the same startup check as the server (bounded retries, then
CREATE TABLE IF NOT EXISTS) and exits. Connection settings come from
the DB_* environment variables or .env.

Usage:
    python init_database.py [-v] [--attempts N]
"""

import argparse
import asyncio
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from config import load_config
from ureduce.database.postgres import PostgresShortLinkStore
from ureduce.errors import StartupError
from ureduce.common.logging_config import setup_logging


async def main() -> int:
    parser = argparse.ArgumentParser(description="Initialize URL shortener tables")
    parser.add_argument(
        "--attempts",
        type=int,
        default=None,
        help="Connection attempts before giving up (default: CONNECT_MAX_ATTEMPTS)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    args = parser.parse_args()

    config = load_config()
    if args.attempts is not None:
        config.connect_max_attempts = args.attempts

    logger = setup_logging(level="DEBUG" if args.verbose else "INFO")

    logger.info(f"Connecting to {config.dsn}...")
    store = PostgresShortLinkStore.from_config(config, logger=logger)

    try:
        await store.connect()
    except StartupError as e:
        logger.error(f"Error initializing tables: {e}")
        return 1

    await store.close()
    logger.info("Tables initialized successfully")
    return 0


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
