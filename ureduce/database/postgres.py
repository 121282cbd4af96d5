"""PostgreSQL implementation for URL shortener storage."""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

import asyncpg

from ..errors import StartupError, StorageError
from .base import ShortLinkStoreBase
from .models import ShortLink


# Errors that mean "database not reachable yet" during startup
CONNECT_ERRORS = (OSError, asyncio.TimeoutError, asyncpg.PostgresError, asyncpg.InterfaceError)


class PostgresShortLinkStore(ShortLinkStoreBase):
    """PostgreSQL implementation of short link storage.

    The store owns one asyncpg pool shared by every request. ``connect()``
    must succeed before the store is used.
    """

    CREATE_TABLE_SQL = """
    CREATE TABLE IF NOT EXISTS urls (
        id TEXT PRIMARY KEY,
        original_url TEXT NOT NULL,
        short_url TEXT NOT NULL,
        creation_date TIMESTAMP NOT NULL
    )
    """

    INSERT_SQL = """
    INSERT INTO urls (id, original_url, short_url, creation_date)
    VALUES ($1, $2, $3, $4)
    ON CONFLICT (id) DO NOTHING
    RETURNING id
    """

    SELECT_SQL = "SELECT id, original_url, short_url, creation_date FROM urls WHERE id = $1"

    def __init__(
        self,
        host: str = "localhost",
        port: int = 5432,
        user: str = "postgres",
        password: str = "",
        database: str = "postgres",
        pool_max_size: int = 10,
        connect_max_attempts: int = 5,
        connect_retry_delay_seconds: float = 3.0,
        connect_timeout_seconds: float = 3.0,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize PostgreSQL store (no I/O happens until ``connect``).

        Args:
            host: Database host
            port: Database port
            user: Database user
            password: Database password
            database: Database name
            pool_max_size: Maximum size of connection pool
            connect_max_attempts: Startup connection attempts before giving up
            connect_retry_delay_seconds: Delay between startup attempts
            connect_timeout_seconds: Timeout for a single startup attempt
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.database = database
        self.pool_max_size = pool_max_size
        self.connect_max_attempts = connect_max_attempts
        self.connect_retry_delay_seconds = connect_retry_delay_seconds
        self.connect_timeout_seconds = connect_timeout_seconds

        self._pool: Optional[asyncpg.Pool] = None

    @classmethod
    def from_config(cls, config, logger: Optional[logging.Logger] = None) -> "PostgresShortLinkStore":
        """Build a store from a ``Config`` instance."""
        return cls(
            host=config.db_host,
            port=config.db_port,
            user=config.db_user,
            password=config.db_password,
            database=config.db_name,
            pool_max_size=config.db_pool_max_size,
            connect_max_attempts=config.connect_max_attempts,
            connect_retry_delay_seconds=config.connect_retry_delay_seconds,
            connect_timeout_seconds=config.connect_timeout_seconds,
            logger=logger,
        )

    @property
    def connected(self) -> bool:
        return self._pool is not None

    async def connect(self) -> None:
        """Open the connection pool, verifying connectivity, and create the schema.

        Raises:
            StartupError: If the database stays unreachable for every attempt,
                or the table cannot be created
        """
        last_error: Optional[BaseException] = None

        for attempt in range(1, self.connect_max_attempts + 1):
            try:
                self._pool = await self._open_pool()
                break
            except CONNECT_ERRORS as e:
                last_error = e
                self.logger.warning(
                    f"Database not reachable (attempt {attempt}/{self.connect_max_attempts}): {e!r}"
                )
                if attempt < self.connect_max_attempts:
                    await asyncio.sleep(self.connect_retry_delay_seconds)

        if self._pool is None:
            raise StartupError(
                f"Database not reachable after {self.connect_max_attempts} attempts: {last_error!r}"
            )

        self.logger.info(f"Connected to database {self.database} at {self.host}:{self.port}")

        try:
            await self.ensure_schema()
        except Exception as e:
            await self.close()
            raise StartupError(f"Error creating table: {e}") from e

    async def _open_pool(self) -> asyncpg.Pool:
        """Create a pool and ping it, both bounded by the connect timeout."""
        pool = await asyncio.wait_for(
            asyncpg.create_pool(
                host=self.host,
                port=self.port,
                user=self.user,
                password=self.password,
                database=self.database,
                min_size=1,
                max_size=self.pool_max_size,
                timeout=self.connect_timeout_seconds,
            ),
            timeout=self.connect_timeout_seconds,
        )
        try:
            async with pool.acquire() as conn:
                await asyncio.wait_for(conn.fetchval("SELECT 1"), timeout=self.connect_timeout_seconds)
        except BaseException:
            pool.terminate()
            raise
        return pool

    @asynccontextmanager
    async def _get_connection(self):
        """Get a database connection from the pool."""
        if self._pool is None:
            raise RuntimeError("Store is not connected; call connect() first")
        async with self._pool.acquire() as conn:
            yield conn

    async def ensure_schema(self) -> None:
        """Create the urls table if it does not exist."""
        self.logger.info("Creating urls table if not exists...")
        async with self._get_connection() as conn:
            await conn.execute(self.CREATE_TABLE_SQL)
        self.logger.debug("Table creation completed successfully")

    async def insert_if_absent(self, link: ShortLink) -> bool:
        """Insert a short link, doing nothing if the id already exists."""
        try:
            async with self._get_connection() as conn:
                inserted = await conn.fetchval(
                    self.INSERT_SQL,
                    link.id,
                    link.original_url,
                    link.short_url,
                    link.creation_date,
                )
        except Exception as e:
            self.logger.error(f"Insert error for {link.id}: {e}")
            raise StorageError(f"Insert error: {e}") from e

        return inserted is not None

    async def get(self, short_code: str) -> Optional[ShortLink]:
        try:
            async with self._get_connection() as conn:
                row = await conn.fetchrow(self.SELECT_SQL, short_code)
        except Exception as e:
            self.logger.error(f"Error getting short link {short_code}: {e}")
            return None

        if row is None:
            return None
        return ShortLink.from_record(row)

    async def close(self) -> None:
        """Close the connection pool."""
        if self._pool is None:
            return
        pool, self._pool = self._pool, None
        try:
            await pool.close()
            self.logger.debug("Closed connection pool")
        except Exception as e:
            self.logger.error(f"Error closing pool: {e}")
