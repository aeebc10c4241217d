"""
Async database access helpers (raw SQL) using asyncpg.

This module owns the connection pool. FastAPI initializes it on startup and
closes it on shutdown (see `api/main.py`). Request handlers never reach for the
pool directly: they receive a `Database` through the `get_database` dependency
and pass it down to the feature repositories.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from . import errors, settings

logger = logging.getLogger(__name__)

_pool: asyncpg.Pool | None = None

# Ids are BIGINT; values outside its range cannot name a stored row.
MIN_ID = -(2**63)
MAX_ID = 2**63 - 1

_STORE_FAILURES = (
    asyncpg.exceptions.PostgresError,
    asyncpg.exceptions.InterfaceError,
    asyncio.TimeoutError,
    OSError,
)


SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS customers (
        id BIGSERIAL PRIMARY KEY,
        first_name TEXT NOT NULL,
        last_name TEXT NOT NULL,
        phone_number TEXT NOT NULL UNIQUE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS addresses (
        id BIGSERIAL PRIMARY KEY,
        customer_id BIGINT REFERENCES customers (id) ON DELETE CASCADE,
        address_details TEXT NOT NULL,
        city TEXT NOT NULL,
        state TEXT NOT NULL,
        pin_code TEXT NOT NULL
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS addresses_customer_id_idx
    ON addresses (customer_id)
    """,
)


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = settings.database_url()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


async def init_pool() -> None:
    global _pool
    if _pool is not None:
        return None
    _pool = await asyncpg.create_pool(
        dsn=database_url(),
        min_size=settings.pool_min_size(),
        max_size=settings.pool_max_size(),
        command_timeout=settings.command_timeout_s(),
    )
    logger.info("db_pool_opened min_size=%s max_size=%s", settings.pool_min_size(), settings.pool_max_size())


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    await _pool.close()
    _pool = None
    logger.info("db_pool_closed")


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("DB pool is not initialized. Call init_pool() on startup.")
    return _pool


def _translate(exc: Exception) -> errors.StoreError:
    # Unique, foreign-key and not-null violations all derive from this class.
    if isinstance(exc, asyncpg.exceptions.IntegrityConstraintViolationError):
        return errors.ConflictError("Store constraint violated.", error=str(exc))
    return errors.StoreError("Store request failed.", error=str(exc))


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


class Database:
    """
    Statement runner over a pool (or anything with the same fetch/execute API).

    Every store failure leaves this class as a `StoreError`; callers never see
    asyncpg exception types.
    """

    def __init__(self, executor: Any) -> None:
        self._executor = executor

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        try:
            row = await self._executor.fetchrow(sql, *args)
        except _STORE_FAILURES as exc:
            raise _translate(exc) from exc
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        try:
            rows = await self._executor.fetch(sql, *args)
        except _STORE_FAILURES as exc:
            raise _translate(exc) from exc
        return [_record_to_dict(r) for r in rows]

    async def fetch_value(self, sql: str, *args: Any) -> Any:
        try:
            return await self._executor.fetchval(sql, *args)
        except _STORE_FAILURES as exc:
            raise _translate(exc) from exc

    async def execute(self, sql: str, *args: Any) -> str:
        """
        Run a statement (INSERT/UPDATE/DELETE/DDL) and return asyncpg's status tag.
        """
        try:
            return await self._executor.execute(sql, *args)
        except _STORE_FAILURES as exc:
            raise _translate(exc) from exc


def storable_id(value: int) -> bool:
    return MIN_ID <= value <= MAX_ID


def get_database() -> Database:
    """
    FastAPI dependency: the process-wide pool wrapped as a `Database`.
    """
    return Database(pool())


async def ensure_schema(database: Database) -> None:
    for statement in SCHEMA_STATEMENTS:
        await database.execute(statement)
    logger.info("db_schema_ready tables=customers,addresses")
