"""
Postgres access for MFA code storage.

The dashboard itself is served from memory; the only table the service writes
is ``user_mfa_settings``. DATABASE_URL is therefore optional: without it the
service starts normally and only POST /auth/mfa/send-code fails, with
DatabaseNotConfiguredError mapped to a 500 by main.py.

The asyncpg pool is created lazily on first use (or eagerly by the FastAPI
lifespan when DATABASE_URL is set) and shared by all requests:

    pool = await get_db_pool()
    async with pool.acquire() as conn:
        status = await conn.execute(STORE_CODE_QUERY, code, expires_at, user_id)
"""

import logging
from typing import Optional

import asyncpg
from asyncpg import Pool

from partnerboard.core.config import get_settings


logger = logging.getLogger(__name__)

# MFA traffic is a handful of single-row updates; a small pool is enough
POOL_MIN_SIZE = 1
POOL_MAX_SIZE = 5
COMMAND_TIMEOUT_SECONDS = 30

_pool: Optional[Pool] = None


class DatabaseNotConfiguredError(RuntimeError):
    """A connection was requested but DATABASE_URL is not set."""


async def init_db() -> Pool:
    """
    Create the shared pool if it does not exist yet.

    Raises:
        DatabaseNotConfiguredError: DATABASE_URL is not configured.
        asyncpg.PostgresError / OSError: The server refused or is unreachable.
    """
    global _pool

    if _pool is not None:
        return _pool

    database_url = get_settings().database_url
    if not database_url:
        raise DatabaseNotConfiguredError("DATABASE_URL is not configured")

    _pool = await asyncpg.create_pool(
        dsn=database_url,
        min_size=POOL_MIN_SIZE,
        max_size=POOL_MAX_SIZE,
        command_timeout=COMMAND_TIMEOUT_SECONDS,
    )
    logger.info(f"MFA database pool created (max {POOL_MAX_SIZE} connections)")
    return _pool


async def get_db_pool() -> Pool:
    """Return the shared pool, creating it on first use."""
    if _pool is None:
        return await init_db()
    return _pool


async def close_db() -> None:
    """Close the shared pool; a no-op when it was never created."""
    global _pool

    if _pool is None:
        return
    await _pool.close()
    _pool = None
    logger.info("MFA database pool closed")
