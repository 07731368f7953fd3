"""
Core infrastructure package for the Partnerboard backend.

Provides:
- Configuration management via pydantic-settings (config)
- Async PostgreSQL connectivity via asyncpg (database)
- FastAPI dependency injection utilities (dependencies)

The dependencies module wires services into FastAPI and is imported directly
(``from partnerboard.core.dependencies import SettingsDep``) rather than
re-exported here, since services themselves import this package.

Usage Examples:
    from partnerboard.core import get_settings
    settings = get_settings()

    from partnerboard.core import init_db, close_db

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await init_db()
        yield
        await close_db()
"""

from partnerboard.core.config import Settings, get_settings
from partnerboard.core.database import (
    DatabaseNotConfiguredError,
    init_db,
    close_db,
    get_db_pool,
)

__all__ = [
    # Configuration management
    'Settings',
    'get_settings',
    # Database pool lifecycle
    'DatabaseNotConfiguredError',
    'init_db',
    'close_db',
    'get_db_pool',
]
