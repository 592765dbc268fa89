"""
Core infrastructure package for the FastAPI backend.

Provides:
- Configuration management via pydantic-settings
- Async PostgreSQL database connectivity via asyncpg
- FastAPI dependency injection utilities

This module re-exports key components from submodules for convenient importing
by other modules throughout the backend:

    from engagement_backend.core import get_settings, get_db_pool, SettingsDep

Components Re-exported:
    Settings: Pydantic settings class with all configuration parameters
    get_settings: Function returning the cached Settings singleton
    init_db: Async function to initialize the database connection pool
    close_db: Async function to close the database connection pool
    get_db_pool: Async function to get the database connection pool
    get_settings_dependency: FastAPI dependency returning Settings
    get_current_user_id: FastAPI dependency reading the X-User-Id header
    SettingsDep / CurrentUserIdDep: Annotated dependency aliases

Usage Examples:
    # Database pool lifecycle (in FastAPI lifespan)
    from engagement_backend.core import init_db, close_db

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await init_db()
        yield
        await close_db()
"""

# =============================================================================
# Re-exports from engagement_backend.core.config
# =============================================================================
from engagement_backend.core.config import Settings, get_settings

# =============================================================================
# Re-exports from engagement_backend.core.database
# =============================================================================
from engagement_backend.core.database import init_db, close_db, get_db_pool

# =============================================================================
# Re-exports from engagement_backend.core.dependencies
# =============================================================================
from engagement_backend.core.dependencies import (
    get_settings_dependency,
    get_current_user_id,
    SettingsDep,
    CurrentUserIdDep,
)

__all__ = [
    # Configuration management (from config.py)
    'Settings',
    'get_settings',
    # Database pool lifecycle (from database.py)
    'init_db',
    'close_db',
    'get_db_pool',
    # FastAPI dependency injection (from dependencies.py)
    'get_settings_dependency',
    'get_current_user_id',
    'SettingsDep',
    'CurrentUserIdDep',
]
