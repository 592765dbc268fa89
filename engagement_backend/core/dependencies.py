"""
FastAPI dependency injection module for the Engagement Analytics backend.

This module provides reusable FastAPI dependencies for configuration access
and caller identity. Endpoint handlers depend on these
instead of reaching for globals, so tests can swap them through
app.dependency_overrides.

Key Dependencies Provided:
- get_settings_dependency: Returns the cached Settings singleton
- get_current_user_id: Reads the caller's user id from the X-User-Id header
- SettingsDep / CurrentUserIdDep: Annotated type aliases

Usage Examples:
    @router.get("/predictive-analytics")
    async def get_analytics(
        settings: SettingsDep,
        user_id: CurrentUserIdDep,
    ) -> PredictiveAnalytics:
        ...

Dependencies:
    - fastapi: Depends / Header
    - engagement_backend.core.config: Settings class and get_settings function
"""

from typing import Annotated, Optional

from fastapi import Depends, Header

from engagement_backend.core.config import Settings, get_settings


# Header carrying the authenticated user id, set by the dashboard proxy
USER_ID_HEADER = "X-User-Id"


# =============================================================================
# Settings Dependency
# =============================================================================

def get_settings_dependency() -> Settings:
    """
    Return the Settings singleton instance.

    This is a thin wrapper around get_settings() to enable FastAPI's
    dependency override mechanism for testing:

        app.dependency_overrides[get_settings_dependency] = lambda: test_settings
    """
    return get_settings()


# =============================================================================
# Identity Dependency
# =============================================================================

async def get_current_user_id(
    x_user_id: Annotated[Optional[str], Header(alias=USER_ID_HEADER)] = None,
) -> Optional[str]:
    """
    Return the caller's user id, or None when the header is absent or blank.

    Authentication itself happens upstream (the dashboard's auth provider);
    this service only trusts the forwarded identity. Handlers decide whether a
    missing identity is an error.
    """
    if x_user_id is None or not x_user_id.strip():
        return None
    return x_user_id.strip()


# =============================================================================
# Type Aliases for Dependency Injection
# =============================================================================

# Usage: async def endpoint(settings: SettingsDep)
SettingsDep = Annotated[Settings, Depends(get_settings_dependency)]

# Usage: async def endpoint(user_id: CurrentUserIdDep)
CurrentUserIdDep = Annotated[Optional[str], Depends(get_current_user_id)]
