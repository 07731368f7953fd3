"""
Request-scoped dependencies of the Partnerboard routers.

Handlers receive the settings and the dashboard session through these
functions only; tests swap either of them out with ``app.dependency_overrides``.
The MFA route borrows its database connection itself, after authenticating
the caller (see partnerboard/api/auth.py).

Key Dependencies Provided:
- get_settings_dependency: Returns the cached Settings singleton
- get_dashboard_session: Returns the process-wide DashboardSession
- SettingsDep / DashboardSessionDep: Annotated type aliases

Usage Examples:
    @router.get("/partners")
    def list_partners(session: DashboardSessionDep, settings: SettingsDep):
        return session.data.partners
"""

from typing import Annotated

from fastapi import Depends

from partnerboard.core.config import Settings, get_settings
from partnerboard.services.session import DashboardSession, get_session


# =============================================================================
# Settings Dependency
# =============================================================================

def get_settings_dependency() -> Settings:
    """
    Settings as a dependency, so a test can inject its own.

    Thin wrapper around get_settings() so tests can do:
        app.dependency_overrides[get_settings_dependency] = lambda: mock_settings
    """
    return get_settings()


# =============================================================================
# Dashboard Session Dependency
# =============================================================================

def get_dashboard_session() -> DashboardSession:
    """Return the process-wide dashboard session."""
    return get_session()


# =============================================================================
# Type Aliases for Dependency Injection
# =============================================================================

SettingsDep = Annotated[Settings, Depends(get_settings_dependency)]

DashboardSessionDep = Annotated[DashboardSession, Depends(get_dashboard_session)]
