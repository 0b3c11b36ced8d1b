"""
restcommons FastAPI Dependencies

Provides dependency injection functions for FastAPI routes.
"""

from typing import Annotated

from fastapi import Depends, Request

from restcommons.config import Settings, get_settings
from restcommons.core.exceptions import ServiceNotReadyError
from restcommons.models.status import StatusInfo


# =============================================================================
# Settings Dependency
# =============================================================================


def get_app_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    settings = getattr(request.app.state, "settings", None)
    return settings if settings is not None else get_settings()


SettingsDep = Annotated[Settings, Depends(get_app_settings)]


# =============================================================================
# Status Dependencies
# =============================================================================


def get_status_info(request: Request) -> StatusInfo:
    """Get the service status from app state."""
    status = getattr(request.app.state, "status", None)
    if status is None:
        # Lifespan has not run yet
        status = StatusInfo()
        request.app.state.status = status
    return status


StatusDep = Annotated[StatusInfo, Depends(get_status_info)]


def require_ready(status: StatusDep) -> StatusInfo:
    """
    Dependency that rejects requests until the service is ready.

    Use this as a dependency to protect routes:

        @router.get("/things", dependencies=[Depends(require_ready)])
        async def list_things():
            ...

    Raises:
        ServiceNotReadyError: If startup has not completed.
    """
    if not status.is_ready():
        raise ServiceNotReadyError()
    return status


ReadyDep = Annotated[StatusInfo, Depends(require_ready)]
