"""restcommons - Application factory and entry point."""

from collections.abc import Iterable
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import APIRouter, FastAPI

from restcommons import __version__
from restcommons.api.errors import register_error_handlers
from restcommons.api.middleware import RequestContextMiddleware
from restcommons.api.router import api_router
from restcommons.config import Settings, get_settings
from restcommons.core.responder import ErrorResponder
from restcommons.models.status import StatusInfo
from restcommons.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def create_app(
    settings: Settings | None = None,
    version: str | None = None,
    routers: Iterable[APIRouter] = (),
) -> FastAPI:
    """
    Create and configure a FastAPI application with the restcommons surface.

    Args:
        settings: Service settings (loaded from the environment if omitted)
        version: Version reported by the status endpoint; falls back to
            ``settings.service_version`` and then to the package version
        routers: Service routers mounted next to the status endpoints
    """
    settings = settings or get_settings()
    if version is not None:
        service_version = version
    elif settings.service_version is not None:
        service_version = settings.service_version
    else:
        service_version = __version__

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan manager."""
        setup_logging(settings, service_version)
        logger.info(f"Starting {settings.service_name} {service_version} in {settings.env} mode")

        status = StatusInfo().set_version(service_version)
        app.state.status = status
        status.set_ready(True)
        logger.info(f"{settings.service_name} ready", status=str(status))

        yield

        logger.info(f"Shutting down {settings.service_name}...")
        status.set_ready(False)
        logger.info(f"{settings.service_name} shutdown complete")

    # OpenAPI rejects an empty version string
    app = FastAPI(
        title=f"{settings.service_name} API",
        version=service_version or __version__,
        docs_url="/api/docs" if settings.docs_enabled else None,
        redoc_url="/api/redoc" if settings.docs_enabled else None,
        openapi_url="/api/openapi.json" if settings.docs_enabled else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.status = StatusInfo().set_version(service_version)

    # Request context must wrap the error responder so unhandled failures are logged with it
    register_error_handlers(app, ErrorResponder())
    app.add_middleware(RequestContextMiddleware)

    app.include_router(api_router)
    for router in routers:
        app.include_router(router)

    return app


def main() -> None:
    """Main entry point for running a bare restcommons service."""
    settings = get_settings()

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
