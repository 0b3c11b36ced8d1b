"""Shared fixtures for restcommons tests."""

import logging

import pytest
import structlog
from fastapi import APIRouter, Cookie, Depends, Header, Query
from fastapi.testclient import TestClient
from pydantic import BaseModel, Field

from restcommons.api.negotiation import require_accept, require_content_type
from restcommons.config import Settings, get_settings
from restcommons.core.dependencies import require_ready
from restcommons.core.exceptions import ResourceNotFoundError, RestServiceError
from restcommons.main import create_app


class Item(BaseModel):
    """Request payload used by the test routes."""

    name: str
    quantity: int = Field(default=1, ge=1)


items_router = APIRouter(prefix="/items")

# Raised as-is by more than one route
GONE = RestServiceError("gone", http_status=410)


@items_router.get("")
async def list_items(limit: int = Query(...)) -> dict[str, int]:
    return {"limit": limit}


@items_router.post("")
async def create_item(item: Item) -> Item:
    if item.name == "duplicate":
        raise RestServiceError("duplicate entry", http_status=409)
    return item


@items_router.get("/boom")
async def explode() -> None:
    raise RuntimeError("kaboom")


@items_router.get("/fail/{code}")
async def fail_with(code: int) -> None:
    raise RestServiceError(f"failed with {code}", http_status=code, error_code=f"E{code}")


@items_router.get("/missing")
async def missing_item() -> None:
    raise ResourceNotFoundError("item 42 not found", error_code="NOT_FOUND", details={"item_id": 42})


@items_router.get("/archived")
async def archived_items() -> None:
    raise GONE


@items_router.get("/retired")
async def retired_items() -> None:
    raise GONE


@items_router.get("/by-tenant")
async def items_by_tenant(x_tenant: str = Header(...)) -> dict[str, str]:
    return {"tenant": x_tenant}


@items_router.get("/session")
async def session_items(session_id: str = Cookie(...)) -> dict[str, str]:
    return {"session": session_id}


@items_router.post("/upload", dependencies=[Depends(require_content_type("text/csv"))])
async def upload_items() -> dict[str, str]:
    return {"status": "uploaded"}


@items_router.get("/report", dependencies=[Depends(require_accept("text/csv"))])
async def report() -> dict[str, str]:
    return {"status": "reported"}


@items_router.get("/guarded", dependencies=[Depends(require_ready)])
async def guarded() -> dict[str, str]:
    return {"status": "served"}


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo the structlog and root logger configuration made by setup_logging."""
    yield
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    structlog.contextvars.clear_contextvars()
    get_settings.cache_clear()


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, env="testing", service_name="demo-service")


@pytest.fixture
def app(settings: Settings):
    return create_app(settings, version="1.2.3", routers=[items_router])


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def shared_failure() -> RestServiceError:
    """The exception instance raised by both ``/items/archived`` and ``/items/retired``."""
    return GONE
