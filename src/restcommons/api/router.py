"""Main API router aggregating restcommons endpoints."""

from fastapi import APIRouter

from restcommons.api.status import router as status_router
from restcommons.models.errors import error_responses

api_router = APIRouter(responses=error_responses(400, 405, 406, 415, 500))

# Include sub-routers
api_router.include_router(status_router, prefix="/status", tags=["Status"])
