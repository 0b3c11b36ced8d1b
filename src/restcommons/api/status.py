"""Status query endpoints."""

from fastapi import APIRouter

from restcommons.core.dependencies import StatusDep
from restcommons.models.status import StatusInfo
from restcommons.utils.logging import get_logger

router = APIRouter(tags=["Status"])
logger = get_logger(__name__)


@router.get("", response_model=StatusInfo)
async def get_status(status: StatusDep) -> StatusInfo:
    """
    Service status endpoint.

    Returns the running version and whether the service is ready to
    handle requests. Always answers 200; readiness is part of the payload.
    """
    logger.debug("Status queried", status=str(status))
    return status


@router.get("/live")
async def liveness_check() -> dict[str, str]:
    """
    Liveness check endpoint.

    Simple endpoint that returns OK if the process is serving requests.
    Used by container orchestrators to determine if the container should be restarted.
    """
    return {"status": "alive"}
