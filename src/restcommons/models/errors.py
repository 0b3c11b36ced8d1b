"""Error response models shared by every restcommons API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

ERROR_MEDIA_TYPE = "application/vnd.error+json"
JSON_MEDIA_TYPE = "application/json"


class ErrorBody(BaseModel):
    """Error response envelope."""

    model_config = ConfigDict(extra="allow")

    message: str | None = Field(None, description="Human-readable description of the failure")
    kind: str = Field(..., description="Symbolic failure category, diagnostic only")


def error_responses(*status_codes: int) -> dict[int | str, dict[str, Any]]:
    """
    Build an OpenAPI ``responses`` mapping documenting error replies.

    Args:
        status_codes: HTTP statuses a route can answer with

    Returns:
        Mapping suitable for ``APIRouter(responses=...)`` or route decorators
    """
    return {
        status_code: {
            "model": ErrorBody,
            "content": {ERROR_MEDIA_TYPE: {}},
        }
        for status_code in status_codes
    }
