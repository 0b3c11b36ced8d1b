"""restcommons data models."""

from restcommons.models.errors import (
    ERROR_MEDIA_TYPE,
    JSON_MEDIA_TYPE,
    ErrorBody,
    error_responses,
)
from restcommons.models.status import StatusInfo

__all__ = [
    "ERROR_MEDIA_TYPE",
    "JSON_MEDIA_TYPE",
    "ErrorBody",
    "StatusInfo",
    "error_responses",
]
