"""
restcommons Custom Exceptions

Defines the failure taxonomy understood by the error responder.
"""

from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any


class RestCommonsError(Exception):
    """Base exception for all restcommons errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


# =============================================================================
# Request Errors
# =============================================================================


class RequestError(RestCommonsError):
    """Base exception for requests the service cannot process as sent."""

    pass


class NotAcceptableError(RequestError):
    """Raised when no representation acceptable to the client can be produced."""

    def __init__(self, accept: str | None, produces: tuple[str, ...] = ()) -> None:
        message = f"Could not find acceptable representation for Accept: {accept}"
        if produces:
            message = f"{message} (supported: {', '.join(produces)})"
        super().__init__(message, details={"accept": accept, "produces": list(produces)})
        self.accept = accept
        self.produces = produces


class UnsupportedMediaTypeError(RequestError):
    """Raised when a client sends content of a type the handler does not consume."""

    def __init__(self, content_type: str | None, consumes: tuple[str, ...] = ()) -> None:
        message = f"Content type '{content_type or ''}' not supported"
        if consumes:
            message = f"{message} (supported: {', '.join(consumes)})"
        super().__init__(message, details={"content_type": content_type, "consumes": list(consumes)})
        self.content_type = content_type
        self.consumes = consumes


class MethodNotAllowedError(RequestError):
    """Raised when an endpoint does not support the request HTTP method."""

    def __init__(self, method: str, allowed_methods: tuple[str, ...] = ()) -> None:
        super().__init__(
            f"Request method '{method}' is not supported",
            details={"method": method, "allowed_methods": list(allowed_methods)},
        )
        self.method = method
        self.allowed_methods = allowed_methods


class MessageNotReadableError(RequestError):
    """Raised when the request body cannot be parsed."""

    pass


class ArgumentNotValidError(RequestError):
    """Raised when request parameters fail validation."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message, details={"errors": errors or []})
        self.errors = errors or []


class MissingParameterError(RequestError):
    """Raised when a required request parameter is absent."""

    def __init__(self, name: str, location: str = "query") -> None:
        super().__init__(
            f"Required {location} parameter '{name}' is not present",
            details={"parameter": name, "location": location},
        )
        self.name = name
        self.location = location


# =============================================================================
# Service Errors
# =============================================================================


class RestServiceError(RestCommonsError):
    """Raised by application code to answer with an explicit HTTP status.

    The status, message and any structured detail are propagated to the
    client verbatim by the error responder.
    """

    default_status: int = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        http_status: int | None = None,
        *,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
        path: str | None = None,
    ) -> None:
        status_code = int(http_status if http_status is not None else self.default_status)
        if not 100 <= status_code <= 599:
            raise ValueError(f"Invalid HTTP status: {status_code}")
        super().__init__(message, details=details)
        self.http_status = status_code
        self.error_code = error_code
        self.path = path
        self.timestamp = datetime.now(timezone.utc)

    @property
    def kind(self) -> str:
        return type(self).__name__

    def to_body(self, path: str | None = None) -> dict[str, Any]:
        """Build the error body fields carried by this exception.

        ``path`` is reported when the exception was raised without one.
        """
        body: dict[str, Any] = {"message": self.message, "kind": self.kind}
        if self.error_code:
            body["code"] = self.error_code
        if self.details:
            body["details"] = self.details
        if self.path or path:
            body["path"] = self.path or path
        body["timestamp"] = self.timestamp.isoformat()
        return body


class ResourceNotFoundError(RestServiceError):
    """Raised when a requested resource does not exist."""

    default_status = HTTPStatus.NOT_FOUND


class ResourceConflictError(RestServiceError):
    """Raised when a request conflicts with the current state of a resource."""

    default_status = HTTPStatus.CONFLICT


class ServiceNotReadyError(RestServiceError):
    """Raised when the service has not completed startup."""

    default_status = HTTPStatus.SERVICE_UNAVAILABLE

    def __init__(self, message: str = "Service is not ready") -> None:
        super().__init__(message)


# =============================================================================
# Configuration Errors
# =============================================================================


class SettingsLoadError(RestCommonsError):
    """Raised when runtime settings cannot be loaded or validated."""

    pass
