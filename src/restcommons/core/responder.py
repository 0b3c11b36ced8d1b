"""
restcommons Error Responder

Translates failures raised while handling a request into a status code,
headers and a JSON error body. Resolution is a pure lookup over an
ordered rule table; only ``ErrorResponder.to_response`` touches the web
framework.
"""

from dataclasses import dataclass, field
from enum import Enum
from http import HTTPStatus
from typing import Any

from starlette.responses import JSONResponse

from restcommons.core.exceptions import (
    ArgumentNotValidError,
    MessageNotReadableError,
    MethodNotAllowedError,
    MissingParameterError,
    NotAcceptableError,
    RestServiceError,
    UnsupportedMediaTypeError,
)
from restcommons.models.errors import JSON_MEDIA_TYPE
from restcommons.utils.logging import LoggerMixin


class FailureKind(str, Enum):
    """Failure categories handled by the responder."""

    NOT_ACCEPTABLE = "not_acceptable"
    UNSUPPORTED_MEDIA_TYPE = "unsupported_media_type"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    MESSAGE_NOT_READABLE = "message_not_readable"
    ARGUMENT_NOT_VALID = "argument_not_valid"
    MISSING_PARAMETER = "missing_parameter"
    SERVICE_ERROR = "service_error"
    UNHANDLED = "unhandled"


@dataclass(frozen=True)
class ErrorRule:
    """One row of the failure table. ``status`` is None when the failure carries its own."""

    kind: FailureKind
    exception_type: type[BaseException]
    status: int | None


ERROR_RULES: tuple[ErrorRule, ...] = (
    ErrorRule(FailureKind.NOT_ACCEPTABLE, NotAcceptableError, HTTPStatus.NOT_ACCEPTABLE),
    ErrorRule(FailureKind.UNSUPPORTED_MEDIA_TYPE, UnsupportedMediaTypeError, HTTPStatus.UNSUPPORTED_MEDIA_TYPE),
    ErrorRule(FailureKind.METHOD_NOT_ALLOWED, MethodNotAllowedError, HTTPStatus.METHOD_NOT_ALLOWED),
    ErrorRule(FailureKind.MESSAGE_NOT_READABLE, MessageNotReadableError, HTTPStatus.BAD_REQUEST),
    ErrorRule(FailureKind.ARGUMENT_NOT_VALID, ArgumentNotValidError, HTTPStatus.BAD_REQUEST),
    ErrorRule(FailureKind.MISSING_PARAMETER, MissingParameterError, HTTPStatus.BAD_REQUEST),
    ErrorRule(FailureKind.SERVICE_ERROR, RestServiceError, None),
    # Must stay last
    ErrorRule(FailureKind.UNHANDLED, Exception, HTTPStatus.INTERNAL_SERVER_ERROR),
)


@dataclass(frozen=True)
class ErrorReply:
    """Status, headers and body of an error response."""

    status_code: int
    body: dict[str, Any]
    headers: dict[str, str] = field(default_factory=dict)
    kind: FailureKind = FailureKind.UNHANDLED


def classify_failure(exc: BaseException) -> ErrorRule:
    """Return the first rule matching the failure."""
    for rule in ERROR_RULES:
        if isinstance(exc, rule.exception_type):
            return rule
    # BaseException subclasses outside Exception still get a 500
    return ERROR_RULES[-1]


def _failure_message(exc: BaseException) -> str | None:
    message = getattr(exc, "message", None)
    if isinstance(message, str):
        return message
    text = str(exc)
    return text or None


def resolve_error(exc: BaseException, path: str | None = None) -> ErrorReply:
    """
    Resolve a failure into an error reply.

    Args:
        exc: The failure raised while handling a request
        path: Request path reported by application failures raised without one

    Returns:
        The reply the failure maps to. Never raises.
    """
    rule = classify_failure(exc)
    headers = {"content-type": JSON_MEDIA_TYPE}

    if rule.kind is FailureKind.SERVICE_ERROR:
        return ErrorReply(
            status_code=exc.http_status,
            body=exc.to_body(path=path),
            headers=headers,
            kind=rule.kind,
        )

    if rule.kind is FailureKind.METHOD_NOT_ALLOWED and exc.allowed_methods:
        headers["allow"] = ", ".join(exc.allowed_methods)

    return ErrorReply(
        status_code=int(rule.status),
        body={"message": _failure_message(exc), "kind": type(exc).__name__},
        headers=headers,
        kind=rule.kind,
    )


class ErrorResponder(LoggerMixin):
    """Terminal error handler for the request pipeline.

    Holds no state, so one instance can serve any number of concurrent
    requests.
    """

    def respond(self, exc: BaseException, path: str | None = None) -> ErrorReply:
        """Resolve a failure, logging it with its traceback when it is unhandled."""
        reply = resolve_error(exc, path=path)
        if reply.kind is FailureKind.UNHANDLED:
            self.logger.error(
                "Caught otherwise unhandled exception",
                exc_info=exc,
                error_type=type(exc).__name__,
            )
        return reply

    def to_response(self, exc: BaseException, path: str | None = None) -> JSONResponse:
        """Answer a failure with a ready-to-send JSON response."""
        reply = self.respond(exc, path=path)
        return JSONResponse(
            status_code=reply.status_code,
            content=reply.body,
            headers=reply.headers,
        )
