"""
Centralized error handling for FastAPI.

Framework failures are translated into the restcommons taxonomy and every
failure is answered by the ErrorResponder. Unhandled exceptions are
logged with their traceback; clients only see the message and type name.
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.routing import Match
from starlette.types import ASGIApp

from restcommons.core.exceptions import (
    ArgumentNotValidError,
    MessageNotReadableError,
    MethodNotAllowedError,
    MissingParameterError,
    NotAcceptableError,
    RestCommonsError,
    UnsupportedMediaTypeError,
)
from restcommons.core.responder import ErrorResponder

PARAMETER_LOCATIONS = frozenset({"query", "header", "cookie", "path"})


def _error_location(error: dict[str, Any]) -> str:
    return ".".join(str(part) for part in error.get("loc", ()))


def _summarize_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Keep only the JSON-safe parts of pydantic error entries."""
    return [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in errors
    ]


def _validation_message(errors: list[dict[str, Any]]) -> str:
    parts = []
    for error in errors:
        location = _error_location(error)
        msg = error.get("msg", "invalid value")
        parts.append(f"{location}: {msg}" if location else msg)
    return "; ".join(parts) or "Validation failed"


def _translate_validation_errors(errors: list[dict[str, Any]]) -> RestCommonsError:
    for error in errors:
        if error.get("type") == "json_invalid":
            reason = (error.get("ctx") or {}).get("error")
            message = error.get("msg", "JSON decode error")
            return MessageNotReadableError(f"{message}: {reason}" if reason else message)

    missing = [error for error in errors if error.get("type") == "missing"]
    if missing and len(missing) == len(errors):
        loc = tuple(missing[0].get("loc", ()))
        if loc == ("body",):
            return MessageNotReadableError("Required request body is missing")
        if len(loc) >= 2 and loc[0] in PARAMETER_LOCATIONS:
            return MissingParameterError(str(loc[-1]), location=str(loc[0]))

    return ArgumentNotValidError(_validation_message(errors), errors=_summarize_errors(errors))


def _allowed_methods(exc: StarletteHTTPException, request: Request | None) -> tuple[str, ...]:
    """Collect the methods of every route whose path matches the request."""
    allow = (exc.headers or {}).get("Allow", "")
    methods = {method.strip() for method in allow.split(",") if method.strip()}
    if request is not None and "app" in request.scope:
        for route in request.app.router.routes:
            route_methods = getattr(route, "methods", None)
            if not route_methods:
                continue
            match, _ = route.matches(request.scope)
            if match is Match.PARTIAL:
                methods.update(route_methods)
    return tuple(sorted(methods))


def translate_framework_error(exc: Exception, request: Request | None = None) -> Exception:
    """
    Map a FastAPI or Starlette failure onto the restcommons taxonomy.

    Args:
        exc: The failure raised by the framework
        request: The request being handled, used for method and header context

    Returns:
        The matching restcommons exception, or ``exc`` unchanged when it
        does not belong to any request failure category.
    """
    if isinstance(exc, RequestValidationError):
        return _translate_validation_errors(list(exc.errors()))

    if isinstance(exc, ValidationError):
        errors = exc.errors(include_url=False)
        return ArgumentNotValidError(_validation_message(errors), errors=_summarize_errors(errors))

    if isinstance(exc, StarletteHTTPException):
        headers = request.headers if request is not None else {}
        if exc.status_code == 405:
            allowed = _allowed_methods(exc, request)
            method = request.method if request is not None else "UNKNOWN"
            return MethodNotAllowedError(method, allowed_methods=allowed)
        if exc.status_code == 406:
            return NotAcceptableError(headers.get("accept"))
        if exc.status_code == 415:
            return UnsupportedMediaTypeError(headers.get("content-type"))

    return exc


class ErrorResponderMiddleware(BaseHTTPMiddleware):
    """Last-resort handler turning otherwise-unhandled exceptions into 500 replies."""

    def __init__(self, app: ASGIApp, responder: ErrorResponder | None = None) -> None:
        super().__init__(app)
        self.responder = responder or ErrorResponder()

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return self.responder.to_response(exc, path=request.url.path)


def register_error_handlers(app: FastAPI, responder: ErrorResponder | None = None) -> None:
    """
    Register the restcommons error handlers on a FastAPI application.

    Args:
        app: The FastAPI application instance
        responder: Responder shared by every handler (a new one if omitted)
    """
    responder = responder or ErrorResponder()

    async def handle_restcommons_error(request: Request, exc: RestCommonsError) -> JSONResponse:
        """Handle taxonomy failures raised by routes and dependencies."""
        return responder.to_response(exc, path=request.url.path)

    async def handle_validation_error(request: Request, exc: Exception) -> JSONResponse:
        """Handle request parsing and validation failures."""
        return responder.to_response(translate_framework_error(exc, request), path=request.url.path)

    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> Response:
        """Handle routing failures; statuses outside the table keep FastAPI's default reply."""
        translated = translate_framework_error(exc, request)
        if translated is exc:
            return await http_exception_handler(request, exc)
        return responder.to_response(translated, path=request.url.path)

    app.add_exception_handler(RestCommonsError, handle_restcommons_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_middleware(ErrorResponderMiddleware, responder=responder)
