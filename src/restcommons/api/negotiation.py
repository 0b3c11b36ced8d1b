"""Content negotiation guards for restcommons routes."""

from collections.abc import Callable

from fastapi import Request

from restcommons.core.exceptions import NotAcceptableError, UnsupportedMediaTypeError


def _media_type(value: str) -> str:
    """Strip parameters such as ``charset`` and normalize case."""
    return value.split(";", 1)[0].strip().lower()


def media_type_matches(pattern: str, media_type: str) -> bool:
    """Check a concrete media type against a pattern that may use ``*`` wildcards."""
    pattern_type, _, pattern_subtype = _media_type(pattern).partition("/")
    actual_type, _, actual_subtype = _media_type(media_type).partition("/")
    if pattern_type == "*":
        return True
    if pattern_type != actual_type:
        return False
    return pattern_subtype in ("*", actual_subtype)


def accepted_media_types(accept: str) -> list[str]:
    """List the media ranges of an Accept header, dropping ones with ``q=0``."""
    ranges = []
    for item in accept.split(","):
        if not item.strip():
            continue
        media_range, *params = (part.strip() for part in item.split(";"))
        if any(param.replace(" ", "") in ("q=0", "q=0.0", "q=0.00", "q=0.000") for param in params):
            continue
        ranges.append(media_range.lower())
    return ranges


def require_content_type(*media_types: str) -> Callable[[Request], None]:
    """
    Build a dependency rejecting request bodies of an unsupported type.

    Usage:

        @router.post("/items", dependencies=[Depends(require_content_type("application/json"))])

    Raises:
        UnsupportedMediaTypeError: If the Content-Type header matches none of ``media_types``.
    """
    consumes = tuple(_media_type(media_type) for media_type in media_types)

    def check_content_type(request: Request) -> None:
        content_type = request.headers.get("content-type")
        if content_type is None or not any(
            media_type_matches(media_type, content_type) for media_type in consumes
        ):
            raise UnsupportedMediaTypeError(content_type, consumes=consumes)

    return check_content_type


def require_accept(*media_types: str) -> Callable[[Request], None]:
    """
    Build a dependency rejecting clients that accept none of the produced types.

    A request without an Accept header accepts anything.

    Raises:
        NotAcceptableError: If no produced type satisfies the Accept header.
    """
    produces = tuple(_media_type(media_type) for media_type in media_types)

    def check_accept(request: Request) -> None:
        accept = request.headers.get("accept")
        if not accept:
            return
        for media_range in accepted_media_types(accept):
            if any(media_type_matches(media_range, produced) for produced in produces):
                return
        raise NotAcceptableError(accept, produces=produces)

    return check_accept
