"""
Render Pipeline Exceptions
==========================

Typed errors raised by the validator, orchestrator and output transport.
Each class carries the ``ErrorKind`` it reports as.
"""

from typing import Optional, Type

from html2svg.models.schemas import ErrorKind


class Html2SvgError(Exception):
    """Base class for every failure the render pipeline reports."""

    kind: ErrorKind = ErrorKind.INTERNAL_ERROR


class InvalidRequestError(Html2SvgError):
    """Raised when a request payload has an unrecognized shape."""

    kind = ErrorKind.INVALID_REQUEST


class UnsupportedFormatError(Html2SvgError):
    """Raised when the requested output format is unknown."""

    kind = ErrorKind.UNSUPPORTED_FORMAT

    def __init__(self, message: str, format: Optional[str] = None):
        super().__init__(message)
        self.format = format


class NavigationTimeoutError(Html2SvgError):
    """Raised when the page did not finish loading before the deadline."""

    kind = ErrorKind.NAVIGATION_TIMEOUT


class RenderEngineError(Html2SvgError):
    """Raised when the rendering engine fails; the engine error is chained."""

    kind = ErrorKind.RENDER_ENGINE_ERROR


class TransportError(Html2SvgError):
    """Raised when writing the payload to its sink fails."""

    kind = ErrorKind.TRANSPORT_ERROR

    def __init__(
        self, message: str, chunk_index: Optional[int] = None, bytes_delivered: int = 0
    ):
        super().__init__(message)
        self.chunk_index = chunk_index
        self.bytes_delivered = bytes_delivered


class InternalError(Html2SvgError):
    """Raised for failures that fit no other category."""

    kind = ErrorKind.INTERNAL_ERROR


_ERRORS_BY_KIND = {
    cls.kind: cls
    for cls in (
        InvalidRequestError,
        UnsupportedFormatError,
        NavigationTimeoutError,
        RenderEngineError,
        TransportError,
        InternalError,
    )
}


def error_for_kind(kind: ErrorKind) -> Type[Html2SvgError]:
    """Map an error kind to the exception class that reports it."""
    return _ERRORS_BY_KIND.get(kind, InternalError)
