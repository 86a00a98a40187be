"""
Pydantic Models and Schemas
===========================

Core data models for render requests, render outcomes and listener
configuration. A request flows through the pipeline as a ``RenderRequest``
and comes back as exactly one of the two ``RenderOutcome`` variants.
"""

from typing import Optional, Any
from enum import Enum, IntEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator


# Enums
class RenderFormat(str, Enum):
    """Output formats accepted from callers."""
    VECTOR = "svg"
    PAGED = "pdf"

    @property
    def mode(self) -> "RenderMode":
        return RenderMode.VECTOR if self is RenderFormat.VECTOR else RenderMode.PAGED

    @property
    def mime_type(self) -> str:
        return MIME_TYPES[self]


class RenderMode(IntEnum):
    """Render mode selector understood by the engine capture primitive."""
    VECTOR = 0
    PAGED = 1


MIME_TYPES = {
    RenderFormat.VECTOR: "image/svg+xml",
    RenderFormat.PAGED: "application/pdf",
}


class ErrorKind(str, Enum):
    """Failure categories a render request can end with."""
    INVALID_REQUEST = "InvalidRequest"
    UNSUPPORTED_FORMAT = "UnsupportedFormat"
    NAVIGATION_TIMEOUT = "NavigationTimeout"
    RENDER_ENGINE_ERROR = "RenderEngineError"
    TRANSPORT_ERROR = "TransportError"
    INTERNAL_ERROR = "InternalError"


# Request Models
class RenderOptions(BaseModel):
    """Options for rendering a page.

    ``format`` is kept as the raw caller value; membership in
    ``RenderFormat`` is checked when the render starts.
    """
    format: str = Field(RenderFormat.VECTOR.value, description="Output format: svg or pdf")

    model_config = ConfigDict(extra="ignore")


class RenderRequest(BaseModel):
    """A well-formed request to render one target."""
    url: str = Field(..., min_length=1, description="URL or identifier of the page to render")
    options: RenderOptions = Field(default_factory=RenderOptions, description="Render options")


# Result Models
class RenderFailure(BaseModel):
    """Failure variant of a render outcome."""
    kind: ErrorKind = Field(..., description="Failure category")
    detail: str = Field("", description="Human readable failure description")
    cause: Optional[BaseException] = Field(None, exclude=True, description="Underlying exception")

    model_config = ConfigDict(arbitrary_types_allowed=True)


class RenderOutcome(BaseModel):
    """Result of one render: either a payload with its mime type, or a failure."""
    payload: Optional[bytes] = Field(None, description="Rendered document bytes", exclude=True)
    mime: Optional[str] = Field(None, description="Mime type of the payload")
    error: Optional[RenderFailure] = Field(None, description="Failure if the render did not succeed")

    @model_validator(mode="after")
    def check_single_variant(self) -> "RenderOutcome":
        has_payload = self.payload is not None
        if has_payload == (self.error is not None):
            raise ValueError("exactly one of payload or error must be set")
        if has_payload and not self.mime:
            raise ValueError("a payload requires a mime type")
        if not has_payload and self.mime is not None:
            raise ValueError("a failure cannot carry a mime type")
        return self

    @classmethod
    def success(cls, payload: bytes, mime: str) -> "RenderOutcome":
        return cls(payload=payload, mime=mime)

    @classmethod
    def failure(cls, exc: BaseException, kind: Optional[ErrorKind] = None) -> "RenderOutcome":
        kind = kind or getattr(exc, "kind", ErrorKind.INTERNAL_ERROR)
        return cls(error=RenderFailure(kind=kind, detail=str(exc), cause=exc))

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        """Raise the typed exception matching the failure, if any."""
        if self.error is None:
            return

        from html2svg.core.exceptions import Html2SvgError, error_for_kind

        cause = self.error.cause
        if isinstance(cause, Html2SvgError):
            raise cause
        raise error_for_kind(self.error.kind)(self.error.detail) from cause


# Server Models
class ListenOptions(BaseModel):
    """Where the network service listens: a unix socket, or host and port."""
    unix: Optional[str] = Field(None, description="Unix domain socket path")
    host: str = Field("127.0.0.1", description="Bind address when no socket is given")
    port: int = Field(8080, ge=1, le=65535, description="Bind port when no socket is given")

    def describe(self) -> str:
        return f"unix socket {self.unix}" if self.unix else f"{self.host}:{self.port}"

    def uvicorn_kwargs(self) -> dict[str, Any]:
        if self.unix:
            return {"uds": self.unix}
        return {"host": self.host, "port": self.port}
