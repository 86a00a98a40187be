"""
Unit Tests for Schemas and Exceptions
=====================================

Render formats, render outcomes, listener options and the error hierarchy.
"""

import pytest
from pydantic import ValidationError

from html2svg.core.exceptions import (
    Html2SvgError,
    InternalError,
    NavigationTimeoutError,
    RenderEngineError,
    TransportError,
    UnsupportedFormatError,
    error_for_kind,
)
from html2svg.models.schemas import (
    ErrorKind,
    ListenOptions,
    RenderFormat,
    RenderMode,
    RenderOutcome,
)


class TestRenderFormat:
    """Test format to mode and mime mapping."""

    def test_vector(self):
        assert RenderFormat("svg") is RenderFormat.VECTOR
        assert RenderFormat.VECTOR.mode is RenderMode.VECTOR
        assert RenderFormat.VECTOR.mime_type == "image/svg+xml"

    def test_paged(self):
        assert RenderFormat("pdf") is RenderFormat.PAGED
        assert RenderFormat.PAGED.mode is RenderMode.PAGED
        assert RenderFormat.PAGED.mime_type == "application/pdf"

    def test_engine_mode_values(self):
        assert int(RenderMode.VECTOR) == 0
        assert int(RenderMode.PAGED) == 1


class TestRenderOutcome:
    """Test the single-variant invariant of render outcomes."""

    def test_success(self):
        outcome = RenderOutcome.success(b"<svg/>", "image/svg+xml")

        assert outcome.ok
        assert outcome.payload == b"<svg/>"
        assert outcome.error is None
        outcome.raise_for_error()

    def test_failure(self):
        error = NavigationTimeoutError("too slow")
        outcome = RenderOutcome.failure(error)

        assert not outcome.ok
        assert outcome.payload is None
        assert outcome.mime is None
        assert outcome.error.kind is ErrorKind.NAVIGATION_TIMEOUT
        assert outcome.error.detail == "too slow"
        assert outcome.error.cause is error

    def test_failure_reraises_original_error(self):
        error = RenderEngineError("boom")

        with pytest.raises(RenderEngineError) as exc_info:
            RenderOutcome.failure(error).raise_for_error()

        assert exc_info.value is error

    def test_failure_from_plain_exception_is_internal(self):
        outcome = RenderOutcome.failure(RuntimeError("unexpected"))

        assert outcome.error.kind is ErrorKind.INTERNAL_ERROR
        with pytest.raises(InternalError, match="unexpected"):
            outcome.raise_for_error()

    def test_both_variants_rejected(self):
        with pytest.raises(ValidationError):
            RenderOutcome(
                payload=b"x",
                mime="image/svg+xml",
                error={"kind": ErrorKind.INTERNAL_ERROR, "detail": "x"},
            )

    def test_neither_variant_rejected(self):
        with pytest.raises(ValidationError):
            RenderOutcome()

    def test_payload_requires_mime(self):
        with pytest.raises(ValidationError):
            RenderOutcome(payload=b"x")

    def test_empty_payload_is_still_a_success(self):
        assert RenderOutcome.success(b"", "application/pdf").ok


class TestErrors:
    """Test the error hierarchy."""

    @pytest.mark.parametrize("kind", list(ErrorKind))
    def test_every_kind_has_an_error_class(self, kind):
        cls = error_for_kind(kind)

        assert issubclass(cls, Html2SvgError)
        assert cls.kind is kind

    def test_unsupported_format_keeps_value(self):
        error = UnsupportedFormatError("Unsupported output format: png", format="png")

        assert error.format == "png"
        assert error.kind is ErrorKind.UNSUPPORTED_FORMAT

    def test_transport_error_records_position(self):
        error = TransportError("failed", chunk_index=3, bytes_delivered=3072)

        assert error.chunk_index == 3
        assert error.bytes_delivered == 3072


class TestListenOptions:
    """Test listener configuration."""

    def test_defaults(self):
        options = ListenOptions()

        assert options.uvicorn_kwargs() == {"host": "127.0.0.1", "port": 8080}
        assert options.describe() == "127.0.0.1:8080"

    def test_unix_socket(self):
        options = ListenOptions(unix="/tmp/html2svg.sock")

        assert options.uvicorn_kwargs() == {"uds": "/tmp/html2svg.sock"}
        assert options.describe() == "unix socket /tmp/html2svg.sock"

    @pytest.mark.parametrize("port", [0, 70000])
    def test_port_range(self, port):
        with pytest.raises(ValidationError):
            ListenOptions(port=port)
