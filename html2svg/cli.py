"""
Command Line Interface
======================

Render one page and write the document to standard output.

Usage:
    html2svg [--format svg|pdf] [--timeout SECONDS] URL > page.svg
"""

from typing import List, Optional, BinaryIO
import argparse
import asyncio
import sys

from html2svg import __version__
from html2svg.config.logging import get_logger, setup_logging
from html2svg.config.settings import Settings, get_settings
from html2svg.core.exceptions import Html2SvgError, InternalError
from html2svg.core.rendering.engine import EngineProcess
from html2svg.core.rendering.orchestrator import RenderOrchestrator, resolve_format
from html2svg.core.transport.writer import StreamSink, deliver
from html2svg.models.schemas import RenderFormat, RenderOptions, RenderRequest

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="html2svg", description="Render a web page to an SVG or PDF document"
    )
    parser.add_argument("url", help="URL to the web page to render")
    parser.add_argument(
        "-f",
        "--format",
        default=RenderFormat.VECTOR.value,
        help="set the output format, should be one of these values: svg, pdf",
    )
    parser.add_argument(
        "--timeout", type=float, dest="navigation_timeout", help="page load deadline in seconds"
    )
    parser.add_argument(
        "--settle-delay", type=float, help="delay before capture in seconds"
    )
    parser.add_argument("--width", type=int, dest="viewport_width", help="viewport width")
    parser.add_argument("--height", type=int, dest="viewport_height", help="viewport height")
    parser.add_argument("--chunk-size", type=int, help="output write size in bytes")
    parser.add_argument("--version", action="version", version=f"html2svg {__version__}")
    return parser


def settings_for(args: argparse.Namespace, base: Settings) -> Settings:
    """Apply command-line overrides to the settings."""
    overrides = {
        name: getattr(args, name)
        for name in (
            "navigation_timeout",
            "settle_delay",
            "viewport_width",
            "viewport_height",
            "chunk_size",
        )
        if getattr(args, name) is not None
    }
    if not overrides:
        return base
    return Settings.model_validate({**base.model_dump(), **overrides})


async def run(request: RenderRequest, settings: Settings, output: BinaryIO) -> int:
    """
    Render a request and write the document to ``output``.

    Raises:
        Html2SvgError: If rendering or delivery fails
    """
    # Unknown formats fail before the browser is launched
    resolve_format(request.options.format)

    engine = EngineProcess(settings)
    try:
        outcome = await RenderOrchestrator(engine, settings).render(request)
        outcome.raise_for_error()
        if outcome.payload is None:
            raise InternalError("Render finished without a document")
        return await deliver(StreamSink(output), outcome.payload, settings.chunk_size)
    finally:
        await engine.close()


def main(argv: Optional[List[str]] = None, output: Optional[BinaryIO] = None) -> int:
    """Console entry point for ``html2svg``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = settings_for(args, get_settings())
        request = RenderRequest(url=args.url, options=RenderOptions(format=args.format))
    except ValueError as e:
        parser.error(str(e))

    setup_logging(settings)

    try:
        delivered = asyncio.run(run(request, settings, output or sys.stdout.buffer))
    except Html2SvgError as e:
        logger.debug("Render aborted", kind=e.kind.value, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130

    logger.debug("Render written", bytes=delivered)
    return 0
