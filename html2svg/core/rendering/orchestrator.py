"""
Render Orchestrator
===================

Drives one engine session per request through a fixed sequence of phases:

    init -> acquire -> navigate -> settle -> extract -> cleanup

Only navigation is bounded by a deadline. The session is destroyed before
``render`` returns, whatever the outcome.
"""

from typing import Optional, Any
import asyncio
import time

from html2svg.config.logging import get_logger
from html2svg.config.settings import Settings, get_settings
from html2svg.core.exceptions import (
    Html2SvgError,
    InternalError,
    NavigationTimeoutError,
    RenderEngineError,
    UnsupportedFormatError,
)
from html2svg.core.rendering.engine import EngineProcess, EngineSession
from html2svg.core.rendering.page_scripts import SETTLE_SCRIPT
from html2svg.models.schemas import RenderFormat, RenderOutcome, RenderRequest

logger = get_logger(__name__)


def resolve_format(value: str) -> RenderFormat:
    """Map a caller-supplied format name to a render format."""
    try:
        return RenderFormat(value)
    except ValueError:
        raise UnsupportedFormatError(
            f"Unsupported output format: {value}", format=value
        ) from None


class RenderOrchestrator:
    """Renders requests against a shared engine process."""

    def __init__(self, engine: EngineProcess, settings: Optional[Settings] = None):
        self.engine = engine
        self.settings = settings or get_settings()
        self.logger: Any = logger.bind(component="orchestrator")  # structlog.BoundLoggerBase

    async def render(self, request: RenderRequest) -> RenderOutcome:
        """
        Render a request into a document.

        Args:
            request: Validated render request

        Returns:
            RenderOutcome holding either the payload and its mime type, or
            the failure that ended the render
        """
        start_time = time.monotonic()
        log = self.logger.bind(url=request.url, format=request.options.format)

        try:
            render_format = resolve_format(request.options.format)
            payload = await self._render(request.url, render_format, log)
        except Html2SvgError as e:
            log.warning("Render failed", kind=e.kind.value, error=str(e))
            return RenderOutcome.failure(e)
        except Exception as e:
            log.error("Render failed unexpectedly", error=str(e), exc_info=True)
            return RenderOutcome.failure(InternalError(f"Rendering failed: {e}"))

        log.info(
            "Render completed",
            size=len(payload),
            processing_time=round(time.monotonic() - start_time, 3),
        )
        return RenderOutcome.success(payload, render_format.mime_type)

    async def _render(self, url: str, render_format: RenderFormat, log: Any) -> bytes:
        log.debug("Acquiring engine session")
        try:
            session = await self.engine.create_session()
        except Html2SvgError:
            raise
        except Exception as e:
            raise RenderEngineError(f"Failed to create engine session: {e}") from e

        try:
            log.debug("Navigating", timeout=self.settings.navigation_timeout)
            await self._navigate(session, url)

            log.debug("Settling page", delay=self.settings.settle_delay)
            await self._settle(session)

            log.debug("Extracting document")
            return await self._extract(session, render_format)
        finally:
            log.debug("Destroying engine session")
            await session.destroy()

    async def _navigate(self, session: EngineSession, url: str) -> None:
        """Race the page load against the navigation deadline."""
        navigation = asyncio.ensure_future(session.navigate(url))
        try:
            done, _ = await asyncio.wait({navigation}, timeout=self.settings.navigation_timeout)
        except asyncio.CancelledError:
            navigation.cancel()
            raise

        if navigation in done:
            try:
                navigation.result()
            except Html2SvgError:
                raise
            except Exception as e:
                raise RenderEngineError(f"Navigation failed: {e}") from e
            return

        # Cancelling unwinds navigate(), which detaches its load listener
        navigation.cancel()
        await asyncio.gather(navigation, return_exceptions=True)
        raise NavigationTimeoutError(
            f"Navigation to {url} did not finish within {self.settings.navigation_timeout}s"
        )

    async def _settle(self, session: EngineSession) -> None:
        try:
            await session.execute_in_page(
                SETTLE_SCRIPT, {"settleDelay": int(self.settings.settle_delay * 1000)}
            )
        except Exception as e:
            raise RenderEngineError(f"Page settle failed: {e}") from e

    async def _extract(self, session: EngineSession, render_format: RenderFormat) -> bytes:
        try:
            title = await session.title()
            return await session.capture(render_format.mode, title)
        except Exception as e:
            raise RenderEngineError(f"Capture failed: {e}") from e


async def render_page(
    engine: EngineProcess, request: RenderRequest, settings: Optional[Settings] = None
) -> RenderOutcome:
    """Render one request with a throwaway orchestrator."""
    return await RenderOrchestrator(engine, settings).render(request)
