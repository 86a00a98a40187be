"""
Rendering Engine
================

Playwright-backed rendering engine. ``EngineProcess`` is the process-wide
Chromium runtime, started lazily and closed once at shutdown.
``EngineSession`` is one hidden, fixed-size page owned by a single render.
"""

from typing import Optional, Dict, Any
import asyncio
import uuid

from playwright.async_api import async_playwright, Browser, BrowserContext, Page, Playwright

from html2svg.config.logging import get_logger
from html2svg.config.settings import Settings, get_settings
from html2svg.core.exceptions import RenderEngineError
from html2svg.core.rendering.page_scripts import CAPTURE_SCRIPT, PageScript
from html2svg.models.schemas import RenderMode

logger = get_logger(__name__)


def coerce_payload(result: Any) -> bytes:
    """Convert a capture script result into bytes."""
    if isinstance(result, str):
        return result.encode("utf-8")
    if isinstance(result, (bytes, bytearray)):
        return bytes(result)
    if isinstance(result, list):
        return bytes(result)
    raise TypeError(f"Unexpected capture result of type {type(result).__name__}")


class EngineSession:
    """A browser context and page bound to exactly one render."""

    def __init__(
        self, process: "EngineProcess", context: BrowserContext, page: Page, session_id: str
    ):
        self.process = process
        self.session_id = session_id
        self._context = context
        self._page = page
        self._destroyed = False
        self.logger: Any = logger.bind(component="engine_session", session_id=session_id)

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    async def navigate(self, url: str) -> None:
        """
        Load ``url`` and suspend until the page fires its load event.

        The load listener is removed on every exit path, so a late event
        cannot reach a session whose navigation was abandoned.
        """
        finished: asyncio.Future[None] = asyncio.get_running_loop().create_future()

        def on_load(_page: Page) -> None:
            if not finished.done():
                finished.set_result(None)

        self._page.on("load", on_load)
        try:
            # Deadlines are enforced by the caller, not by Playwright
            await self._page.goto(url, wait_until="commit", timeout=0)
            await finished
        finally:
            self._page.remove_listener("load", on_load)

    async def execute_in_page(
        self, script: PageScript, parameters: Optional[Dict[str, Any]] = None
    ) -> Any:
        """Evaluate a page script with its parameters and return its JSON result."""
        self.logger.debug("Executing page script", script=script.label)
        return await self._page.evaluate(script.source, parameters or {})

    async def title(self) -> str:
        return await self._page.title()

    async def print_to_pdf(self) -> bytes:
        return await self._page.pdf(print_background=True)

    async def capture(self, mode: RenderMode, title: str) -> bytes:
        """
        Capture the settled page.

        Args:
            mode: Render mode selecting vector or paged output
            title: Document title recorded in the output

        Returns:
            The rendered document bytes
        """
        result = await self.execute_in_page(CAPTURE_SCRIPT, {"mode": int(mode), "title": title})

        if result is None:
            return await self.print_to_pdf()

        return coerce_payload(result)

    async def destroy(self) -> None:
        """Release the page and its context. Safe to call more than once."""
        if self._destroyed:
            return

        self._destroyed = True
        try:
            await self._context.close()
        except Exception as e:
            self.logger.warning("Failed to close browser context", error=str(e))
        finally:
            self.process._forget(self)
            self.logger.debug("Engine session destroyed")


class EngineProcess:
    """Process-wide Chromium runtime shared by all engine sessions."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._lock = asyncio.Lock()
        self._sessions: Dict[str, EngineSession] = {}
        self.logger: Any = logger.bind(component="engine_process")  # structlog.BoundLoggerBase

    @property
    def initialized(self) -> bool:
        return self._browser is not None

    @property
    def session_count(self) -> int:
        return len(self._sessions)

    async def initialize(self) -> None:
        """Start Playwright and launch Chromium once; later calls are no-ops."""
        if self._browser is not None:
            return

        async with self._lock:
            if self._browser is not None:
                return

            launch_options: Dict[str, Any] = {
                "headless": self.settings.playwright_headless,
                "args": list(self.settings.browser_args),
            }
            if self.settings.browser_executable_path:
                launch_options["executable_path"] = str(self.settings.browser_executable_path)

            try:
                self._playwright = await async_playwright().start()
                self._browser = await self._playwright.chromium.launch(**launch_options)
            except Exception as e:
                self.logger.error("Failed to start rendering engine", error=str(e))
                if self._playwright:
                    await self._playwright.stop()
                    self._playwright = None
                raise RenderEngineError(f"Browser launch failed: {e}") from e

            self.logger.info(
                "Rendering engine started",
                headless=self.settings.playwright_headless,
                executable=launch_options.get("executable_path", "bundled"),
            )

    async def create_session(self) -> EngineSession:
        """Open a hidden page sized to the configured viewport."""
        await self.initialize()
        if self._browser is None:
            raise RenderEngineError("Browser is not running")

        context = await self._browser.new_context(
            viewport={
                "width": self.settings.viewport_width,
                "height": self.settings.viewport_height,
            }
        )
        try:
            page = await context.new_page()
        except Exception:
            await context.close()
            raise

        session = EngineSession(self, context, page, str(uuid.uuid4()))
        self._sessions[session.session_id] = session
        self.logger.debug("Engine session created", session_id=session.session_id)
        return session

    def _forget(self, session: EngineSession) -> None:
        self._sessions.pop(session.session_id, None)

    async def close(self) -> None:
        """Destroy leftover sessions, close Chromium and stop Playwright."""
        for session in list(self._sessions.values()):
            await session.destroy()

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        self.logger.info("Rendering engine closed")
