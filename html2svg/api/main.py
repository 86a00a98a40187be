"""
FastAPI Application
==================

HTTP service rendering one page per request. The application owns the
process-wide rendering engine: it is created with the app, started by the
first render and closed when the server shuts down.
"""

from contextlib import asynccontextmanager
import sys
import uuid
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request, Response
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from html2svg import __version__
from html2svg.config.logging import get_logger, setup_logging
from html2svg.config.settings import Settings, get_settings
from html2svg.core.rendering.engine import EngineProcess
from html2svg.api.routes.render import router as render_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting html2svg service", version=__version__)

    if getattr(app.state, "engine", None) is None:
        app.state.engine = EngineProcess(app.state.settings)

    try:
        yield
    finally:
        logger.info("Shutting down html2svg service")
        try:
            await app.state.engine.close()
        except Exception as e:
            logger.error("Error closing rendering engine", error=str(e))


def create_app(
    settings: Optional[Settings] = None, engine: Optional[EngineProcess] = None
) -> FastAPI:
    """
    Application factory.

    Args:
        settings: Settings to use instead of the environment
        engine: Engine process to render with; created at startup when omitted

    Returns:
        FastAPI application instance
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="html2svg",
        description="Render web pages to SVG or PDF documents",
        version=__version__,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.engine = engine

    @app.middleware("http")
    async def add_request_id(request: Request, call_next) -> Response:  # type: ignore
        """Add request ID to all requests."""
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id

        return response

    @app.exception_handler(StarletteHTTPException)
    async def plain_http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> PlainTextResponse:
        """Answer routing errors with a plain-text reason."""
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
        """General exception handler for unexpected errors."""
        logger.error(
            "Unhandled exception",
            exception=str(exc),
            request_id=getattr(request.state, "request_id", None),
            exc_info=True,
        )
        return PlainTextResponse("Internal Server Error", status_code=500)

    app.include_router(render_router)
    return app


def run_server(settings: Optional[Settings] = None) -> None:
    """Serve the application on the configured unix socket or host and port."""
    settings = settings or get_settings()
    listen = settings.server_options

    logger.info("Listening", address=listen.describe())
    uvicorn.run(
        create_app(settings),
        log_config=None,
        log_level=settings.log_level.lower(),
        access_log=settings.debug,
        **listen.uvicorn_kwargs(),
    )


def main() -> int:
    """Console entry point for ``html2svg-server``."""
    try:
        settings = get_settings()
        setup_logging(settings)
        run_server(settings)
    except Exception as e:
        logger.error("Server failed", error=str(e), exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
