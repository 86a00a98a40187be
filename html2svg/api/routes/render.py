"""
Render Routes
=============

The service's single route. ``/`` accepts a request body in any method,
renders it and answers with the document bytes.
"""

from typing import Any

from fastapi import APIRouter, Request, Response
from fastapi.responses import PlainTextResponse

from html2svg.config.logging import get_logger
from html2svg.core.request.parser import parse_render_request
from html2svg.core.rendering.orchestrator import render_page

logger = get_logger(__name__)

router = APIRouter(tags=["Rendering"])

RENDER_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.api_route("/", methods=RENDER_METHODS, response_class=Response)
async def render(request: Request) -> Response:
    """Render the page described by the request body."""
    log: Any = logger.bind(request_id=getattr(request.state, "request_id", None))

    # Only the bare root path is routed
    if request.url.query:
        return PlainTextResponse("Not Found", status_code=404)

    body = await request.body()
    render_request = parse_render_request(body)

    if render_request is None:
        log.info("Rejected render request", body_length=len(body))
        return PlainTextResponse("Invalid request params", status_code=400)

    outcome = await render_page(
        request.app.state.engine, render_request, request.app.state.settings
    )

    failure = outcome.error
    if failure is not None:
        log.error(
            "Internal server error",
            url=render_request.url,
            kind=failure.kind.value,
            error=failure.detail,
        )
        return PlainTextResponse("Internal Server Error", status_code=500)

    log.info("Render served", url=render_request.url, mime=outcome.mime)
    return Response(content=outcome.payload, media_type=outcome.mime)
