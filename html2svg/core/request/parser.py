"""
Request Parser
==============

Shape validation for render request bodies. A body is either JSON or plain
text; plain text and JSON strings are taken as the URL with default
options, JSON objects must carry a string ``url`` next to their options.

Only the shape is checked here. Whether ``format`` names a supported output
is decided when the render starts.
"""

from typing import Any, Optional, Union
import json

from pydantic import ValidationError

from html2svg.config.logging import get_logger
from html2svg.models.schemas import RenderOptions, RenderRequest

logger = get_logger(__name__)


def parse_json(data: str) -> Any:
    """Decode ``data`` as JSON, falling back to the text itself."""
    try:
        return json.loads(data)
    except json.JSONDecodeError:
        return data


def build_render_request(data: Any) -> Optional[RenderRequest]:
    """
    Build a render request from decoded input.

    Args:
        data: A URL string, or a mapping with a ``url`` key and option keys

    Returns:
        RenderRequest, or None when the input has an unrecognized shape
    """
    if not data:
        return None

    if isinstance(data, str):
        return RenderRequest(url=data)

    if not isinstance(data, dict):
        return None

    options = dict(data)
    url = options.pop("url", None)

    if not isinstance(url, str) or not url:
        return None

    try:
        return RenderRequest(url=url, options=RenderOptions(**options))
    except ValidationError as e:
        logger.debug("Rejected render options", url=url, errors=e.error_count())
        return None


def parse_render_request(raw: Union[str, bytes]) -> Optional[RenderRequest]:
    """
    Validate a raw request body.

    Args:
        raw: Request body as received

    Returns:
        RenderRequest, or None when the body is not a valid request
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")

    return build_render_request(parse_json(raw))
