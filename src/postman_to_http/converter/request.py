"""Serialize a Postman request into an ``.http`` request block.

Format::

    <METHOD> <url>
    <Header-Key>: <value>
    ...
    <blank line>
    <body>

URL and body are loosely typed in exports: either a plain string or an
object carrying a ``raw`` field. Both are resolved with ``resolve_raw``.
"""

import json
import logging
from typing import Any

from postman_to_http.parser.base import Request

logger = logging.getLogger(__name__)


def resolve_raw(value: Any) -> str:
    """Return the textual form of a string-or-structured field.

    A mapping with a string ``raw`` yields that string, a plain string is
    returned as is, a missing value yields an empty string, and anything
    else falls back to its compact JSON text. Never raises.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, dict) and isinstance(value.get("raw"), str):
        return value["raw"]
    try:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError):
        return str(value)


def serialize_request(request: Request) -> str:
    """Render one request as text. Header order and duplicates are kept."""
    lines = [f"{request.method} {resolve_raw(request.url)}"]
    lines.extend(f"{h.key}: {h.value}" for h in request.header)
    text = "\n".join(lines) + "\n\n"

    if request.body is not None:
        if isinstance(request.body, dict):
            logger.debug("Request body mode: %s", request.body.get("mode", "<none>"))
        text += resolve_raw(request.body)
    return text
