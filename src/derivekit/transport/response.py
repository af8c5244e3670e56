"""Response formatting bridge -- maps :class:`httpx.Response` to the output system.

Used by ``derivekit call`` after a derived query returns: the status line goes
to stderr and the body to stdout, formatted per ``--json`` / ``--plain``.
"""

from __future__ import annotations

from typing import Any

import httpx

from derivekit.output import get_output


def format_api_response(response: httpx.Response) -> None:
    """Print the status line to stderr and the decoded body to stdout."""
    output = get_output()
    output.info(f"HTTP {response.status_code} {response.reason_phrase or ''}".rstrip())

    content_type = response.headers.get("content-type", "application/json")
    data = extract_response_data(response)
    if data is not None:
        output.format_response(data, content_type)


def extract_response_data(response: httpx.Response) -> Any:
    """Return the JSON-decoded body, the raw text, or ``None`` for an empty body."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
