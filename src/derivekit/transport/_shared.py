"""Helpers shared by the sync and async httpx transports."""

from __future__ import annotations

import json
from typing import Any, Mapping, Optional

import httpx

from derivekit.exceptions import AuthError, InvalidUsageError, NotFoundError, ServerError
from derivekit.output import get_output

SUPPORTED_OPTIONS = frozenset({"params", "headers", "json", "content", "data", "timeout"})
"""Per-call option keys understood by the httpx transports."""

RETRY_ERRORS = (httpx.ConnectError, httpx.TimeoutException, httpx.NetworkError)


def build_request_kwargs(
    method: str,
    url: str,
    options: Optional[Mapping[str, Any]],
    default_headers: Mapping[str, str],
) -> dict[str, Any]:
    """Translate per-call *options* into keyword arguments for ``httpx.Client.request``.

    Raises:
        InvalidUsageError: If *options* contains keys the transport does not
            understand.
    """
    options = dict(options or {})
    unknown = sorted(set(options) - SUPPORTED_OPTIONS)
    if unknown:
        raise InvalidUsageError(
            f"Unsupported request option(s): {', '.join(unknown)} "
            f"(supported: {', '.join(sorted(SUPPORTED_OPTIONS))})"
        )

    headers: dict[str, str] = {"Accept": "application/json"}
    headers.update(default_headers)
    headers.update(options.pop("headers", None) or {})

    kwargs: dict[str, Any] = {"method": method, "url": url, "headers": headers}
    for key in ("params", "json", "content", "data", "timeout"):
        if key in options and options[key] is not None:
            kwargs[key] = options[key]
    return kwargs


def map_response_error(response: httpx.Response) -> None:
    """Raise a typed exception for error HTTP status codes."""
    status = response.status_code
    if status < 400:
        return

    try:
        detail = response.json()
        if isinstance(detail, dict):
            msg = detail.get("message") or detail.get("error") or detail.get("detail") or ""
        else:
            msg = str(detail)
    except ValueError:
        msg = response.text[:200] if response.text else ""

    full_msg = f"HTTP {status}: {msg}" if msg else f"HTTP {status}"

    if status in (401, 403):
        raise AuthError(full_msg)
    if status == 404:
        raise NotFoundError(full_msg)
    raise ServerError(full_msg)


def dry_run_response(kwargs: Mapping[str, Any], base_url: Optional[str]) -> httpx.Response:
    """Print the request to stderr and return a synthetic 200 response."""
    output = get_output()
    method = kwargs["method"]
    url = kwargs["url"]
    if base_url and not url.startswith(("http://", "https://")):
        url = f"{base_url.rstrip('/')}/{url.lstrip('/')}"

    output.info(f"[dry-run] {method} {url}")
    for key, value in kwargs.get("headers", {}).items():
        output.info(f"  Header: {key}: {value}")
    for key, value in (kwargs.get("params") or {}).items():
        output.info(f"  Param: {key}={value}")
    if "data" in kwargs:
        output.info(f"  Body (form): {json.dumps(kwargs['data'], indent=2, default=str)}")
    elif "json" in kwargs:
        output.info(f"  Body (JSON): {json.dumps(kwargs['json'], indent=2, default=str)}")
    elif "content" in kwargs:
        output.info(f"  Body: {kwargs['content']}")

    return httpx.Response(
        status_code=200,
        headers={"content-type": "application/json"},
        json={"dry_run": True, "message": "Request was not sent"},
        request=httpx.Request(method=method, url=url),
    )
