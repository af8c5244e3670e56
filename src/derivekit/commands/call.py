"""``derivekit call`` -- invoke one derived query against a live API.

The command builds the full API object from the registry (so collisions are
caught exactly as in library use), looks up the requested callable by its
derived name, and sends it through :class:`~derivekit.transport.HttpxTransport`.
"""

from __future__ import annotations

import json
from typing import Any, Optional

import typer

from derivekit.exceptions import DeriveKitError, InvalidUsageError
from derivekit.output import debug, error


def call_command(
    ctx: typer.Context,
    registry: str = typer.Argument(..., help="Registry file, URL, or '-' for stdin."),
    name: str = typer.Argument(..., help="Derived callable name, e.g. useGetPostQuery."),
    param: Optional[list[str]] = typer.Option(
        None, "--param", "-p", help="Query parameter as key=value (repeatable)."
    ),
    header: Optional[list[str]] = typer.Option(
        None, "--header", "-H", help="Request header as key:value (repeatable)."
    ),
    body: Optional[str] = typer.Option(None, "--body", "-b", help="JSON request body."),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Override the base URL."),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Request timeout in seconds."),
) -> None:
    """Call a derived query and print the response.

    Example::

        derivekit call endpoints.yaml useGetPostQuery -p page=2
        derivekit --dry-run call endpoints.yaml useUpdateUserQuery --body '{"name": "Ada"}'
    """
    from derivekit.config import resolve_config
    from derivekit.generator import create_api
    from derivekit.registry import load_endpoints
    from derivekit.transport import HttpxTransport
    from derivekit.transport.response import format_api_response

    obj = ctx.obj or {}
    try:
        options = _build_options(param or [], header or [], body)
        config = resolve_config(cli_base_url=base_url, cli_timeout=timeout)
        endpoints = load_endpoints(registry)

        with HttpxTransport(config.request, dry_run=obj.get("dry_run", False)) as transport:
            api = create_api(endpoints, transport, naming=config.naming)
            query = getattr(api, name)
            debug(f"Calling {name}: {query.endpoint.method.value} {query.endpoint.url}")
            response = query(options)
    except DeriveKitError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    format_api_response(response)


def _build_options(
    params: list[str],
    headers: list[str],
    body: Optional[str],
) -> Optional[dict[str, Any]]:
    """Turn CLI flags into transport options, or ``None`` when none were given."""
    options: dict[str, Any] = {}
    if params:
        options["params"] = dict(_split_pair(item, "=", "--param") for item in params)
    if headers:
        options["headers"] = dict(_split_pair(item, ":", "--header") for item in headers)
    if body is not None:
        try:
            options["json"] = json.loads(body)
        except json.JSONDecodeError as exc:
            raise InvalidUsageError(f"--body is not valid JSON: {exc}") from exc
    return options or None


def _split_pair(item: str, separator: str, flag: str) -> tuple[str, str]:
    key, sep, value = item.partition(separator)
    if not sep or not key.strip():
        raise InvalidUsageError(f"{flag} expects key{separator}value, got {item!r}")
    return key.strip(), value.strip()
