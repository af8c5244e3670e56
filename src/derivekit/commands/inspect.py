"""Inspect commands -- show what a registry derives.

``derivekit endpoints`` lists the query callables an endpoint registry file
produces; ``derivekit actions`` lists the action creators a handler registry
produces and whether each expects a payload.  Both build eagerly, so key
problems and name collisions are reported exactly as the library would
raise them.
"""

from __future__ import annotations

from typing import Optional

import typer
from pydantic import ValidationError

from derivekit.exceptions import DeriveKitError, InvalidUsageError
from derivekit.models import NamingRule
from derivekit.output import debug, error, get_output


def endpoints_command(
    registry: str = typer.Argument(..., help="Registry file, URL, or '-' for stdin."),
    prefix: Optional[str] = typer.Option(None, "--prefix", help="Name prefix (default from config)."),
    suffix: Optional[str] = typer.Option(None, "--suffix", help="Name suffix (default from config)."),
    no_capitalize: bool = typer.Option(
        False, "--no-capitalize", help="Keep the key's first letter as is."
    ),
) -> None:
    """List the query callables derived from an endpoint registry.

    Example::

        derivekit endpoints endpoints.yaml
        derivekit --json endpoints endpoints.yaml --prefix fetch --suffix ""
    """
    from derivekit.config import resolve_config
    from derivekit.generator.naming import derive_names
    from derivekit.registry import load_endpoints

    try:
        config = resolve_config()
        rule = _naming_rule(config.naming, prefix, suffix, no_capitalize)
        debug(f"Naming rule: prefix={rule.prefix!r} suffix={rule.suffix!r} capitalize={rule.capitalize}")
        endpoints = load_endpoints(registry)
        names = derive_names(endpoints, rule)
    except DeriveKitError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    rows = [
        [key, endpoints[key].method.value, endpoints[key].url, name]
        for key, name in names.items()
    ]
    get_output().print_table(
        ["Key", "Method", "URL", "Callable"],
        rows,
        title=f"Endpoints ({len(rows)})",
    )


def actions_command(
    target: str = typer.Argument(..., help="Handler registry as 'package.module:attribute'."),
) -> None:
    """List the action creators derived from a handler registry.

    Example::

        derivekit actions myapp.reducers:reducers
    """
    from derivekit.generator import ActionBuilder
    from derivekit.registry import load_handlers

    try:
        handlers = load_handlers(target)
        creators = ActionBuilder().build(handlers)
    except DeriveKitError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    rows = [
        [name, "yes" if getattr(creators, name).expects_payload else "no"]
        for name in creators
    ]
    get_output().print_table(
        ["Action", "Payload"],
        rows,
        title=f"Actions ({len(rows)})",
    )


def _naming_rule(
    base: NamingRule,
    prefix: Optional[str],
    suffix: Optional[str],
    no_capitalize: bool,
) -> NamingRule:
    """Apply CLI overrides to *base*, validating the result."""
    overrides = {
        key: value
        for key, value in (
            ("prefix", prefix),
            ("suffix", suffix),
            ("capitalize", False if no_capitalize else None),
        )
        if value is not None
    }
    try:
        return NamingRule.model_validate({**base.model_dump(), **overrides})
    except ValidationError as exc:
        problems = "; ".join(f"--{err['loc'][0]}: {err['msg']}" for err in exc.errors())
        raise InvalidUsageError(f"Invalid naming option: {problems}") from exc
