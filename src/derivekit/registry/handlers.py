"""Resolve a handler registry from an import target.

Handlers are code, so they are referenced rather than parsed: a target has
the form ``package.module:attribute``.  The attribute may be

* a mapping of action name to handler (or
  :class:`~derivekit.generator.HandlerDescriptor`),
* a class, which is instantiated without arguments so that its methods are
  bound (``self`` is not counted as a payload), or
* any other object (a module, a namespace) whose public callable attributes
  are the handlers.
"""

from __future__ import annotations

import importlib
import inspect
from typing import Any

from derivekit.exceptions import RegistryParseError


def load_handlers(target: str) -> dict[str, Any]:
    """Import *target* and return its handler registry.

    Raises:
        RegistryParseError: If the target is malformed, cannot be imported,
            or resolves to nothing usable.
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise RegistryParseError(
            f"Handler target {target!r} must look like 'package.module:attribute'"
        )

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise RegistryParseError(f"Cannot import module '{module_name}': {exc}") from exc

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError:
            raise RegistryParseError(
                f"Module '{module_name}' has no attribute '{attr_path}'"
            ) from None

    if isinstance(obj, dict):
        return dict(obj)

    if inspect.isclass(obj):
        try:
            obj = obj()
        except TypeError as exc:
            raise RegistryParseError(
                f"Cannot instantiate handler class {target!r} without arguments: {exc}"
            ) from exc

    handlers = {
        name: value
        for name, value in inspect.getmembers(obj)
        if not name.startswith("_") and callable(value)
    }
    if not handlers:
        raise RegistryParseError(f"Target {target!r} exposes no handlers")
    return handlers
