"""The transport contract consumed by :class:`~derivekit.generator.ApiBuilder`.

A transport is anything with a ``send(url, method, options)`` method.  The
builder never inspects the response or the options; it hands over the
descriptor's URL and method plus whatever the caller passed, and returns
the transport's result unchanged.  Errors raised by ``send`` propagate
through the derived callables untouched.
"""

from __future__ import annotations

import inspect
from typing import Any, Awaitable, Mapping, Optional, Protocol, runtime_checkable


@runtime_checkable
class Transport(Protocol):
    """Blocking transport: ``send`` returns the response."""

    def send(
        self,
        url: str,
        method: str,
        options: Optional[Mapping[str, Any]] = None,
    ) -> Any: ...


@runtime_checkable
class AsyncTransport(Protocol):
    """Non-blocking transport: ``send`` is a coroutine function."""

    def send(
        self,
        url: str,
        method: str,
        options: Optional[Mapping[str, Any]] = None,
    ) -> Awaitable[Any]: ...


def is_async_transport(transport: Any) -> bool:
    """Return ``True`` if *transport*'s ``send`` is a coroutine function."""
    return inspect.iscoroutinefunction(getattr(transport, "send", None))
