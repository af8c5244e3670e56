"""Read-only attribute container for derived callables.

Both builders return a subclass of :class:`DerivedCallableMap`.  It exposes
exactly one attribute per registry entry and nothing else: any other public
name raises :class:`~derivekit.exceptions.MethodNotFoundError`.  Iteration,
``len``, ``in`` and ``dir`` work on the derived names so the object can be
inspected without touching its internals.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Callable, Iterator, Mapping

from derivekit.exceptions import MethodNotFoundError


class DerivedCallableMap:
    """Immutable name -> callable container with attribute access."""

    __slots__ = ("_callables",)

    def __init__(self, callables: Mapping[str, Callable[..., Any]]) -> None:
        object.__setattr__(self, "_callables", MappingProxyType(dict(callables)))

    def __getattr__(self, name: str) -> Callable[..., Any]:
        # Only reached when regular lookup fails.
        if name.startswith("__"):
            raise AttributeError(name)
        callables = object.__getattribute__(self, "_callables")
        try:
            return callables[name]
        except KeyError:
            raise MethodNotFoundError(name, callables) from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __iter__(self) -> Iterator[str]:
        return iter(self._callables)

    def __len__(self) -> int:
        return len(self._callables)

    def __contains__(self, name: object) -> bool:
        return name in self._callables

    def __dir__(self) -> list[str]:
        return sorted(self._callables)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(self._callables)})"
