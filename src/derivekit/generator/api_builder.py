"""Build an API object of query callables from an endpoint registry.

**Algorithm summary**

1. Snapshot the registry and coerce every value into a frozen
   :class:`~derivekit.models.EndpointDescriptor`.
2. Derive all public names with the builder's naming rule
   (``getPost`` -> ``useGetPostQuery`` by default), rejecting collisions.
3. Bind one query callable per entry.  Calling it delegates to
   ``transport.send(url, method, options)``; nothing is sent at build time.

When the transport's ``send`` is a coroutine function the query callables
are coroutine functions too, so the same registry serves blocking and
async code.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from pydantic import ValidationError

from derivekit.exceptions import InvalidDescriptorError
from derivekit.generator.callable_map import DerivedCallableMap
from derivekit.generator.naming import derive_names
from derivekit.models import QUERY_HOOK_RULE, EndpointDescriptor, NamingRule
from derivekit.transport.base import is_async_transport


class ApiObject(DerivedCallableMap):
    """Query callables derived from an endpoint registry.

    Exposes exactly one attribute per registry entry; any other name raises
    :class:`~derivekit.exceptions.MethodNotFoundError`.
    """

    __slots__ = ()


class ApiBuilder:
    """Derives :class:`ApiObject` instances from endpoint registries.

    Args:
        naming: Rule turning registry keys into method names.  Defaults to
            :data:`~derivekit.models.QUERY_HOOK_RULE`.

    Example::

        builder = ApiBuilder()
        api = builder.build(
            {"getPost": {"url": "https://myapp.de/api/posts", "method": "GET"}},
            transport,
        )
        response = api.useGetPostQuery({"params": {"page": 2}})
    """

    def __init__(self, naming: NamingRule = QUERY_HOOK_RULE) -> None:
        self.naming = naming

    def build(self, endpoints: Mapping[str, Any], transport: Any) -> ApiObject:
        """Build the API object for *endpoints*, sending through *transport*.

        Args:
            endpoints: Mapping of endpoint key to an
                :class:`~derivekit.models.EndpointDescriptor` or a mapping
                with ``url`` and ``method``.
            transport: Object with a ``send(url, method, options)`` method
                (see :mod:`derivekit.transport.base`).

        Returns:
            An :class:`ApiObject` with one query callable per endpoint.

        Raises:
            TypeError: If *transport* has no callable ``send``.
            InvalidKeyError: For an empty or malformed endpoint key.
            DuplicateDerivedNameError: If two keys derive to the same name.
            InvalidDescriptorError: If a descriptor is malformed.
        """
        if not callable(getattr(transport, "send", None)):
            raise TypeError(
                f"Transport {type(transport).__name__} has no callable 'send' method"
            )

        snapshot = dict(endpoints)
        names = derive_names(snapshot, self.naming)
        use_async = is_async_transport(transport)

        queries: dict[str, Callable[..., Any]] = {}
        for key, name in names.items():
            descriptor = _coerce_descriptor(key, snapshot[key])
            queries[name] = _make_query(name, descriptor, transport, use_async)
        return ApiObject(queries)


def create_api(
    endpoints: Mapping[str, Any],
    transport: Any,
    naming: NamingRule = QUERY_HOOK_RULE,
) -> ApiObject:
    """Shortcut for ``ApiBuilder(naming).build(endpoints, transport)``."""
    return ApiBuilder(naming).build(endpoints, transport)


def _coerce_descriptor(key: str, value: Any) -> EndpointDescriptor:
    """Return *value* as an :class:`EndpointDescriptor`, naming *key* on failure."""
    if isinstance(value, EndpointDescriptor):
        return value
    if not isinstance(value, Mapping):
        raise InvalidDescriptorError(
            f"Endpoint '{key}' must be a mapping with 'url' and 'method', "
            f"got {type(value).__name__}"
        )
    try:
        return EndpointDescriptor.model_validate(dict(value))
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'descriptor'}: {err['msg']}"
            for err in exc.errors()
        )
        raise InvalidDescriptorError(f"Invalid endpoint '{key}': {problems}") from exc


def _make_query(
    name: str,
    descriptor: EndpointDescriptor,
    transport: Any,
    use_async: bool,
) -> Callable[..., Any]:
    """Bind a query callable for one endpoint."""
    url = descriptor.url
    method = descriptor.method.value

    if use_async:

        async def query(options: Optional[Mapping[str, Any]] = None) -> Any:
            return await transport.send(url, method, options)

    else:

        def query(options: Optional[Mapping[str, Any]] = None) -> Any:
            return transport.send(url, method, options)

    query.__name__ = query.__qualname__ = name
    query.__doc__ = f"Send {method} {url}."
    query.endpoint = descriptor  # type: ignore[attr-defined]
    return query
