"""derivekit -- derive callables from declarative registries.

Two builders turn a registry declared once at startup into an object of
generated callables:

* :func:`create_api` maps endpoint descriptors to query callables named by a
  rule (``getPost`` -> ``useGetPostQuery``) that send through a transport.
* :func:`create_actions` maps reducer handlers to action creators that build
  ``{"actionName": ..., "payload": ...}`` records, with or without payload
  depending on the handler.

Naming collisions and malformed keys fail at build time; undeclared names and
wrong-arity calls fail at call time.

Typical usage::

    from derivekit import create_actions, create_api
    from derivekit.transport import HttpxTransport

    with HttpxTransport() as transport:
        api = create_api(endpoints, transport)
        api.useGetPostQuery()

    actions = create_actions(reducers)
    actions.increment({"value": 7})

Modules:
    generator: the builders, naming rules and action records.
    transport: the ``send`` protocol and httpx-backed transports.
    registry: loading endpoint and handler registries.
    models: Pydantic models shared across the package.
    config: XDG-aware configuration resolution.
    exceptions: exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting with Rich.
    app: Typer CLI entry point.
"""

__version__ = "0.1.0"

from derivekit.generator import (  # noqa: E402
    ActionBuilder,
    ActionRecord,
    ApiBuilder,
    HandlerDescriptor,
    create_actions,
    create_api,
    make_action_creator,
)
from derivekit.models import (  # noqa: E402
    IDENTITY_RULE,
    QUERY_HOOK_RULE,
    EndpointDescriptor,
    HTTPMethod,
    NamingRule,
)

__all__ = [
    "ActionBuilder",
    "ActionRecord",
    "ApiBuilder",
    "EndpointDescriptor",
    "HTTPMethod",
    "HandlerDescriptor",
    "IDENTITY_RULE",
    "NamingRule",
    "QUERY_HOOK_RULE",
    "create_actions",
    "create_api",
    "make_action_creator",
]
