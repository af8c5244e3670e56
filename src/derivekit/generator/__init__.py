"""Builders that turn declarative registries into objects of derived callables.

Typical usage::

    from derivekit.generator import create_actions, create_api

    api = create_api(endpoints, transport)
    api.useGetPostQuery()

    actions = create_actions(reducers)
    actions.increment({"value": 7})

Sub-modules:

* :mod:`~derivekit.generator.naming` -- key validation and name derivation.
* :mod:`~derivekit.generator.callable_map` -- the read-only container both
  builders return.
* :mod:`~derivekit.generator.api_builder` -- endpoint registry -> query callables.
* :mod:`~derivekit.generator.action_builder` -- handler registry -> action creators.
* :mod:`~derivekit.generator.action_record` -- the record action creators return.
"""

from derivekit.generator.action_builder import (
    ActionBuilder,
    ActionCreators,
    HandlerDescriptor,
    create_actions,
    make_action_creator,
)
from derivekit.generator.action_record import ActionRecord
from derivekit.generator.api_builder import ApiBuilder, ApiObject, create_api
from derivekit.generator.naming import derive_name, derive_names, validate_key

__all__ = [
    "ActionBuilder",
    "ActionCreators",
    "ActionRecord",
    "ApiBuilder",
    "ApiObject",
    "HandlerDescriptor",
    "create_actions",
    "create_api",
    "derive_name",
    "derive_names",
    "make_action_creator",
    "validate_key",
]
