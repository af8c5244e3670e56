"""Build action creators from a registry of reducer handlers.

Each handler becomes a creator exposed under the handler's own key.  What the
creator accepts depends on whether the handler expects a payload:

* ``expects_payload`` -- ``creator(payload)`` returns
  ``{"actionName": key, "payload": payload}``;
* otherwise -- ``creator()`` returns ``{"actionName": key}`` with no
  ``payload`` key at all.

Calling a creator with the wrong number of arguments raises
:class:`~derivekit.exceptions.ArityMismatchError`.

Payload expectation is best declared explicitly with
:meth:`HandlerDescriptor.with_payload` / :meth:`HandlerDescriptor.without_payload`.
A bare callable in the registry falls back to :meth:`HandlerDescriptor.infer`,
which counts the handler's required positional parameters.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from derivekit.exceptions import ArityMismatchError, InvalidDescriptorError
from derivekit.generator.action_record import ActionRecord
from derivekit.generator.callable_map import DerivedCallableMap
from derivekit.generator.naming import derive_name, derive_names
from derivekit.models import IDENTITY_RULE

_PAYLOAD_ARG = "payload"

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


@dataclass(frozen=True)
class HandlerDescriptor:
    """A reducer handler plus whether its action carries a payload.

    Attributes:
        handler: The reducer function.  derivekit never calls it; it is kept
            so callers can pair creators with their reducers.
        expects_payload: ``True`` when the action carries a payload.
    """

    handler: Callable[..., Any]
    expects_payload: bool

    @classmethod
    def with_payload(cls, handler: Callable[..., Any]) -> HandlerDescriptor:
        return cls(_require_callable(handler), True)

    @classmethod
    def without_payload(cls, handler: Callable[..., Any]) -> HandlerDescriptor:
        return cls(_require_callable(handler), False)

    @classmethod
    def infer(cls, handler: Callable[..., Any]) -> HandlerDescriptor:
        """Derive ``expects_payload`` from the handler's signature.

        Counts positional parameters without a default value, so
        ``def increment(action)`` expects a payload while ``def reset()``
        and ``def reset(action=None)`` do not.

        Raises:
            InvalidDescriptorError: If *handler* is not callable or its
                signature cannot be inspected.
        """
        _require_callable(handler)
        try:
            signature = inspect.signature(handler)
        except (TypeError, ValueError) as exc:
            raise InvalidDescriptorError(
                f"Cannot inspect the signature of handler {handler!r}; "
                "declare it with HandlerDescriptor.with_payload or without_payload"
            ) from exc
        required = [
            param
            for param in signature.parameters.values()
            if param.kind in _POSITIONAL and param.default is inspect.Parameter.empty
        ]
        return cls(handler, len(required) >= 1)


class ActionCreators(DerivedCallableMap):
    """Action creators derived from a handler registry, one per handler key."""

    __slots__ = ()


class ActionBuilder:
    """Derives :class:`ActionCreators` from handler registries.

    Example::

        def increment(action): ...
        def reset(): ...

        actions = ActionBuilder().build({"increment": increment, "reset": reset})
        actions.increment({"value": 7})
        # {'actionName': 'increment', 'payload': {'value': 7}}
        actions.reset()
        # {'actionName': 'reset'}
    """

    def build(self, handlers: Mapping[str, Any]) -> ActionCreators:
        """Build one action creator per entry of *handlers*.

        Args:
            handlers: Mapping of action name to a :class:`HandlerDescriptor`
                or a bare callable (payload expectation inferred).

        Raises:
            InvalidKeyError: For an empty or malformed handler key.
            DuplicateDerivedNameError: If two keys derive to the same name.
            InvalidDescriptorError: If a handler is not usable.
        """
        snapshot = dict(handlers)
        names = derive_names(snapshot, IDENTITY_RULE)
        creators = {
            name: _make_creator(key, _coerce_handler(key, snapshot[key]))
            for key, name in names.items()
        }
        return ActionCreators(creators)


def create_actions(handlers: Mapping[str, Any]) -> ActionCreators:
    """Shortcut for ``ActionBuilder().build(handlers)``."""
    return ActionBuilder().build(handlers)


def make_action_creator(action_name: str, handler: Any) -> Callable[..., ActionRecord]:
    """Build a single action creator for *handler*.

    Args:
        action_name: The ``actionName`` of every record the creator returns.
        handler: A :class:`HandlerDescriptor` or a bare callable.

    Raises:
        InvalidKeyError: If *action_name* is not a legal name.
        InvalidDescriptorError: If the handler is not usable.
    """
    derive_name(action_name, IDENTITY_RULE)
    return _make_creator(action_name, _coerce_handler(action_name, handler))


def _require_callable(handler: Any) -> Callable[..., Any]:
    if not callable(handler):
        raise InvalidDescriptorError(
            f"Handler must be callable, got {type(handler).__name__}"
        )
    return handler


def _coerce_handler(key: str, value: Any) -> HandlerDescriptor:
    if isinstance(value, HandlerDescriptor):
        return value
    if not callable(value):
        raise InvalidDescriptorError(
            f"Handler '{key}' must be callable, got {type(value).__name__}"
        )
    return HandlerDescriptor.infer(value)


def _count_arguments(action_name: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> int:
    """Number of arguments passed; only ``payload`` is accepted by keyword."""
    unexpected = sorted(set(kwargs) - {_PAYLOAD_ARG})
    if unexpected:
        raise TypeError(f"{action_name}() got an unexpected keyword argument '{unexpected[0]}'")
    return len(args) + len(kwargs)


def _make_creator(action_name: str, descriptor: HandlerDescriptor) -> Callable[..., ActionRecord]:
    """Bind the creator function for one action."""
    if descriptor.expects_payload:

        def create(*args: Any, **kwargs: Any) -> ActionRecord:
            received = _count_arguments(action_name, args, kwargs)
            if received != 1:
                raise ArityMismatchError(action_name, expected=1, received=received)
            return ActionRecord(action_name, args[0] if args else kwargs[_PAYLOAD_ARG])

        parameters = [inspect.Parameter(_PAYLOAD_ARG, inspect.Parameter.POSITIONAL_OR_KEYWORD)]
    else:

        def create(*args: Any, **kwargs: Any) -> ActionRecord:
            received = _count_arguments(action_name, args, kwargs)
            if received:
                raise ArityMismatchError(action_name, expected=0, received=received)
            return ActionRecord(action_name)

        parameters = []

    create.__name__ = create.__qualname__ = action_name
    create.__doc__ = f"Create a '{action_name}' action."
    create.__signature__ = inspect.Signature(  # type: ignore[attr-defined]
        parameters, return_annotation=ActionRecord
    )
    create.action_name = action_name  # type: ignore[attr-defined]
    create.expects_payload = descriptor.expects_payload  # type: ignore[attr-defined]
    return create
