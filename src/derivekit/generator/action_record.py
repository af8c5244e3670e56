"""The action record returned by every action creator."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterator

ACTION_NAME_KEY = "actionName"
PAYLOAD_KEY = "payload"

_NO_PAYLOAD: Any = object()


class ActionRecord(Mapping):
    """A plain, read-only record describing one domain event.

    Behaves as a mapping with the key ``actionName`` and, only for actions
    whose handler expects one, the key ``payload``.  A record without a
    payload has no ``payload`` key at all: ``record["payload"]`` raises
    :class:`KeyError` and ``record.payload`` raises :class:`AttributeError`.

    Records compare equal to any mapping with the same items, so tests and
    reducers can match them against dict literals::

        >>> ActionRecord("reset") == {"actionName": "reset"}
        True
        >>> ActionRecord("increment", {"value": 7})["payload"]
        {'value': 7}

    Args:
        action_name: The action's name (the handler's registry key).
        payload: The payload value.  Omit it for actions without payload;
            ``None`` is a legal payload.
    """

    __slots__ = ("_action_name", "_payload")

    def __init__(self, action_name: str, payload: Any = _NO_PAYLOAD) -> None:
        object.__setattr__(self, "_action_name", action_name)
        object.__setattr__(self, "_payload", payload)

    @property
    def action_name(self) -> str:
        return self._action_name

    @property
    def has_payload(self) -> bool:
        return self._payload is not _NO_PAYLOAD

    @property
    def payload(self) -> Any:
        if self._payload is _NO_PAYLOAD:
            raise AttributeError(f"Action '{self._action_name}' carries no payload")
        return self._payload

    def to_dict(self) -> dict[str, Any]:
        """Return a plain ``dict`` copy of the record."""
        return dict(self)

    def __getitem__(self, key: str) -> Any:
        if key == ACTION_NAME_KEY:
            return self._action_name
        if key == PAYLOAD_KEY and self.has_payload:
            return self._payload
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        yield ACTION_NAME_KEY
        if self.has_payload:
            yield PAYLOAD_KEY

    def __len__(self) -> int:
        return 2 if self.has_payload else 1

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("ActionRecord is read-only")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("ActionRecord is read-only")

    def __repr__(self) -> str:
        if self.has_payload:
            return f"ActionRecord(actionName={self._action_name!r}, payload={self._payload!r})"
        return f"ActionRecord(actionName={self._action_name!r})"
