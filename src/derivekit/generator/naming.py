"""Derive public callable names from registry keys.

Every builder exposes its derived callables under names computed here, so
the rules below define what a legal registry key is:

* the key is a non-empty ``str``;
* it is an ASCII identifier fragment (letters, digits, underscore, not
  starting with a digit);
* it does not start with an underscore, since those names belong to the
  container object itself;
* the derived name is not a Python keyword (``actions.import`` would not
  parse).

:func:`derive_names` checks a whole registry eagerly so that a collision
(``getPost`` and ``GetPost`` both becoming ``useGetPostQuery``) fails the
build instead of surfacing on first call.
"""

from __future__ import annotations

import keyword
import re
from typing import Any, Iterable

from derivekit.exceptions import DuplicateDerivedNameError, InvalidKeyError
from derivekit.models import NamingRule

_KEY_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")


def validate_key(key: Any) -> str:
    """Return *key* unchanged if it is a legal registry key.

    Raises:
        InvalidKeyError: If the key is empty, not a string, or not an
            identifier fragment.
    """
    if not isinstance(key, str) or not key:
        raise InvalidKeyError(f"Registry keys must be non-empty strings, got {key!r}")
    if key.startswith("_"):
        raise InvalidKeyError(
            f"Registry key {key!r} starts with an underscore; those names are reserved"
        )
    if not _KEY_PATTERN.match(key):
        raise InvalidKeyError(
            f"Registry key {key!r} is not an identifier "
            "(letters, digits and underscores, starting with a letter)"
        )
    return key


def derive_name(key: Any, rule: NamingRule) -> str:
    """Derive the public name for *key* under *rule*.

    Example::

        >>> derive_name("getPost", QUERY_HOOK_RULE)
        'useGetPostQuery'
        >>> derive_name("increment", IDENTITY_RULE)
        'increment'

    Raises:
        InvalidKeyError: If the key is illegal or derives to a keyword.
    """
    name = rule.apply(validate_key(key))
    if keyword.iskeyword(name):
        raise InvalidKeyError(
            f"Registry key {key!r} derives to the reserved word '{name}'"
        )
    return name


def derive_names(keys: Iterable[Any], rule: NamingRule) -> dict[str, str]:
    """Derive names for every key, in order, rejecting collisions.

    Returns:
        A dict mapping each source key to its derived name.

    Raises:
        InvalidKeyError: For the first illegal key.
        DuplicateDerivedNameError: If two keys derive to the same name.
    """
    derived: dict[str, str] = {}
    owners: dict[str, str] = {}
    for key in keys:
        name = derive_name(key, rule)
        if name in owners:
            raise DuplicateDerivedNameError(name, owners[name], key)
        owners[name] = key
        derived[key] = name
    return derived
