"""Exception hierarchy for derivekit.

All exceptions inherit from :class:`DeriveKitError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`derivekit.exit_codes`.
The builders raise these directly and never log or swallow them; the CLI
entry point in :func:`derivekit.app.main` catches ``DeriveKitError`` and exits
with the matching code.

Subclass hierarchy::

    DeriveKitError (exit 1)
    +-- InvalidUsageError          (exit 2)
    +-- ArityMismatchError         (exit 2, also a TypeError)
    +-- MethodNotFoundError        (exit 4, also an AttributeError)
    +-- RegistryError              (exit 7)
    |   +-- InvalidKeyError
    |   +-- DuplicateDerivedNameError
    |   +-- InvalidDescriptorError
    |   +-- RegistryParseError
    +-- AuthError                  (exit 3)
    +-- NotFoundError              (exit 4)
    +-- ServerError                (exit 5)
    +-- ConnectionError_           (exit 6)
    +-- ConfigError                (exit 1)
"""

from __future__ import annotations

from typing import Iterable

from derivekit.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_REGISTRY_ERROR,
    EXIT_SERVER_ERROR,
)


class DeriveKitError(Exception):
    """Base exception for all derivekit errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(DeriveKitError):
    """Raised for invalid CLI arguments or unsupported transport options."""

    exit_code = EXIT_INVALID_USAGE


class ArityMismatchError(DeriveKitError, TypeError):
    """Raised when an action creator is called with the wrong number of arguments.

    A payload creator needs exactly one argument and a no-payload creator
    takes none.  Subclasses :class:`TypeError` so that it reads like any
    other bad call in a traceback.

    Attributes:
        action_name: The action whose creator was misused.
        expected: Number of arguments the creator accepts.
        received: Number of arguments actually passed.
    """

    exit_code = EXIT_INVALID_USAGE

    def __init__(self, action_name: str, expected: int, received: int):
        if expected:
            detail = "expects a payload argument"
        else:
            detail = "takes no payload"
        super().__init__(
            f"Action creator '{action_name}' {detail} "
            f"(got {received} argument{'' if received == 1 else 's'})"
        )
        self.action_name = action_name
        self.expected = expected
        self.received = received


class MethodNotFoundError(DeriveKitError, AttributeError):
    """Raised when an undeclared name is looked up on a derived-callable object.

    Subclasses :class:`AttributeError` so ``hasattr`` and ``getattr`` with a
    default behave as usual.

    Attributes:
        method_name: The name that was looked up.
        available: The names the object actually exposes.
    """

    exit_code = EXIT_NOT_FOUND

    def __init__(self, method_name: str, available: Iterable[str] = ()):
        self.method_name = method_name
        self.available = sorted(available)
        message = f"'{method_name}' is not a derived method"
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message)


class RegistryError(DeriveKitError):
    """Base class for problems with a registry, raised at build or load time."""

    exit_code = EXIT_REGISTRY_ERROR


class InvalidKeyError(RegistryError):
    """Raised for an empty or malformed registry key."""


class DuplicateDerivedNameError(RegistryError):
    """Raised when two registry keys derive to the same public name.

    Attributes:
        name: The colliding derived name.
        keys: The two source keys, in registry order.
    """

    def __init__(self, name: str, first_key: str, second_key: str):
        super().__init__(
            f"Keys '{first_key}' and '{second_key}' both derive to '{name}'"
        )
        self.name = name
        self.keys = (first_key, second_key)


class InvalidDescriptorError(RegistryError):
    """Raised when an endpoint descriptor or handler cannot be used."""


class RegistryParseError(RegistryError):
    """Raised when a registry file, URL, or import target cannot be loaded."""


class AuthError(DeriveKitError):
    """Raised by the httpx transports on HTTP 401 / 403."""

    exit_code = EXIT_AUTH_FAILURE


class NotFoundError(DeriveKitError):
    """Raised by the httpx transports on HTTP 404."""

    exit_code = EXIT_NOT_FOUND


class ServerError(DeriveKitError):
    """Raised by the httpx transports on 5xx and unmapped 4xx responses."""

    exit_code = EXIT_SERVER_ERROR


class ConnectionError_(DeriveKitError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class ConfigError(DeriveKitError):
    """Raised for unreadable or invalid configuration files."""

    exit_code = EXIT_GENERIC_FAILURE
