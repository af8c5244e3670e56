"""Canonical Pydantic models shared across derivekit modules.

**Registry models** -- the declarative input to the builders:
    :class:`HTTPMethod`, :class:`EndpointDescriptor`, and :class:`NamingRule`.

**Configuration models** -- serialised as JSON in the user's config directory
or a project-local ``derivekit.json``:
    :class:`RequestConfig`, :class:`OutputConfig`, and :class:`GlobalConfig`.

Registry models are frozen: once a registry has been handed to a builder its
descriptors cannot change underneath the derived callables.
"""

from __future__ import annotations

import enum
import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from derivekit.output import OutputFormat

_NAME_FRAGMENT = re.compile(r"^[A-Za-z0-9_]*$")
_NAME_START = re.compile(r"^(?:[A-Za-z][A-Za-z0-9_]*)?$")


# --- Registry models ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods an endpoint descriptor may declare."""

    GET = "GET"
    POST = "POST"


class EndpointDescriptor(BaseModel):
    """One declared HTTP endpoint.

    Registries may hold plain mappings instead; the API builder coerces them
    through :meth:`model_validate`.  The method is matched case-insensitively.

    Example::

        EndpointDescriptor(url="https://myapp.de/api/posts", method="GET")
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    url: str = Field(min_length=1, description="Absolute URL or path relative to base_url")
    method: HTTPMethod

    @field_validator("method", mode="before")
    @classmethod
    def _normalise_method(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value


class NamingRule(BaseModel):
    """Transform from a registry key to the public name of its derived callable.

    Steps run in a fixed order: capitalise the first letter (only the first
    letter, the rest of the key is left alone), prepend ``prefix``, append
    ``suffix``.
    """

    model_config = ConfigDict(frozen=True)

    prefix: str = ""
    suffix: str = ""
    capitalize: bool = False

    @field_validator("prefix")
    @classmethod
    def _name_start(cls, value: str) -> str:
        # Derived names never start with an underscore or a digit.
        if not _NAME_START.match(value):
            raise ValueError(
                f"{value!r} must be empty or start with a letter, then letters, digits or underscores"
            )
        return value

    @field_validator("suffix")
    @classmethod
    def _identifier_fragment(cls, value: str) -> str:
        if not _NAME_FRAGMENT.match(value):
            raise ValueError(f"{value!r} is not an identifier fragment")
        return value

    def apply(self, key: str) -> str:
        name = key
        if self.capitalize:
            name = name[:1].upper() + name[1:]
        return f"{self.prefix}{name}{self.suffix}"


QUERY_HOOK_RULE = NamingRule(prefix="use", suffix="Query", capitalize=True)
"""``getPost`` -> ``useGetPostQuery``."""

IDENTITY_RULE = NamingRule()
"""Exposes each callable under its registry key unchanged."""


# --- Configuration models ---


class RequestConfig(BaseModel):
    """HTTP settings for the httpx-backed transports."""

    base_url: Optional[str] = Field(
        default=None, description="Base URL prepended to relative endpoint URLs"
    )
    timeout: float = Field(default=30, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    max_retries: int = Field(default=3, ge=0, description="Max retry attempts")
    headers: dict[str, str] = Field(
        default_factory=dict, description="Headers sent with every request"
    )


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: OutputFormat = Field(
        default=OutputFormat.AUTO, description="Output format: auto, json, plain, rich"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/derivekit/config.json``.

    Loaded by :func:`~derivekit.config.load_global_config`.  Fields here have
    the lowest precedence; see :func:`~derivekit.config.resolve_config`.
    """

    naming: NamingRule = Field(default_factory=lambda: QUERY_HOOK_RULE)
    request: RequestConfig = Field(default_factory=RequestConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
