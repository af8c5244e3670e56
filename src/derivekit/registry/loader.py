"""Load endpoint registries from a URL, local file, or stdin.

An endpoint registry document is a JSON or YAML object, either flat::

    getPost:
      url: https://myapp.de/api/posts
      method: GET

or wrapped under an ``endpoints`` key (which leaves room for other top-level
metadata in the same file).  A top-level ``endpoints`` entry that is itself a
descriptor (it has ``url`` or ``method``) is an ordinary endpoint of a flat
registry.  Format detection follows the file extension or
the response content type, falling back to trying JSON and then YAML.

The two public functions are:

* :func:`load_document` -- fetch and parse a raw document.
* :func:`load_endpoints` -- load a document and validate it into a dict of
  :class:`~derivekit.models.EndpointDescriptor` ready for
  :class:`~derivekit.generator.ApiBuilder`.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml
from pydantic import ValidationError

from derivekit.exceptions import RegistryParseError
from derivekit.models import EndpointDescriptor


def load_document(source: str) -> dict[str, Any]:
    """Load a registry document from URL, file path, or stdin (``-``).

    Raises:
        RegistryParseError: If the source cannot be loaded or parsed.
    """
    if source == "-":
        return _load_from_stdin()
    if source.startswith(("http://", "https://")):
        return _load_from_url(source)
    return _load_from_file(source)


def load_endpoints(source: str) -> dict[str, EndpointDescriptor]:
    """Load *source* and validate every entry into an :class:`EndpointDescriptor`.

    Keys are returned unchanged; key validation and name derivation happen
    when the registry is built.

    Raises:
        RegistryParseError: If the document is unreadable or an entry is not
            a valid descriptor.
    """
    return parse_endpoints(load_document(source))


def parse_endpoints(document: dict[str, Any]) -> dict[str, EndpointDescriptor]:
    """Validate a raw registry document (flat or ``endpoints``-wrapped)."""
    entries = document
    if _is_wrapped(document):
        entries = document["endpoints"]
        flat_looking = sorted(
            key for key, value in document.items() if key != "endpoints" and _is_descriptor(value)
        )
        if flat_looking:
            raise RegistryParseError(
                "Registry mixes a wrapped 'endpoints' section with top-level "
                f"endpoints: {', '.join(flat_looking)}"
            )

    endpoints: dict[str, EndpointDescriptor] = {}
    for key, value in entries.items():
        if not isinstance(value, dict):
            raise RegistryParseError(
                f"Endpoint '{key}' must be an object with 'url' and 'method'"
            )
        try:
            endpoints[key] = EndpointDescriptor.model_validate(value)
        except ValidationError as exc:
            raise RegistryParseError(f"Invalid endpoint '{key}': {exc}") from exc
    return endpoints


def _is_wrapped(document: dict[str, Any]) -> bool:
    wrapped = document.get("endpoints")
    return isinstance(wrapped, dict) and not _is_descriptor(wrapped)


def _is_descriptor(value: Any) -> bool:
    return isinstance(value, dict) and ("url" in value or "method" in value)


def _load_from_stdin() -> dict[str, Any]:
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise RegistryParseError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise RegistryParseError("No input received from stdin")

    return _parse_content(content)


def _load_from_url(url: str) -> dict[str, Any]:
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise RegistryParseError(
            f"HTTP {exc.response.status_code} fetching registry from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise RegistryParseError(f"Failed to fetch registry from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"

    return _parse_content(response.text, hint=hint)


def _load_from_file(path: str) -> dict[str, Any]:
    file_path = Path(path)
    if not file_path.is_file():
        raise RegistryParseError(f"Registry file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RegistryParseError(f"Failed to read registry file {path}: {exc}") from exc

    if not content.strip():
        raise RegistryParseError(f"Registry file is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse *content* as JSON or YAML.

    JSON is tried first unless the hint says YAML; an explicit JSON hint
    does not fall back.
    """
    errors: list[str] = []

    if hint != "yaml":
        try:
            return _require_object(json.loads(content))
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise RegistryParseError(f"Invalid JSON: {exc}") from exc
            errors.append(f"JSON error: {exc}")

    try:
        return _require_object(yaml.safe_load(content))
    except yaml.YAMLError as exc:
        errors.append(f"YAML error: {exc}")

    raise RegistryParseError(
        "Failed to parse registry as JSON or YAML\n  " + "\n  ".join(errors)
    )


def _require_object(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        kind = type(result).__name__ if result is not None else "empty document"
        raise RegistryParseError(f"Registry must be a JSON/YAML object (got {kind})")
    return result
