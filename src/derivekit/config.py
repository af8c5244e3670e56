"""Configuration with XDG paths and precedence resolution.

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.derivekit/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Global config** -- a single :class:`~derivekit.models.GlobalConfig`
  JSON file holding the default naming rule, request settings and output
  format.
* **Project config** -- an optional ``./derivekit.json`` with the same shape,
  merged over the global file.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, project config, and global config.
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from derivekit.exceptions import ConfigError
from derivekit.models import GlobalConfig

_APP_NAME = "derivekit"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "derivekit.json"

ENV_BASE_URL = "DERIVEKIT_BASE_URL"
ENV_TIMEOUT = "DERIVEKIT_TIMEOUT"
ENV_MAX_RETRIES = "DERIVEKIT_MAX_RETRIES"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True on platforms following XDG Base Directory conventions (Linux/BSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/derivekit/`` (default ``~/.config/derivekit/``).
    On macOS/Windows: ``~/.derivekit/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/derivekit/`` (default ``~/.local/share/derivekit/``).
    On macOS/Windows: ``~/.derivekit/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Config files ---


def _read_json(path: Path, label: str) -> Optional[dict[str, Any]]:
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        raise ConfigError(f"Invalid {label} at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid {label} at {path}: expected a JSON object")
    return data


def load_global_config() -> GlobalConfig:
    """Load the global configuration from the config directory.

    Returns a default :class:`~derivekit.models.GlobalConfig` when the file
    does not exist.

    Raises:
        ConfigError: If the file contains invalid JSON or fails validation.
    """
    path = get_config_dir() / _CONFIG_FILENAME
    data = _read_json(path, "global config")
    if data is None:
        return GlobalConfig()
    try:
        return GlobalConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def load_project_config() -> Optional[dict[str, Any]]:
    """Load ``./derivekit.json`` as a raw dict, or ``None`` if absent.

    Raises:
        ConfigError: If the file exists but contains invalid JSON.
    """
    return _read_json(Path.cwd() / _PROJECT_CONFIG_FILENAME, "project config")


# --- Precedence resolution ---


def resolve_config(
    cli_base_url: Optional[str] = None,
    cli_timeout: Optional[float] = None,
    cli_format: Optional[str] = None,
) -> GlobalConfig:
    """Resolve the effective configuration.

    Precedence (high to low):
        1. CLI flags (``cli_base_url``, ``cli_timeout``, ``cli_format``)
        2. Environment variables (``DERIVEKIT_BASE_URL``,
           ``DERIVEKIT_TIMEOUT``, ``DERIVEKIT_MAX_RETRIES``)
        3. Project config (``./derivekit.json``)
        4. User config (``~/.config/derivekit/config.json``)
        5. Defaults

    Raises:
        ConfigError: If a config file or environment value is invalid.
    """
    merged = load_global_config().model_dump(mode="json")

    project = load_project_config()
    if project is not None:
        for section, values in project.items():
            if isinstance(values, dict) and isinstance(merged.get(section), dict):
                merged[section].update(values)
            else:
                merged[section] = values

    request = merged["request"]
    env_base_url = os.environ.get(ENV_BASE_URL)
    if env_base_url:
        request["base_url"] = env_base_url
    env_timeout = os.environ.get(ENV_TIMEOUT)
    if env_timeout:
        request["timeout"] = env_timeout
    env_retries = os.environ.get(ENV_MAX_RETRIES)
    if env_retries:
        request["max_retries"] = env_retries

    if cli_base_url is not None:
        request["base_url"] = cli_base_url
    if cli_timeout is not None:
        request["timeout"] = cli_timeout
    if cli_format is not None:
        merged["output"]["format"] = cli_format

    try:
        return GlobalConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
