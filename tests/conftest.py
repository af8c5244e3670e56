"""Shared test fixtures for derivekit.

Provides sample registries, a recording transport, config isolation, and
output management.  Discovered automatically by pytest.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional

import pytest

from derivekit.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches sys.stdout/sys.stderr at creation time; when
    CliRunner swaps those streams the cached references go stale.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Registries
# ---------------------------------------------------------------------------


@pytest.fixture
def endpoints() -> dict[str, dict[str, str]]:
    """The two-endpoint registry used throughout the examples."""
    return {
        "getPost": {"url": "https://myapp.de/api/posts", "method": "GET"},
        "updateUser": {"url": "https://myapp.de/api/users", "method": "POST"},
    }


@pytest.fixture
def reducers() -> dict[str, Any]:
    """``increment`` takes an action, ``reset`` takes nothing."""

    def increment(action):
        return action

    def reset():
        return None

    return {"increment": increment, "reset": reset}


# ---------------------------------------------------------------------------
# Transports
# ---------------------------------------------------------------------------


class RecordingTransport:
    """Records every ``send`` call and returns a canned response."""

    def __init__(self, response: Any = "ok") -> None:
        self.calls: list[tuple[str, str, Optional[Mapping[str, Any]]]] = []
        self.response = response

    def send(self, url: str, method: str, options: Optional[Mapping[str, Any]] = None) -> Any:
        self.calls.append((url, method, options))
        return self.response


class AsyncRecordingTransport(RecordingTransport):
    async def send(self, url: str, method: str, options: Optional[Mapping[str, Any]] = None) -> Any:
        self.calls.append((url, method, options))
        return self.response


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def async_transport() -> AsyncRecordingTransport:
    return AsyncRecordingTransport()


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG dirs at tmp_path, clear DERIVEKIT_* env vars, and chdir there."""
    monkeypatch.setattr("derivekit.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    for var in ["DERIVEKIT_BASE_URL", "DERIVEKIT_TIMEOUT", "DERIVEKIT_MAX_RETRIES"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet, plain-format OutputManager."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
