"""Typer application and CLI entry point for derivekit.

The CLI is a developer companion to the library: it shows which callables a
registry derives and can fire a single derived query against a live API.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``.  It installs a SIGINT handler, invokes the Typer app and
turns :class:`~derivekit.exceptions.DeriveKitError` into its exit code.
Unexpected exceptions are written to a crash log under the data directory.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any

import typer

from derivekit import __version__
from derivekit.commands.call import call_command
from derivekit.commands.inspect import actions_command, endpoints_command
from derivekit.exit_codes import EXIT_GENERIC_FAILURE

app = typer.Typer(
    name="derivekit",
    help="Derive API query callables and action creators from registries.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("endpoints")(endpoints_command)
app.command("actions")(actions_command)
app.command("call")(call_command)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"derivekit {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Print requests instead of sending them."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~derivekit.output.OutputManager` and stores
    shared flags in ``ctx.obj``.  Without ``--json`` or ``--plain`` the
    output format comes from the resolved configuration.
    """
    from derivekit.config import resolve_config
    from derivekit.exceptions import DeriveKitError
    from derivekit.output import OutputFormat, OutputManager, error, set_output

    cli_format = None
    if json_output:
        cli_format = OutputFormat.JSON.value
    elif plain_output:
        cli_format = OutputFormat.PLAIN.value

    try:
        config = resolve_config(cli_format=cli_format)
    except DeriveKitError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    set_output(
        OutputManager(
            format=config.output.format, no_color=no_color, quiet=quiet, verbose=verbose
        )
    )

    ctx.ensure_object(dict)
    ctx.obj["dry_run"] = dry_run


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log() -> str:
    """Write the current traceback to the data directory and return its path."""
    from derivekit.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_path = logs_dir / f"crash-{datetime.now().strftime('%Y%m%d-%H%M%S')}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``derivekit`` console script."""
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from derivekit.exceptions import DeriveKitError
        from derivekit.output import error

        if isinstance(exc, DeriveKitError):
            error(str(exc))
            sys.exit(exc.exit_code)

        log_path = _write_crash_log()
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
