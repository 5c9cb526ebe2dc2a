"""Typer application and CLI entry point for swagkit.

This module wires together the top-level Typer application and its four
commands (``convert``, ``validate``, ``info``, ``help``). The root callback
installs the global :class:`~swagkit.output.OutputManager` and resolves the
:class:`~swagkit.models.ToolConfig`; each command builds a
:class:`~swagkit.router.CommandRouter` from that config and exits with the
code it returns.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``.
"""

from __future__ import annotations

import signal
import sys
from typing import Any, List, Optional

import click
import typer

from swagkit import __version__
from swagkit.exceptions import SwagkitError, UnsupportedCommandError
from swagkit.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INTERRUPTED, EXIT_SUCCESS

TOOL_NAME = "swagkit"

app = typer.Typer(
    name=TOOL_NAME,
    help="Validate Swagger 1.2/2.0 documents and convert Swagger 1.2 to 2.0.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"{TOOL_NAME} {__version__}")
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
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Timeout in seconds for remote documents (default: none)."
    ),
    test_mode: bool = typer.Option(
        False,
        "--test-mode",
        help="Raise validation failures instead of reporting them (for test harnesses).",
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~swagkit.output.OutputManager` and stores
    the resolved :class:`~swagkit.models.ToolConfig` in ``ctx.obj``.

    Args:
        ctx: Typer invocation context.
        version: If ``True``, print the version string and exit.
        no_color: Disable all colour and Rich markup.
        quiet: Suppress non-essential diagnostic output.
        verbose: Enable debug-level diagnostic output.
        timeout: Remote fetch timeout override.
        test_mode: Force the test execution mode.
    """
    from swagkit.config import resolve_config
    from swagkit.models import ExecutionMode
    from swagkit.output import OutputManager, error, set_output

    set_output(OutputManager(no_color=no_color, quiet=quiet, verbose=verbose))

    try:
        config = resolve_config(
            cli_mode=ExecutionMode.TEST if test_mode else None,
            cli_timeout=timeout,
        )
    except SwagkitError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    ctx.ensure_object(dict)
    ctx.obj["config"] = config


def _router(ctx: typer.Context, output_file: Optional[str] = None):  # noqa: ANN202
    """Build a :class:`~swagkit.router.CommandRouter` from the root callback's state."""
    from swagkit.output import get_output
    from swagkit.router import CommandRouter

    output = get_output()
    if output_file is not None:
        output.output_file = output_file
    return CommandRouter(config=(ctx.obj or {}).get("config"), output=output)


@app.command("convert")
def convert_command(
    ctx: typer.Context,
    resource_listing: str = typer.Argument(
        ..., help="Path or URL of the Swagger 1.2 resource listing."
    ),
    api_declarations: Optional[List[str]] = typer.Argument(
        None, help="Paths or URLs of the API declarations, in order."
    ),
    no_validation: bool = typer.Option(
        False, "--no-validation", "-n", help="Skip validation before converting."
    ),
    yaml_output: bool = typer.Option(
        False, "--yaml", "-y", help="Output the converted document as YAML."
    ),
    output_file: Optional[str] = typer.Option(
        None, "--output", "-o", help="Write the converted document to a file."
    ),
) -> None:
    """Convert Swagger 1.2 documents to a Swagger 2.0 document.

    Example::

        swagkit convert api-docs.json pet.json store.json --yaml
    """
    code = _router(ctx, output_file).convert(
        resource_listing,
        api_declarations or [],
        skip_validation=no_validation,
        as_yaml=yaml_output,
    )
    raise typer.Exit(code=code)


@app.command("validate")
def validate_command(
    ctx: typer.Context,
    document: str = typer.Argument(
        ..., help="Path or URL of the Swagger 2.0 document or 1.2 resource listing."
    ),
    api_declarations: Optional[List[str]] = typer.Argument(
        None, help="Paths or URLs of the Swagger 1.2 API declarations, in order."
    ),
) -> None:
    """Validate Swagger document(s) against their Swagger version.

    Errors and warnings are both reported and both cause a non-zero exit.

    Example::

        swagkit validate swagger.yaml
        swagkit validate api-docs.json pet.json store.json
    """
    code = _router(ctx).validate(document, api_declarations or [])
    raise typer.Exit(code=code)


@app.command("info")
def info_command(
    ctx: typer.Context,
    version: str = typer.Argument(..., help="Swagger version, e.g. 1.2 or 2.0."),
) -> None:
    """Show where the documentation and schemas for a Swagger version live.

    Example::

        swagkit info 2.0
    """
    code = _router(ctx).info(version)
    raise typer.Exit(code=code)


def _echo_help(text: str) -> None:
    # Rich-formatted help is printed directly and returns an empty string.
    if text:
        typer.echo(text)


@app.command("help")
def help_command(
    ctx: typer.Context,
    command: Optional[str] = typer.Argument(None, help="Command to show help for."),
) -> None:
    """Display help for swagkit or one of its commands."""
    from swagkit.output import error

    root_ctx = ctx.parent or ctx
    group = root_ctx.command

    if command is None:
        _echo_help(group.get_help(root_ctx))
        raise typer.Exit(code=EXIT_SUCCESS)

    target = group.get_command(root_ctx, command) if isinstance(group, click.Group) else None
    if target is None:
        exc = UnsupportedCommandError(f"{TOOL_NAME} does not support the {command} command")
        error(str(exc))
        raise typer.Exit(code=exc.exit_code)

    with click.Context(target, info_name=command, parent=root_ctx) as target_ctx:
        _echo_help(target.get_help(target_ctx))
    raise typer.Exit(code=EXIT_SUCCESS)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``swagkit`` console script.

    A :class:`~swagkit.exceptions.SwagkitError` escaping a command (in test
    mode ``validate`` raises instead of reporting) is rendered as a framed
    error and exits with the error's ``exit_code``.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)
    except SwagkitError as exc:
        from swagkit.output import error

        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception as exc:
        from swagkit.output import error

        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
