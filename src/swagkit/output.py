"""Output formatting system with strict stdout/stderr discipline.

Follows `clig.dev <https://clig.dev/>`_ conventions:

* **stdout** -- primary data only (converted documents, ``info`` output).
  This is what downstream tools pipe and parse.
* **stderr** -- all diagnostics (errors, validation reports, warnings,
  debug). Never contaminates the data stream.
* **Colour control** -- respects ``NO_COLOR``, ``TERM=dumb``, and the
  ``--no-color`` CLI flag.

The module exposes two layers:

1. :class:`OutputManager` -- a stateful object holding colour preferences,
   Rich consoles, and quiet/verbose flags. Created once in
   :func:`~swagkit.app.main_callback` and installed via :func:`set_output`.
2. :func:`error`, a module-level shortcut to the global ``OutputManager``
   for code that reports a failure before a router exists.

:func:`dump_document` serialises converted documents as JSON or YAML.
"""

from __future__ import annotations

import json
import os
import sys
from typing import Any, Optional

import yaml
from rich.console import Console
from rich.markup import escape

from swagkit.models import DocumentReport, ValidationIssue


class OutputManager:
    """Central manager for all CLI output with stdout/stderr discipline.

    Args:
        no_color: Disable all colour and Rich markup.
        quiet: Suppress non-essential informational messages on stderr.
        verbose: Enable debug-level messages on stderr.
        output_file: If set, redirect primary data output to this file
            path instead of stdout.
    """

    def __init__(
        self,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
        output_file: Optional[str] = None,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        self._output_file = output_file

        # Console for stderr (diagnostics)
        self._stderr = Console(
            file=sys.stderr,
            no_color=self._no_color,
            stderr=True,
            highlight=False,
            soft_wrap=True,
        )

    @property
    def output_file(self) -> Optional[str]:
        """Path primary data is redirected to, if any."""
        return self._output_file

    @output_file.setter
    def output_file(self, path: Optional[str]) -> None:
        self._output_file = path

    # ------------------------------------------------------------------ #
    # Data output (stdout)
    # ------------------------------------------------------------------ #

    def print_data(self, text: str) -> None:
        """Print raw text to stdout (or to the configured output file).

        Args:
            text: The string to write. A trailing newline is appended if
                missing.
        """
        if self._output_file:
            with open(self._output_file, "w", encoding="utf-8") as f:
                f.write(text)
                if not text.endswith("\n"):
                    f.write("\n")
        else:
            print(text, file=sys.stdout, flush=True)

    # ------------------------------------------------------------------ #
    # Diagnostics (stderr)
    # ------------------------------------------------------------------ #

    def info(self, message: str) -> None:
        """Print an informational message to stderr. Suppressed by ``--quiet``."""
        if not self._quiet:
            self._write_stderr(message)

    def warning(self, message: str) -> None:
        """Print a yellow warning to stderr. NOT suppressed by ``--quiet``."""
        self._write_stderr(f"Warning: {message}", style="yellow")

    def error(self, message: str) -> None:
        """Print a framed error to stderr. Never suppressed.

        The frame is a blank line, ``  error: <message>``, and a blank line,
        matching the layout of the help output.

        Args:
            message: The error text.
        """
        self._write_stderr("")
        if self._no_color:
            self._write_stderr(f"  error: {message}")
        else:
            self._stderr.print(f"  [bold red]error:[/bold red] {escape(message)}")
        self._write_stderr("")

    def debug(self, message: str) -> None:
        """Print a debug message to stderr. Only shown when ``--verbose`` is active."""
        if self._verbose:
            self._write_stderr(f"[debug] {message}", style="dim")

    # ------------------------------------------------------------------ #
    # Validation reports (stderr)
    # ------------------------------------------------------------------ #

    def validation_report(self, reports: list[DocumentReport]) -> None:
        """Render per-document validation errors and warnings to stderr.

        Each document with issues gets an ``Errors:`` and/or ``Warnings:``
        block headed by its source reference, followed by one summary line
        with the totals across all documents.

        Args:
            reports: Summaries produced by
                :meth:`~swagkit.models.ValidationResults.summarize`.
        """
        error_count = 0
        warning_count = 0
        for report in reports:
            error_count += len(report.errors)
            warning_count += len(report.warnings)
            self._issue_block(f"{report.source} Errors:", report.errors, "red")
            self._issue_block(f"{report.source} Warnings:", report.warnings, "yellow")

        if error_count or warning_count:
            self._write_stderr("")
            self._write_stderr(
                f"{_plural(error_count, 'error')} and {_plural(warning_count, 'warning')}"
            )
            self._write_stderr("")

    def _issue_block(
        self, heading: str, issues: list[ValidationIssue], style: str
    ) -> None:
        if not issues:
            return
        self._write_stderr("")
        self._write_stderr(heading, style=f"bold {style}")
        self._write_stderr("")
        for issue in issues:
            self._write_stderr(f"  {issue.pointer}: {issue.message}")

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _write_stderr(self, message: str, style: Optional[str] = None) -> None:
        if self._no_color or style is None:
            print(message, file=sys.stderr, flush=True)
        else:
            self._stderr.print(f"[{style}]{escape(message)}[/{style}]")


# ------------------------------------------------------------------ #
# Module-level helpers
# ------------------------------------------------------------------ #


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def _should_disable_color() -> bool:
    """Check if color should be disabled per clig.dev.

    Returns True when NO_COLOR env var is set (any value) or TERM=dumb.
    """
    if os.environ.get("NO_COLOR") is not None:
        return True
    if os.environ.get("TERM") == "dumb":
        return True
    return False


def dump_document(document: Any, as_yaml: bool = False) -> str:
    """Serialise a document for output.

    Args:
        document: The structure to serialise.
        as_yaml: Emit block-style YAML instead of JSON.

    Returns:
        The document as pretty-printed text with 2-space indentation and the
        original key order.
    """
    if as_yaml:
        return yaml.safe_dump(
            document,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
            indent=2,
        )
    return json.dumps(document, indent=2, ensure_ascii=False)


# ------------------------------------------------------------------ #
# Global output instance (set during app startup)
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the global :class:`OutputManager`, creating a default one lazily."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    """Install *output* as the global :class:`OutputManager` instance.

    Called once during CLI startup from :func:`~swagkit.app.main_callback`.
    """
    global _output
    _output = output


def reset_output() -> None:
    """Reset the global :class:`OutputManager` to ``None``.

    Primarily useful in test suites to ensure a clean state between tests.
    """
    global _output
    _output = None


# ------------------------------------------------------------------ #
# Convenience functions that use the global instance
# ------------------------------------------------------------------ #


def error(message: str) -> None:
    """Print framed error to stderr via the global OutputManager."""
    get_output().error(message)

