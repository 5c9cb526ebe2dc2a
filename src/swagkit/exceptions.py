"""Exception hierarchy for swagkit.

All exceptions inherit from :class:`SwagkitError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`swagkit.exit_codes`.
Commands catch ``SwagkitError`` and render it as a framed error message;
:func:`swagkit.app.main` does the same for anything that escapes a command.

Subclass hierarchy::

    SwagkitError (exit 1)
    +-- FetchError                 (exit 1)
    +-- DocumentParseError         (exit 1)
    +-- UnknownSchemaVersionError  (exit 1)
    +-- UnsupportedVersionError    (exit 1)
    +-- ValidationFailedError      (exit 1)
    +-- UnsupportedCommandError    (exit 1)
    +-- ConfigError                (exit 1)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from swagkit.exit_codes import EXIT_GENERIC_FAILURE

if TYPE_CHECKING:
    from swagkit.models import ValidationResults


class SwagkitError(Exception):
    """Base exception for all swagkit errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class FetchError(SwagkitError):
    """Raised when a document cannot be read from disk or fetched over the network."""


class DocumentParseError(SwagkitError):
    """Raised when a document's content is not valid JSON or YAML."""


class UnknownSchemaVersionError(SwagkitError):
    """Raised when the first document carries neither ``swagger`` nor ``swaggerVersion``."""


class UnsupportedVersionError(SwagkitError):
    """Raised when no capability handles a Swagger version (or the requested operation)."""


class ValidationFailedError(SwagkitError):
    """Raised when validation reports errors or warnings.

    Unlike the other errors this one is recovered into a report rather than
    shown as a crash. The attached results are what the report renders.

    Args:
        message: Short description of the failure.
        results: The complete validation results.
    """

    failed_validation = True

    def __init__(self, message: str, results: ValidationResults):
        super().__init__(message)
        self.results = results


class UnsupportedCommandError(SwagkitError):
    """Raised when ``swagkit help`` is asked about a command that does not exist."""


class ConfigError(SwagkitError):
    """Raised for configuration problems (invalid project config, bad environment values)."""
