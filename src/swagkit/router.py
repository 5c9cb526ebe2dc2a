"""Command router -- runs ``convert``, ``validate``, and ``info``.

:class:`CommandRouter` sits between the Typer commands in :mod:`swagkit.app`
and the rest of the package. For each command it acquires the documents,
picks the capability for their Swagger version, calls it, and renders the
outcome through :class:`~swagkit.output.OutputManager`. Every method returns
the process exit code; the Typer layer only translates that into
``typer.Exit``.

The failure-rendering policy of ``validate`` comes from
:attr:`ToolConfig.mode <swagkit.models.ToolConfig.mode>`: interactive runs
get a report and exit code 1, test runs get the exception raised.
"""

from __future__ import annotations

from typing import Optional, Sequence

import httpx

from swagkit.acquisition import acquire
from swagkit.capabilities import CapabilityRegistry, create_default_registry
from swagkit.exceptions import (
    SwagkitError,
    UnsupportedVersionError,
    ValidationFailedError,
)
from swagkit.exit_codes import EXIT_GENERIC_FAILURE, EXIT_SUCCESS
from swagkit.models import (
    CurrentGeneration,
    DocumentSet,
    ExecutionMode,
    LegacyGeneration,
    ToolConfig,
)
from swagkit.output import OutputManager, dump_document, get_output

CONVERT_FROM_VERSION = "1.2"

VALIDATION_SKIP_HINT = (
    "The Swagger document(s) are invalid "
    "(Run with --no-validation to skip validation)"
)


class CommandRouter:
    """Dispatches CLI commands to the version-specific capabilities.

    Args:
        config: Resolved configuration (execution mode, fetch settings).
        output: Output manager; defaults to the global one.
        registry: Capability lookup; defaults to the built-in 1.2 and 2.0
            capabilities.
        transport: Optional httpx transport for remote fetches (tests use
            :class:`httpx.MockTransport`).
    """

    def __init__(
        self,
        config: Optional[ToolConfig] = None,
        output: Optional[OutputManager] = None,
        registry: Optional[CapabilityRegistry] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = config or ToolConfig()
        self._output = output or get_output()
        self._registry = registry or create_default_registry()
        self._transport = transport

    @property
    def config(self) -> ToolConfig:
        return self._config

    def _acquire(self, root: str, children: Sequence[str]) -> DocumentSet:
        sources = [root, *children]
        self._output.debug(f"Loading {len(sources)} document(s): {', '.join(sources)}")
        documents = acquire(sources, self._config, self._transport)
        self._output.debug(f"Detected Swagger {documents.version} ({documents.kind} generation)")
        return documents

    # ------------------------------------------------------------------ #
    # convert
    # ------------------------------------------------------------------ #

    def convert(
        self,
        root: str,
        children: Sequence[str] = (),
        skip_validation: bool = False,
        as_yaml: bool = False,
    ) -> int:
        """Convert a Swagger 1.2 document set to Swagger 2.0.

        Args:
            root: Location of the resource listing.
            children: Locations of the API declarations, in order.
            skip_validation: Convert without validating first.
            as_yaml: Emit YAML instead of JSON.

        Returns:
            ``0`` on success, ``1`` on any failure.
        """
        documents: Optional[DocumentSet] = None
        try:
            documents = self._acquire(root, children)
            if not isinstance(documents, LegacyGeneration):
                raise UnsupportedVersionError(
                    f"Only Swagger {CONVERT_FROM_VERSION} documents can be converted "
                    f"({documents.source} is Swagger {documents.version})"
                )
            capability = self._registry.get(CONVERT_FROM_VERSION)
            converted = capability.convert(
                documents.resource_listing,
                documents.api_declarations,
                skip_validation=skip_validation,
            )
        except ValidationFailedError as exc:
            self._output.warning(VALIDATION_SKIP_HINT)
            sources = documents.sources if documents is not None else [root, *children]
            self._output.validation_report(exc.results.summarize(sources))
            return EXIT_GENERIC_FAILURE
        except SwagkitError as exc:
            self._output.error(str(exc))
            return exc.exit_code

        self._output.print_data(dump_document(converted, as_yaml=as_yaml))
        if self._output.output_file:
            self._output.info(f"Wrote Swagger 2.0 document to {self._output.output_file}")
        return EXIT_SUCCESS

    # ------------------------------------------------------------------ #
    # validate
    # ------------------------------------------------------------------ #

    def validate(self, root: str, children: Sequence[str] = ()) -> int:
        """Validate a document set against its own Swagger version.

        Any error or warning counts as a failure.

        Args:
            root: Location of the Swagger object or resource listing.
            children: Locations of the API declarations (1.2 only).

        Returns:
            ``0`` when the documents are clean, ``1`` otherwise.

        Raises:
            SwagkitError: Any failure, when running in test mode.
        """
        documents: Optional[DocumentSet] = None
        try:
            documents = self._acquire(root, children)
            self._run_validation(documents)
        except SwagkitError as exc:
            if self._config.mode == ExecutionMode.TEST:
                raise
            if isinstance(exc, ValidationFailedError) and documents is not None:
                self._output.validation_report(exc.results.summarize(documents.sources))
            else:
                self._output.error(str(exc))
            return exc.exit_code
        return EXIT_SUCCESS

    def _run_validation(self, documents: DocumentSet) -> None:
        capability = self._registry.get(documents.version)
        if isinstance(documents, CurrentGeneration):
            results = capability.validate(documents.swagger_object)
        else:
            results = capability.validate(
                documents.resource_listing, documents.api_declarations
            )

        if results.has_issues:
            raise ValidationFailedError(
                f"Swagger {documents.version} validation found "
                f"{results.error_count} error(s) and {results.warning_count} warning(s)",
                results,
            )

    # ------------------------------------------------------------------ #
    # info
    # ------------------------------------------------------------------ #

    def info(self, version: str) -> int:
        """Print the documentation and schema locations for *version*."""
        try:
            capability = self._registry.get(version)
        except SwagkitError as exc:
            self._output.error(str(exc))
            return exc.exit_code

        self._output.print_data(
            "\n".join(
                [
                    "",
                    f"Swagger {capability.version} Information:",
                    "",
                    f"  documentation url: {capability.docs_url}",
                    f"  schema(s) url:     {capability.schemas_url}",
                    "",
                ]
            )
        )
        return EXIT_SUCCESS
