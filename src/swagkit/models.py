"""Canonical Pydantic models shared across all swagkit modules.

This is the single source of truth for data shapes in the project. The models
fall into three groups:

**Configuration models** -- resolved once per invocation by
:func:`~swagkit.config.resolve_config`:
    :class:`ExecutionMode` and :class:`ToolConfig`.

**Document set models** -- produced by the acquisition pipeline and consumed
by the command router:
    :class:`CurrentGeneration`, :class:`LegacyGeneration` and their union
    :data:`DocumentSet`.

**Validation result models** -- produced by the capabilities and rendered by
the output system:
    :class:`ValidationIssue`, :class:`DocumentResults`,
    :class:`ValidationResults`, and :class:`DocumentReport`.

All models use Pydantic v2.
"""

from __future__ import annotations

import enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field

from swagkit import __version__


# --- Configuration ---


class ExecutionMode(str, enum.Enum):
    """How failures of ``swagkit validate`` surface.

    ``INTERACTIVE`` renders a report and exits non-zero. ``TEST`` raises the
    failure so that a test harness can assert on it.
    """

    INTERACTIVE = "interactive"
    TEST = "test"


class ToolConfig(BaseModel):
    """Effective configuration for one invocation.

    Example::

        ToolConfig(mode=ExecutionMode.TEST, fetch_timeout=10.0)
    """

    mode: ExecutionMode = Field(
        default=ExecutionMode.INTERACTIVE,
        description="Failure rendering policy for validate",
    )
    fetch_timeout: Optional[float] = Field(
        default=None,
        description="Remote fetch timeout in seconds; None waits indefinitely",
    )
    user_agent: str = Field(
        default=f"swagkit/{__version__}",
        description="User-Agent header sent with remote fetches",
    )


# --- Document sets ---


class CurrentGeneration(BaseModel):
    """A Swagger 2.0 document set: one self-contained Swagger object."""

    kind: Literal["current"] = "current"
    source: str
    swagger_object: dict[str, Any]

    @property
    def version(self) -> str:
        return str(self.swagger_object["swagger"])

    @property
    def sources(self) -> list[str]:
        return [self.source]


class LegacyGeneration(BaseModel):
    """A Swagger 1.2 document set: a resource listing plus its API declarations.

    ``declaration_sources[i]`` is the source reference ``api_declarations[i]``
    was loaded from. Declarations are kept as parsed, without shape checks.
    """

    kind: Literal["legacy"] = "legacy"
    source: str
    resource_listing: dict[str, Any]
    declaration_sources: list[str] = Field(default_factory=list)
    api_declarations: list[Any] = Field(default_factory=list)

    @property
    def version(self) -> str:
        return str(self.resource_listing["swaggerVersion"])

    @property
    def sources(self) -> list[str]:
        return [self.source, *self.declaration_sources]


DocumentSet = Union[CurrentGeneration, LegacyGeneration]
"""The role-labelled result of acquiring a batch of documents."""


# --- Validation results ---


class ValidationIssue(BaseModel):
    """A single error or warning found in one document.

    Attributes:
        code: Stable upper-case identifier (e.g. ``UNUSED_MODEL``).
        message: Human-readable description.
        path: Location in the document as a list of keys and indexes.
    """

    code: str
    message: str
    path: list[Union[str, int]] = Field(default_factory=list)

    @property
    def pointer(self) -> str:
        """JSON pointer of :attr:`path`, in ``#/a/b/0`` form."""
        parts = [str(p).replace("~", "~0").replace("/", "~1") for p in self.path]
        return "#/" + "/".join(parts)


class DocumentResults(BaseModel):
    """Errors and warnings for one document."""

    errors: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[ValidationIssue] = Field(default_factory=list)


class DocumentReport(BaseModel):
    """Errors and warnings for one document, labelled by its source reference."""

    source: str
    errors: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[ValidationIssue] = Field(default_factory=list)


class ValidationResults(DocumentResults):
    """Results of validating a whole document set.

    The inherited ``errors``/``warnings`` belong to the root document (the
    Swagger object or the resource listing). ``api_declarations`` holds one
    entry per API declaration, in document order, and is empty for 2.0.
    """

    api_declarations: list[DocumentResults] = Field(default_factory=list)

    @property
    def error_count(self) -> int:
        return len(self.errors) + sum(len(d.errors) for d in self.api_declarations)

    @property
    def warning_count(self) -> int:
        return len(self.warnings) + sum(len(d.warnings) for d in self.api_declarations)

    @property
    def has_issues(self) -> bool:
        return self.error_count > 0 or self.warning_count > 0

    def summarize(self, sources: list[str]) -> list[DocumentReport]:
        """Label each document's results with its source reference.

        Documents without errors or warnings are left out.

        Args:
            sources: Source references in document order (root first), one per
                document.

        Returns:
            One :class:`DocumentReport` per document that has issues.
        """
        per_document = [DocumentResults(errors=self.errors, warnings=self.warnings)]
        per_document.extend(self.api_declarations)

        reports: list[DocumentReport] = []
        for index, results in enumerate(per_document):
            if not results.errors and not results.warnings:
                continue
            reports.append(
                DocumentReport(
                    source=sources[index],
                    errors=results.errors,
                    warnings=results.warnings,
                )
            )
        return reports
