"""Abstract base class for version-specific Swagger capabilities.

A capability bundles everything swagkit knows about one Swagger version:
where its documentation and schemas live, how to validate a document set of
that version, and (for 1.2) how to convert it to the current version.
Capabilities are stateless; :class:`~swagkit.capabilities.CapabilityRegistry`
hands out one instance per version string.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any

from jsonschema.exceptions import ValidationError as JsonSchemaValidationError

from swagkit.exceptions import UnsupportedVersionError
from swagkit.models import ValidationIssue, ValidationResults


class SpecCapability(ABC):
    """Validation, conversion, and metadata for one Swagger version.

    Subclasses set the three class attributes and implement
    :meth:`validate`. Only versions that can be converted override
    :meth:`convert`.
    """

    version: str = ""
    docs_url: str = ""
    schemas_url: str = ""

    @abstractmethod
    def validate(self, *documents: Any) -> ValidationResults:
        """Validate a document set of this version.

        Args:
            *documents: The documents in their roles -- a Swagger object for
                2.0, or a resource listing and a list of API declarations
                for 1.2.

        Returns:
            Errors and warnings per document. An empty result means valid.
        """

    def convert(
        self,
        resource_listing: dict[str, Any],
        api_declarations: list[Any],
        skip_validation: bool = False,
    ) -> dict[str, Any]:
        """Convert a document set of this version to the current version.

        Args:
            resource_listing: The root document.
            api_declarations: The child documents, in order.
            skip_validation: Convert without validating the input first.

        Returns:
            The converted Swagger object.

        Raises:
            ValidationFailedError: If pre-validation finds errors.
            UnsupportedVersionError: If this version cannot be converted.
        """
        raise UnsupportedVersionError(
            f"Converting Swagger {self.version} documents is not supported"
        )


_SCHEMA_ERROR_CODES = {
    "additionalProperties": "OBJECT_ADDITIONAL_PROPERTIES",
    "anyOf": "ANY_OF_MISSING",
    "enum": "ENUM_MISMATCH",
    "format": "INVALID_FORMAT",
    "maxLength": "MAX_LENGTH",
    "maximum": "MAXIMUM",
    "minItems": "ARRAY_LENGTH_SHORT",
    "minimum": "MINIMUM",
    "oneOf": "ONE_OF_MISSING",
    "pattern": "PATTERN",
    "required": "OBJECT_MISSING_REQUIRED_PROPERTY",
    "type": "INVALID_TYPE",
    "uniqueItems": "ARRAY_UNIQUE",
}


def issue_from_schema_error(error: JsonSchemaValidationError) -> ValidationIssue:
    """Convert a :mod:`jsonschema` error into a :class:`ValidationIssue`.

    Keyword failures are coded after the keyword (``required`` becomes
    ``OBJECT_MISSING_REQUIRED_PROPERTY``). Errors raised without a keyword,
    such as the semantic errors of :mod:`openapi_spec_validator`, are coded
    after their class name (``DuplicateOperationIDError`` becomes
    ``DUPLICATE_OPERATION_ID``).
    """
    if isinstance(error.validator, str):
        code = _SCHEMA_ERROR_CODES.get(
            error.validator, f"SCHEMA_{error.validator.upper()}"
        )
    else:
        name = type(error).__name__.removesuffix("Error")
        code = re.sub(r"(?<!^)(?=[A-Z][a-z])", "_", name).upper()
    return ValidationIssue(
        code=code,
        message=error.message,
        path=list(error.absolute_path),
    )
