"""Swagger 2.0 capability -- validate a single Swagger object.

Every ``$ref`` is checked first. References to other files or URLs are not
followed, so they are reported as errors along with dangling local pointers,
and validation stops there. Structural and semantic checks are
delegated to :class:`openapi_spec_validator.OpenAPIV2SpecValidator`. A clean
document is finally checked for definitions, parameters, and responses that
nothing references, which are reported as warnings.
"""

from __future__ import annotations

from typing import Any, Iterator

from openapi_spec_validator import OpenAPIV2SpecValidator

from swagkit.capabilities.base import SpecCapability, issue_from_schema_error
from swagkit.models import ValidationIssue, ValidationResults

_REUSABLE_SECTIONS = (
    ("definitions", "UNUSED_DEFINITION", "Definition"),
    ("parameters", "UNUSED_PARAMETER", "Parameter"),
    ("responses", "UNUSED_RESPONSE", "Response"),
)


class Swagger20Capability(SpecCapability):
    """Swagger 2.0: one self-contained Swagger object."""

    version = "2.0"
    docs_url = "https://github.com/OAI/OpenAPI-Specification/blob/main/versions/2.0.md"
    schemas_url = "https://github.com/OAI/OpenAPI-Specification/tree/main/schemas/v2.0"

    def validate(self, swagger_object: dict[str, Any]) -> ValidationResults:
        """Validate a Swagger 2.0 object.

        Args:
            swagger_object: The parsed document.

        Returns:
            Errors and warnings for the document.
        """
        results = ValidationResults()

        refs = list(_references(swagger_object, []))
        for ref, path in refs:
            if not ref.startswith("#"):
                message = f"Only local references are supported: {ref}"
            elif not _resolves(swagger_object, ref):
                message = f"Reference could not be resolved: {ref}"
            else:
                continue
            results.errors.append(
                ValidationIssue(code="UNRESOLVABLE_REFERENCE", message=message, path=path)
            )
        if results.errors:
            return results

        validator = OpenAPIV2SpecValidator(swagger_object)
        results.errors.extend(issue_from_schema_error(e) for e in validator.iter_errors())
        if results.errors:
            return results

        referenced = {ref for ref, _ in refs}
        for section, code, label in _REUSABLE_SECTIONS:
            components = swagger_object.get(section)
            if not isinstance(components, dict):
                continue
            for name in components:
                pointer = f"#/{section}/{_escape(name)}"
                if pointer not in referenced:
                    results.warnings.append(
                        ValidationIssue(
                            code=code,
                            message=f"{label} is defined but is not used: {pointer}",
                            path=[section, name],
                        )
                    )
        return results


def _references(node: Any, path: list[Any]) -> Iterator[tuple[str, list[Any]]]:
    """Yield every ``$ref`` string in *node* with the path where it appears."""
    if isinstance(node, dict):
        ref = node.get("$ref")
        if isinstance(ref, str):
            yield ref, path + ["$ref"]
        for key, value in node.items():
            if key != "$ref":
                yield from _references(value, path + [key])
    elif isinstance(node, list):
        for index, value in enumerate(node):
            yield from _references(value, path + [index])


def _escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def _resolves(document: Any, ref: str) -> bool:
    """Check that the local JSON pointer *ref* (``#/a/b``) exists in *document*."""
    pointer = ref[1:]
    if not pointer:
        return True
    node = document
    for token in pointer.lstrip("/").split("/"):
        token = token.replace("~1", "/").replace("~0", "~")
        if isinstance(node, dict) and token in node:
            node = node[token]
        elif isinstance(node, list) and token.isdigit() and int(token) < len(node):
            node = node[int(token)]
        else:
            return False
    return True
