"""Decide the schema generation of a batch and assign document roles.

This is the one place that looks at ``swagger`` versus ``swaggerVersion``.
Everything downstream works with the resulting
:class:`~swagkit.models.CurrentGeneration` or
:class:`~swagkit.models.LegacyGeneration`.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from swagkit.exceptions import UnknownSchemaVersionError
from swagkit.models import CurrentGeneration, DocumentSet, LegacyGeneration

logger = logging.getLogger(__name__)


def classify(documents: Sequence[tuple[str, Any]]) -> DocumentSet:
    """Classify an ordered batch of parsed documents.

    The first document decides: a ``swagger`` field makes it a 2.0 Swagger
    object, a ``swaggerVersion`` field makes it a 1.2 resource listing whose
    followers are its API declarations, in order.

    Args:
        documents: ``(source, parsed_document)`` pairs in command-line order.

    Returns:
        The role-labelled document set.

    Raises:
        UnknownSchemaVersionError: If there are no documents or the first one
            has neither version field.
    """
    if not documents:
        raise UnknownSchemaVersionError("No Swagger documents were supplied")

    root_source, root = documents[0]
    rest = documents[1:]

    if isinstance(root, dict) and "swagger" in root:
        if rest:
            logger.debug(
                "Ignoring %d document(s) after Swagger 2.0 document %s",
                len(rest),
                root_source,
            )
        return CurrentGeneration(source=root_source, swagger_object=root)

    if isinstance(root, dict) and "swaggerVersion" in root:
        return LegacyGeneration(
            source=root_source,
            resource_listing=root,
            declaration_sources=[source for source, _ in rest],
            api_declarations=[document for _, document in rest],
        )

    raise UnknownSchemaVersionError(
        f"Unable to identify the Swagger version for document: {root_source}"
    )
