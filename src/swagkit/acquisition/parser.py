"""Parse raw document text as JSON or YAML.

The format is chosen by the source reference's extension: ``.yaml`` and
``.yml`` are YAML, everything else (including no extension) is strict JSON.
For URLs only the path component counts, so query strings do not hide the
extension.
"""

from __future__ import annotations

import json
from pathlib import PurePosixPath
from typing import Any, Optional
from urllib.parse import urlparse

import yaml

from swagkit.acquisition.fetcher import is_remote
from swagkit.exceptions import DocumentParseError

YAML_SUFFIXES = (".yaml", ".yml")


def is_yaml_source(source: str) -> bool:
    """Return ``True`` when *source* names a YAML document."""
    path = urlparse(source).path if is_remote(source) else source
    return PurePosixPath(path).suffix.lower() in YAML_SUFFIXES


def parse_document(raw: Optional[str], source: str) -> Any:
    """Parse one document.

    Args:
        raw: The document text, or ``None`` when no document was fetched.
        source: The source reference, used for format selection and in
            error messages.

    Returns:
        The parsed value (normally a dict), or ``None`` when *raw* is
        ``None``. An empty YAML document parses to an empty dict.

    Raises:
        DocumentParseError: If the content is not valid JSON (or YAML, for
            YAML sources).
    """
    if raw is None:
        return None

    if is_yaml_source(source):
        try:
            result = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise DocumentParseError(f"Invalid YAML in {source}: {exc}") from exc
        return {} if result is None else result

    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise DocumentParseError(f"Invalid JSON in {source}: {exc}") from exc
