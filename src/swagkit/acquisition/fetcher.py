"""Read one document's raw text from a URL or a local file.

Remote documents are fetched through a shared :class:`httpx.AsyncClient`
owned by :mod:`~swagkit.acquisition.orchestrator`. The response body is used
whatever the HTTP status: an error page simply fails to parse later on.
Local files are read synchronously and in full.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import httpx

from swagkit.exceptions import FetchError


def is_remote(source: str) -> bool:
    """Return ``True`` when *source* is an ``http://`` or ``https://`` URL."""
    return source.startswith(("http://", "https://"))


async def fetch_source(source: Any, client: httpx.AsyncClient) -> Optional[str]:
    """Fetch the raw text of one document.

    Args:
        source: A URL (http/https) or file path. Anything that is not a
            string means "no document" and yields ``None``.
        client: The client used for remote fetches.

    Returns:
        The document text, or ``None`` when no source was supplied.

    Raises:
        FetchError: If the file cannot be read or the request fails at the
            transport level.
    """
    if not isinstance(source, str):
        return None
    if is_remote(source):
        return await _fetch_from_url(source, client)
    return _read_from_file(source)


async def _fetch_from_url(url: str, client: httpx.AsyncClient) -> str:
    try:
        response = await client.get(url)
    except httpx.HTTPError as exc:
        raise FetchError(f"Failed to fetch {url}: {exc}") from exc
    return response.text


def _read_from_file(path: str) -> str:
    file_path = Path.cwd() / path
    try:
        return file_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise FetchError(f"File not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise FetchError(f"Failed to read {path}: {exc}") from exc
