"""Fetch and parse every requested source concurrently.

All sources are loaded on one event loop through a single
:class:`httpx.AsyncClient`. The join waits for every load to settle, even
after one has failed, and then raises the failure with the lowest input
index. Results keep the input order no matter which fetch finished first.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional, Sequence

import httpx

from swagkit.acquisition.classifier import classify
from swagkit.acquisition.fetcher import fetch_source
from swagkit.acquisition.parser import parse_document
from swagkit.models import DocumentSet, ToolConfig

logger = logging.getLogger(__name__)


async def _load(source: Any, client: httpx.AsyncClient) -> Any:
    raw = await fetch_source(source, client)
    if raw is None:
        return None
    logger.debug("Fetched %s (%d characters)", source, len(raw))
    return parse_document(raw, source)


async def acquire_documents(
    sources: Sequence[Optional[str]],
    config: Optional[ToolConfig] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> DocumentSet:
    """Load and classify *sources*.

    Args:
        sources: Source references in command-line order. ``None`` entries
            are skipped.
        config: Supplies the fetch timeout and User-Agent. Defaults apply
            when omitted.
        transport: Optional httpx transport (tests use
            :class:`httpx.MockTransport`).

    Returns:
        The role-labelled document set.

    Raises:
        SwagkitError: The first fetch, parse, or classification failure.
    """
    config = config or ToolConfig()
    async with httpx.AsyncClient(
        headers={"User-Agent": config.user_agent},
        timeout=config.fetch_timeout,
        follow_redirects=True,
        transport=transport,
    ) as client:
        outcomes = await asyncio.gather(
            *(_load(source, client) for source in sources),
            return_exceptions=True,
        )

    for outcome in outcomes:
        if isinstance(outcome, BaseException):
            raise outcome

    loaded = [
        (source, document)
        for source, document in zip(sources, outcomes)
        if document is not None
    ]
    return classify(loaded)


def acquire(
    sources: Sequence[Optional[str]],
    config: Optional[ToolConfig] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> DocumentSet:
    """Blocking wrapper around :func:`acquire_documents`."""
    return asyncio.run(acquire_documents(sources, config, transport))
