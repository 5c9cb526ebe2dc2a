"""Document acquisition -- fetch, parse, and classify the requested sources.

This sub-package turns the list of source references given on the command
line into a role-labelled :data:`~swagkit.models.DocumentSet`:

Typical usage::

    from swagkit.acquisition import acquire

    documents = acquire(["api-docs.json", "pet.json", "store.json"])
    documents.version   # "1.2"

Sub-modules:

* :mod:`~swagkit.acquisition.fetcher` -- I/O layer (URL or local file).
* :mod:`~swagkit.acquisition.parser` -- JSON/YAML parsing by extension.
* :mod:`~swagkit.acquisition.classifier` -- decides the schema generation
  and assigns document roles.
* :mod:`~swagkit.acquisition.orchestrator` -- concurrent fan-out over all
  sources with an order-preserving join.
"""

from swagkit.acquisition.classifier import classify
from swagkit.acquisition.orchestrator import acquire, acquire_documents

__all__ = ["acquire", "acquire_documents", "classify"]
