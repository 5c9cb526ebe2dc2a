"""Version-keyed Swagger capabilities.

:func:`get_capability` is a pure lookup from a version string (``"1.2"``,
``"2.0"``) to the :class:`~swagkit.capabilities.base.SpecCapability` that
validates, converts, and describes documents of that version.

Typical usage::

    from swagkit.capabilities import get_capability

    capability = get_capability("2.0")
    results = capability.validate(swagger_object)
"""

from __future__ import annotations

import logging
from typing import Optional

from swagkit.capabilities.base import SpecCapability
from swagkit.capabilities.swagger12 import Swagger12Capability
from swagkit.capabilities.swagger20 import Swagger20Capability
from swagkit.exceptions import UnsupportedVersionError

logger = logging.getLogger(__name__)


class CapabilityRegistry:
    """Maps Swagger version strings to capability instances."""

    def __init__(self) -> None:
        self._capabilities: dict[str, SpecCapability] = {}

    def register(self, capability: SpecCapability) -> None:
        """Register *capability* under its :attr:`~SpecCapability.version`."""
        self._capabilities[capability.version] = capability
        logger.debug("Registered capability for Swagger %s", capability.version)

    def get(self, version: str) -> SpecCapability:
        """Return the capability for *version*.

        Raises:
            UnsupportedVersionError: If no capability handles *version*.
        """
        try:
            return self._capabilities[version]
        except KeyError:
            raise UnsupportedVersionError(
                f"Unsupported Swagger version: {version}"
            ) from None

    @property
    def versions(self) -> list[str]:
        """Registered version strings, sorted."""
        return sorted(self._capabilities)


def create_default_registry() -> CapabilityRegistry:
    """Create a registry with the built-in 1.2 and 2.0 capabilities."""
    registry = CapabilityRegistry()
    registry.register(Swagger12Capability())
    registry.register(Swagger20Capability())
    return registry


_registry: Optional[CapabilityRegistry] = None


def get_capability(version: str) -> SpecCapability:
    """Look up the capability for *version* in the default registry."""
    global _registry
    if _registry is None:
        _registry = create_default_registry()
    return _registry.get(version)


__all__ = [
    "CapabilityRegistry",
    "SpecCapability",
    "Swagger12Capability",
    "Swagger20Capability",
    "create_default_registry",
    "get_capability",
]
