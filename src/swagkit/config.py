"""Configuration resolution with precedence handling.

swagkit keeps no persistent state. Every invocation resolves a
:class:`~swagkit.models.ToolConfig` from, high to low precedence:

1. CLI flags (``--test-mode``, ``--timeout``)
2. Environment variables (``SWAGKIT_ENV``, ``SWAGKIT_FETCH_TIMEOUT``)
3. Project config (``./swagkit.json``)
4. Defaults

The resolved object is handed to :class:`~swagkit.router.CommandRouter`
explicitly, so the router itself never reads the process environment.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from swagkit.exceptions import ConfigError
from swagkit.models import ExecutionMode, ToolConfig

_PROJECT_CONFIG_FILENAME = "swagkit.json"

ENV_MODE = "SWAGKIT_ENV"
ENV_FETCH_TIMEOUT = "SWAGKIT_FETCH_TIMEOUT"


# --- Project-local config ---


def load_project_config() -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``./swagkit.json``.

    Returns:
        The parsed JSON as a dict, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


# --- Environment ---


def _mode_from_env() -> Optional[ExecutionMode]:
    """Map ``SWAGKIT_ENV`` to an execution mode (``test`` or anything else)."""
    value = os.environ.get(ENV_MODE)
    if not value:
        return None
    if value.strip().lower() == "test":
        return ExecutionMode.TEST
    return ExecutionMode.INTERACTIVE


def _timeout_from_env() -> Optional[float]:
    value = os.environ.get(ENV_FETCH_TIMEOUT)
    if not value:
        return None
    try:
        return float(value)
    except ValueError as exc:
        raise ConfigError(
            f"{ENV_FETCH_TIMEOUT} must be a number of seconds, got {value!r}"
        ) from exc


# --- Precedence resolution ---


def resolve_config(
    cli_mode: Optional[ExecutionMode] = None,
    cli_timeout: Optional[float] = None,
) -> ToolConfig:
    """Resolve the effective configuration with full precedence chain.

    Args:
        cli_mode: Execution mode forced from the command line.
        cli_timeout: Remote fetch timeout from the command line.

    Returns:
        The merged :class:`~swagkit.models.ToolConfig`.

    Raises:
        ConfigError: If the project config or an environment value is invalid.
    """
    # 4 + 3. Defaults overlaid with project-local settings
    values: dict[str, Any] = dict(load_project_config() or {})

    # 2. Environment variables
    env_mode = _mode_from_env()
    if env_mode is not None:
        values["mode"] = env_mode
    env_timeout = _timeout_from_env()
    if env_timeout is not None:
        values["fetch_timeout"] = env_timeout

    # 1. CLI flags (highest precedence)
    if cli_mode is not None:
        values["mode"] = cli_mode
    if cli_timeout is not None:
        values["fetch_timeout"] = cli_timeout

    try:
        return ToolConfig.model_validate(values)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
