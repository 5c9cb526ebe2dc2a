"""Shared test fixtures for swagkit.

Provides the fixture document paths, a clean environment for configuration
resolution, an installed plain-text output manager, and a CLI runner. These
fixtures are automatically discovered by pytest and available to all test
modules without explicit imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from swagkit.config import ENV_FETCH_TIMEOUT, ENV_MODE
from swagkit.output import OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"
PETSTORE_12_DIR = FIXTURES_DIR / "petstore_1.2"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    Typer's CliRunner swaps sys.stdout/sys.stderr during a test; a manager
    created inside the runner must not leak into the next test.
    """
    yield
    reset_output()


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear SWAGKIT_* and colour variables so the host shell cannot leak in."""
    for var in (ENV_MODE, ENV_FETCH_TIMEOUT, "NO_COLOR"):
        monkeypatch.delenv(var, raising=False)


# ---------------------------------------------------------------------------
# Document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_20_path() -> str:
    """Absolute path of the Swagger 2.0 petstore (JSON)."""
    return str(FIXTURES_DIR / "petstore_2.0.json")


@pytest.fixture
def petstore_20_yaml_path() -> str:
    """Absolute path of the Swagger 2.0 petstore (YAML)."""
    return str(FIXTURES_DIR / "petstore_2.0.yaml")


@pytest.fixture
def petstore_20_raw(petstore_20_path: str) -> dict[str, Any]:
    with open(petstore_20_path, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def petstore_12_paths() -> list[str]:
    """Resource listing followed by its two API declarations."""
    return [
        str(PETSTORE_12_DIR / "api-docs.json"),
        str(PETSTORE_12_DIR / "pet.json"),
        str(PETSTORE_12_DIR / "store.json"),
    ]


@pytest.fixture
def petstore_12_raw(petstore_12_paths: list[str]) -> tuple[dict[str, Any], list[dict[str, Any]]]:
    """``(resource_listing, [pet, store])`` loaded as dicts."""
    loaded = []
    for path in petstore_12_paths:
        with open(path, encoding="utf-8") as f:
            loaded.append(json.load(f))
    return loaded[0], loaded[1:]


@pytest.fixture
def invalid_declaration_path() -> str:
    """API declaration missing ``basePath`` and an operation ``nickname``."""
    return str(PETSTORE_12_DIR / "pet-invalid.json")


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty temporary directory.

    Keeps a ``swagkit.json`` in the developer's checkout from affecting
    configuration resolution.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def plain_output() -> OutputManager:
    """Install a colourless OutputManager so captured stderr is plain text."""
    output = OutputManager(no_color=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
