"""Tests for swagkit.config -- project config, environment, precedence."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from swagkit.config import (
    ENV_FETCH_TIMEOUT,
    ENV_MODE,
    load_project_config,
    resolve_config,
)
from swagkit.exceptions import ConfigError
from swagkit.models import ExecutionMode


class TestProjectConfig:
    def test_missing_file(self, isolated_config: Path) -> None:
        assert load_project_config() is None

    def test_loads_object(self, isolated_config: Path) -> None:
        (isolated_config / "swagkit.json").write_text(
            json.dumps({"fetch_timeout": 5}), encoding="utf-8"
        )
        assert load_project_config() == {"fetch_timeout": 5}

    def test_invalid_json(self, isolated_config: Path) -> None:
        (isolated_config / "swagkit.json").write_text("{broken", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid project config"):
            load_project_config()

    def test_non_object(self, isolated_config: Path) -> None:
        (isolated_config / "swagkit.json").write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ConfigError, match="expected a JSON object"):
            load_project_config()


class TestResolveConfig:
    def test_defaults(self, isolated_config: Path) -> None:
        config = resolve_config()
        assert config.mode == ExecutionMode.INTERACTIVE
        assert config.fetch_timeout is None
        assert config.user_agent.startswith("swagkit/")

    def test_env_selects_test_mode(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(ENV_MODE, "test")
        assert resolve_config().mode == ExecutionMode.TEST

    @pytest.mark.parametrize("value", ["production", "development", "testing"])
    def test_other_env_values_are_interactive(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch, value: str
    ) -> None:
        monkeypatch.setenv(ENV_MODE, value)
        assert resolve_config().mode == ExecutionMode.INTERACTIVE

    def test_cli_mode_wins(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ENV_MODE, "production")
        assert resolve_config(cli_mode=ExecutionMode.TEST).mode == ExecutionMode.TEST

    def test_timeout_precedence(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (isolated_config / "swagkit.json").write_text(
            json.dumps({"fetch_timeout": 5}), encoding="utf-8"
        )
        assert resolve_config().fetch_timeout == 5.0

        monkeypatch.setenv(ENV_FETCH_TIMEOUT, "12.5")
        assert resolve_config().fetch_timeout == 12.5

        assert resolve_config(cli_timeout=30).fetch_timeout == 30.0

    def test_invalid_env_timeout(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(ENV_FETCH_TIMEOUT, "soon")
        with pytest.raises(ConfigError, match=ENV_FETCH_TIMEOUT):
            resolve_config()

    def test_invalid_project_value(self, isolated_config: Path) -> None:
        (isolated_config / "swagkit.json").write_text(
            json.dumps({"mode": "sometimes"}), encoding="utf-8"
        )
        with pytest.raises(ConfigError, match="Invalid configuration"):
            resolve_config()

    def test_project_mode(self, isolated_config: Path) -> None:
        (isolated_config / "swagkit.json").write_text(
            json.dumps({"mode": "test"}), encoding="utf-8"
        )
        assert resolve_config().mode == ExecutionMode.TEST
