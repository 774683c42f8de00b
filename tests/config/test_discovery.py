"""Tests for config discovery and loading."""

from pathlib import Path

import pytest

from spamctl.config.discovery import CONFIG_ENV_VAR, find_config, load_config


class TestFindConfig:
    def test_walks_up(self, tmp_path: Path) -> None:
        config = tmp_path / "spamctl.toml"
        config.write_text("")
        nested = tmp_path / "x" / "y"
        nested.mkdir(parents=True)
        assert find_config(nested) == config.resolve()

    def test_env_var_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "spamctl.toml").write_text("")
        other = tmp_path / "other.toml"
        other.write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(other))
        assert find_config(tmp_path) == other

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "absent.toml"))
        assert find_config(tmp_path) is None


class TestLoadConfig:
    def test_defaults_without_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "absent.toml"))
        config = load_config(cwd=tmp_path)
        assert config.filters.sharded is True

    def test_loads_sections(self, tmp_path: Path) -> None:
        path = tmp_path / "spamctl.toml"
        path.write_text('[filters]\nsharded = false\nmax_expression_length = 100\n')
        config = load_config(path)
        assert config.filters.sharded is False
        assert config.filters.max_expression_length == 100
        assert config.provider.path == ".spamctl/filters.json"
