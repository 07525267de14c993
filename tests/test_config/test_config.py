"""Tests for engine configuration."""

from pathlib import Path

import pytest

from orgchart_engine.config import (
    DEFAULT_BLUE_COLLAR_DOMAIN,
    EngineConfig,
    TeamDepth,
    load_config,
)
from orgchart_engine.exceptions import RecordFileError


class TestEngineConfig:
    def test_defaults(self) -> None:
        config = EngineConfig()
        assert config.show_only_team is True
        assert config.team_depth is TeamDepth.DIRECT
        assert config.blue_collar_domain == DEFAULT_BLUE_COLLAR_DOMAIN
        assert config.guid_cache_size == 1000

    def test_team_depth_from_string(self) -> None:
        assert EngineConfig(team_depth="full").team_depth is TeamDepth.FULL


class TestLoadConfig:
    def test_none_gives_defaults(self) -> None:
        assert load_config(None) == EngineConfig()

    def test_yaml_overrides(self, tmp_path: Path) -> None:
        path = tmp_path / "orgchart.yaml"
        path.write_text("team_depth: full\nblue_collar_domain: example.com\n")
        config = load_config(path)
        assert config.team_depth is TeamDepth.FULL
        assert config.blue_collar_domain == "example.com"
        assert config.show_only_team is True

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "orgchart.yaml"
        path.write_text("")
        assert load_config(path) == EngineConfig()

    def test_invalid_value(self, tmp_path: Path) -> None:
        path = tmp_path / "orgchart.yaml"
        path.write_text("team_depth: sideways\n")
        with pytest.raises(RecordFileError, match="Invalid config"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "orgchart.yaml"
        path.write_text("- full\n")
        with pytest.raises(RecordFileError):
            load_config(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(RecordFileError):
            load_config(tmp_path / "missing.yaml")
