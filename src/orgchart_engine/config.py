"""Engine configuration.

Defaults match the production host. A YAML file can override any field::

    show_only_team: true
    team_depth: full
    blue_collar_domain: example.com
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from orgchart_engine.exceptions import RecordFileError

DEFAULT_BLUE_COLLAR_DOMAIN = "assaabloy.com"
DEFAULT_GUID_CACHE_SIZE = 1000


class TeamDepth(StrEnum):
    """How much of the viewer's subtree the team view shows."""

    DIRECT = "direct"  # the viewer plus direct reports only
    FULL = "full"  # the viewer plus every transitive report


class EngineConfig(BaseModel):
    show_only_team: bool = True
    team_depth: TeamDepth = TeamDepth.DIRECT
    blue_collar_domain: str = DEFAULT_BLUE_COLLAR_DOMAIN
    guid_cache_size: int = Field(default=DEFAULT_GUID_CACHE_SIZE, ge=2)


def load_config(path: Path | None) -> EngineConfig:
    """Load an EngineConfig from YAML. ``None`` returns the defaults."""
    if path is None:
        return EngineConfig()
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except (OSError, yaml.YAMLError) as e:
        raise RecordFileError(f"Cannot read config {path}: {e}") from e
    if not isinstance(data, dict):
        raise RecordFileError(f"Config {path} must be a mapping, got {type(data).__name__}")
    try:
        return EngineConfig.model_validate(data)
    except ValidationError as e:
        raise RecordFileError(f"Invalid config {path}: {e}") from e
