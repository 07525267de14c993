"""YAML export of a computed forest."""

from __future__ import annotations

from pathlib import Path

import yaml

from orgchart_engine.export.json import forest_to_data
from orgchart_engine.models.person import Person


def export_forest_yaml(forest: list[Person], output_path: Path) -> None:
    """Export a forest as YAML."""
    output_path.write_text(
        yaml.dump(forest_to_data(forest), default_flow_style=False, sort_keys=False)
    )
