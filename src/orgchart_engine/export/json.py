"""JSON export of a computed forest."""

from __future__ import annotations

import json
from pathlib import Path

from orgchart_engine.models.person import Person


def forest_to_data(forest: list[Person]) -> list[dict]:
    """Nested plain data using the host field names."""
    return [p.model_dump(mode="json", by_alias=True, exclude_none=True) for p in forest]


def export_forest_json(forest: list[Person], output_path: Path) -> None:
    """Export a forest as JSON."""
    output_path.write_text(json.dumps(forest_to_data(forest), indent=2))
