"""Forest serialization."""

from orgchart_engine.export.json import export_forest_json, forest_to_data
from orgchart_engine.export.yaml import export_forest_yaml

__all__ = ["export_forest_json", "export_forest_yaml", "forest_to_data"]
