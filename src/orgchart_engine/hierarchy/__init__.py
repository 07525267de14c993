"""Reporting forest construction, subordinate queries, and viewer scoping."""

from orgchart_engine.hierarchy.builder import (
    build_hierarchy,
    count_people,
    find_orphans,
    find_person,
    flatten_hierarchy,
    validate_hierarchy_for_cycles,
)
from orgchart_engine.hierarchy.index import SubordinateIndex
from orgchart_engine.hierarchy.scope import (
    build_user_context,
    build_view,
    filter_to_team,
    is_person_in_team,
    resolve_person,
)

__all__ = [
    "SubordinateIndex",
    "build_hierarchy",
    "build_user_context",
    "build_view",
    "count_people",
    "filter_to_team",
    "find_orphans",
    "find_person",
    "flatten_hierarchy",
    "is_person_in_team",
    "resolve_person",
    "validate_hierarchy_for_cycles",
]
