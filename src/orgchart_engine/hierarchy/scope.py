"""Viewer resolution and the hierarchy view shown to that viewer."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from orgchart_engine.config import EngineConfig, TeamDepth
from orgchart_engine.hierarchy.index import SubordinateIndex
from orgchart_engine.identity.normalizer import GuidCache, compare_guids
from orgchart_engine.models.context import UserContext
from orgchart_engine.models.person import Hierarchy, Person

logger = logging.getLogger(__name__)


def resolve_person(
    all_people: Sequence[Person],
    user_id: str | None,
    cache: GuidCache | None = None,
) -> Person | None:
    """Find the person record for a host identity token.

    Tries an exact ``ag_userid`` match, then a normalized GUID match, then
    treats ``user_id`` as an internal person id. Returns None (and logs a
    warning) when nothing matches.
    """
    if not user_id:
        return None

    for person in all_people:
        if person.external_user_id == user_id:
            return person

    for person in all_people:
        if compare_guids(person.external_user_id, user_id, cache):
            return person

    for person in all_people:
        if person.id == user_id:
            return person

    logger.warning("No person found for user id %s", user_id)
    return None


def filter_to_team(
    all_people: Sequence[Person],
    person: Person,
    depth: TeamDepth = TeamDepth.DIRECT,
    index: SubordinateIndex | None = None,
) -> list[Person]:
    """Single-root forest with ``person`` at the top.

    ``TeamDepth.DIRECT`` shows direct reports only; ``TeamDepth.FULL`` the
    whole subtree. Levels restart at 0 for the new root.
    """
    if index is None:
        index = SubordinateIndex(all_people)
    max_depth = 1 if depth is TeamDepth.DIRECT else None
    visited = {person.id}

    def _subtree(manager_id: str, level: int) -> list[Person]:
        if max_depth is not None and level > max_depth:
            return []
        children: list[Person] = []
        for report_id in index.ordered_reports_of(manager_id):
            if report_id in visited:
                continue
            visited.add(report_id)
            report = index.get(report_id)
            children.append(
                report.model_copy(
                    update={"level": level, "children": _subtree(report_id, level + 1)}
                )
            )
        return children

    root = person.model_copy(update={"level": 0, "children": _subtree(person.id, 1)})
    return [root]


def build_view(
    hierarchy: Hierarchy,
    user_id: str | None,
    config: EngineConfig | None = None,
    cache: GuidCache | None = None,
) -> list[Person]:
    """The forest the layout step should draw for this viewer.

    With team filtering off, or no viewer, the full forest is returned
    untouched. An unknown viewer gets an empty view.
    """
    config = config or EngineConfig()
    if not config.show_only_team or not user_id:
        return hierarchy.forest

    person = resolve_person(hierarchy.all_people, user_id, cache)
    if person is None:
        return []
    return filter_to_team(hierarchy.all_people, person, config.team_depth)


def build_user_context(
    user_id: str,
    all_people: Sequence[Person],
    index: SubordinateIndex | None = None,
    cache: GuidCache | None = None,
) -> UserContext:
    """Resolve the viewer and precompute their direct and transitive reports."""
    person = resolve_person(all_people, user_id, cache)
    if person is None:
        return UserContext(user_id=user_id)

    if index is None:
        index = SubordinateIndex(all_people)
    return UserContext(
        user_id=user_id,
        person_id=person.id,
        direct_subordinate_ids=index.direct_reports_of(person.id),
        all_subordinate_ids=index.all_subordinates_of(person.id),
    )


def is_person_in_team(
    all_people: Sequence[Person],
    person_id: str,
    user_id: str | None,
    cache: GuidCache | None = None,
) -> bool:
    """True when ``person_id`` is the viewer or anyone reporting to them."""
    viewer = resolve_person(all_people, user_id, cache)
    if viewer is None:
        return False
    if viewer.id == person_id:
        return True
    return SubordinateIndex(all_people).is_subordinate_of(person_id, viewer.id)
