"""Flat person list -> reporting forest.

A person whose manager is not in the loaded set becomes a root instead of
an error: a manager outside the current page of data must not break the chart.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from orgchart_engine.models.person import Hierarchy, Person

logger = logging.getLogger(__name__)


def build_hierarchy(people: Iterable[Person]) -> Hierarchy:
    """Build the reporting forest from a flat list of people.

    The input records are never mutated; the forest is made of copies. Each
    input person appears in the forest exactly once, in input order among
    siblings. Never raises.
    """
    all_people = list(people)
    nodes: dict[str, Person] = {}
    for person in all_people:
        if person.id in nodes:
            logger.warning("Duplicate person id %s; keeping the first record", person.id)
            continue
        nodes[person.id] = person.model_copy(update={"children": [], "level": 0})

    roots: list[Person] = []
    for person_id, node in nodes.items():
        manager = nodes.get(node.manager_id) if node.manager_id else None
        if manager is not None and manager is not node:
            manager.children.append(node)
        else:
            roots.append(node)

    _attach_cyclic_nodes(nodes, roots)
    _set_levels(roots)

    return Hierarchy(forest=roots, all_people=all_people)


def _attach_cyclic_nodes(nodes: dict[str, Person], roots: list[Person]) -> None:
    """Promote one person per manager cycle to a root.

    Every id in a cycle has a resolvable manager, so none of them is ever
    reached from a root. Walking manager pointers from an unreached person
    ends on the cycle; cutting the edge above the first repeated id restores
    a tree and leaves people who merely report into the cycle in place.
    """
    reached: set[str] = set()
    for root in roots:
        _mark_reached(root, reached)

    for person_id in nodes:
        if person_id in reached:
            continue
        seen: set[str] = set()
        current = person_id
        while current not in seen:
            seen.add(current)
            current = nodes[current].manager_id
        node = nodes[current]
        manager = nodes[node.manager_id]
        manager.children = [c for c in manager.children if c is not node]
        logger.warning(
            "Manager cycle detected at %s (%s); showing it as a root", node.name, node.id
        )
        roots.append(node)
        _mark_reached(node, reached)


def _mark_reached(node: Person, reached: set[str]) -> None:
    stack = [node]
    while stack:
        current = stack.pop()
        if current.id in reached:
            continue
        reached.add(current.id)
        stack.extend(current.children)


def _set_levels(roots: list[Person]) -> None:
    stack = [(root, 0) for root in roots]
    while stack:
        node, level = stack.pop()
        node.level = level
        stack.extend((child, level + 1) for child in node.children)


def flatten_hierarchy(forest: Iterable[Person]) -> list[Person]:
    """Pre-order list of every node in the forest."""
    result: list[Person] = []

    def _walk(people: Iterable[Person]) -> None:
        for person in people:
            result.append(person)
            _walk(person.children)

    _walk(forest)
    return result


def find_person(forest: Iterable[Person], person_id: str) -> Person | None:
    """Depth-first search of the forest by id."""
    for person in forest:
        if person.id == person_id:
            return person
        found = find_person(person.children, person_id)
        if found is not None:
            return found
    return None


def count_people(person: Person) -> int:
    """Number of nodes in the subtree, counting ``person`` itself."""
    return 1 + sum(count_people(child) for child in person.children)


def validate_hierarchy_for_cycles(people: Iterable[Person]) -> bool:
    """Scan all manager chains for cycles.

    Returns False and logs a warning naming the first person found on a
    cycle. Purely diagnostic: build_hierarchy copes with cycles on its own.
    """
    by_id = {p.id: p for p in people}
    done: set[str] = set()

    for start in by_id.values():
        if start.id in done:
            continue
        path: list[str] = []
        on_path: set[str] = set()
        current: Person | None = start
        while current is not None and current.id not in done:
            if current.id in on_path:
                logger.warning(
                    "Cycle detected in hierarchy starting from person: %s (%s)",
                    current.name,
                    current.id,
                )
                return False
            path.append(current.id)
            on_path.add(current.id)
            current = by_id.get(current.manager_id) if current.manager_id else None
        done.update(path)

    return True


def find_orphans(people: Iterable[Person]) -> list[Person]:
    """People whose declared manager is not in the loaded set."""
    people = list(people)
    known = {p.id for p in people}
    return [p for p in people if p.manager_id and p.manager_id not in known]
