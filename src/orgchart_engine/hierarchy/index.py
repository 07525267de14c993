"""Manager -> direct reports adjacency with cycle-safe closure queries."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable

from orgchart_engine.models.person import Person


class SubordinateIndex:
    """Read-only index over a flat person list.

    Built once in O(n); direct-report lookups are O(1). Every traversal keeps
    a visited set, so malformed data with manager cycles cannot loop forever.
    """

    def __init__(self, people: Iterable[Person]) -> None:
        self._people: dict[str, Person] = {}
        reports: dict[str, list[str]] = defaultdict(list)
        for person in people:
            if person.id in self._people:
                continue
            self._people[person.id] = person
            if person.manager_id and person.manager_id != person.id:
                reports[person.manager_id].append(person.id)
        # Lists keep input order for tree building, sets answer membership.
        self._reports_ordered = {k: tuple(v) for k, v in reports.items()}
        self._reports = {k: frozenset(v) for k, v in reports.items()}

    def __contains__(self, person_id: object) -> bool:
        return person_id in self._people

    def __len__(self) -> int:
        return len(self._people)

    def get(self, person_id: str | None) -> Person | None:
        if person_id is None:
            return None
        return self._people.get(person_id)

    def direct_reports_of(self, person_id: str) -> frozenset[str]:
        return self._reports.get(person_id, frozenset())

    def ordered_reports_of(self, person_id: str) -> tuple[str, ...]:
        """Direct reports in input order."""
        return self._reports_ordered.get(person_id, ())

    def has_subordinates(self, person_id: str) -> bool:
        return person_id in self._reports

    def is_direct_subordinate(self, person_id: str, manager_id: str) -> bool:
        return person_id in self.direct_reports_of(manager_id)

    def is_subordinate_of(self, person_id: str, manager_id: str) -> bool:
        """Walk manager pointers upward from ``person_id``.

        Returns False as soon as an id repeats: a cycle means "not a
        subordinate", never an endless walk.
        """
        if person_id == manager_id:
            return False
        person = self._people.get(person_id)
        current = person.manager_id if person else None
        visited: set[str] = {person_id}
        while current:
            if current == manager_id:
                return True
            if current in visited:
                return False
            visited.add(current)
            manager = self._people.get(current)
            current = manager.manager_id if manager else None
        return False

    def manager_chain(self, person_id: str) -> list[str]:
        """Ids from the direct manager upward, stopping at a root or a cycle."""
        chain: list[str] = []
        visited: set[str] = {person_id}
        person = self._people.get(person_id)
        current = person.manager_id if person else None
        while current and current not in visited:
            chain.append(current)
            visited.add(current)
            manager = self._people.get(current)
            current = manager.manager_id if manager else None
        return chain

    def all_subordinates_of(self, person_id: str) -> frozenset[str]:
        """Transitive closure of direct reports. Never includes ``person_id``."""
        found: set[str] = set()
        stack = list(self.direct_reports_of(person_id))
        while stack:
            current = stack.pop()
            if current in found or current == person_id:
                continue
            found.add(current)
            stack.extend(self.direct_reports_of(current))
        return frozenset(found)
