"""Tests for the hierarchy builder."""

import logging

from orgchart_engine.hierarchy.builder import (
    build_hierarchy,
    count_people,
    find_orphans,
    find_person,
    flatten_hierarchy,
    validate_hierarchy_for_cycles,
)
from orgchart_engine.models.person import Person


def _person(person_id: str, manager_id: str | None = None, **kwargs) -> Person:
    return Person(id=person_id, name=kwargs.pop("name", f"P{person_id}"), manager_id=manager_id, **kwargs)


def _scenario() -> list[Person]:
    return [
        _person("1", name="CEO"),
        _person("2", "1", name="Mgr"),
        _person("3", "2", name="Worker", email="12345@co.com"),
        _person("4", "2", name="Employee", email="jane@co.com"),
    ]


class TestBuildHierarchy:
    def test_scenario_forest(self) -> None:
        result = build_hierarchy(_scenario())
        assert [p.name for p in result.forest] == ["CEO"]
        ceo = result.forest[0]
        assert [p.name for p in ceo.children] == ["Mgr"]
        mgr = ceo.children[0]
        assert [p.name for p in mgr.children] == ["Worker", "Employee"]
        assert all(not p.children for p in mgr.children)

    def test_levels(self) -> None:
        result = build_hierarchy(_scenario())
        levels = {p.name: p.level for p in flatten_hierarchy(result.forest)}
        assert levels == {"CEO": 0, "Mgr": 1, "Worker": 2, "Employee": 2}

    def test_all_people_is_input(self) -> None:
        people = _scenario()
        result = build_hierarchy(people)
        assert result.all_people == people

    def test_input_not_mutated(self) -> None:
        people = _scenario()
        build_hierarchy(people)
        assert all(p.children == [] for p in people)
        assert all(p.level == 0 for p in people)

    def test_every_person_exactly_once(self) -> None:
        people = [_person(str(i), str(i // 3) if i else None) for i in range(40)]
        result = build_hierarchy(people)
        ids = [p.id for p in flatten_hierarchy(result.forest)]
        assert sorted(ids) == sorted(p.id for p in people)
        assert len(ids) == len(set(ids))

    def test_unknown_manager_becomes_root(self) -> None:
        people = [_person("1"), _person("2", "missing")]
        result = build_hierarchy(people)
        assert {p.id for p in result.forest} == {"1", "2"}

    def test_self_managed_is_root(self) -> None:
        result = build_hierarchy([_person("1", "1")])
        assert [p.id for p in result.forest] == ["1"]
        assert result.forest[0].children == []

    def test_empty(self) -> None:
        result = build_hierarchy([])
        assert result.forest == []
        assert result.all_people == []

    def test_cycle_still_shows_everyone(self, caplog) -> None:
        people = [_person("1"), _person("A", "B"), _person("B", "A"), _person("C", "A")]
        with caplog.at_level(logging.WARNING):
            result = build_hierarchy(people)
        ids = [p.id for p in flatten_hierarchy(result.forest)]
        assert sorted(ids) == ["1", "A", "B", "C"]
        assert "cycle" in caplog.text.lower()

    def test_report_into_cycle_keeps_its_manager(self, caplog) -> None:
        people = [_person("C", "A"), _person("A", "B"), _person("B", "A")]
        with caplog.at_level(logging.WARNING):
            result = build_hierarchy(people)
        assert [p.id for p in result.forest] == ["A"]
        a = result.forest[0]
        assert [p.id for p in a.children] == ["C", "B"]
        assert [p.level for p in a.children] == [1, 1]
        assert "(C)" not in caplog.text
        assert "(A)" in caplog.text

    def test_duplicate_ids_keep_first(self) -> None:
        people = [_person("1", name="First"), _person("1", name="Second")]
        result = build_hierarchy(people)
        assert [p.name for p in result.forest] == ["First"]


class TestForestQueries:
    def test_flatten_is_preorder(self) -> None:
        result = build_hierarchy(_scenario())
        assert [p.id for p in flatten_hierarchy(result.forest)] == ["1", "2", "3", "4"]

    def test_find_person(self) -> None:
        result = build_hierarchy(_scenario())
        assert find_person(result.forest, "4").name == "Employee"
        assert find_person(result.forest, "nope") is None

    def test_count_people(self) -> None:
        result = build_hierarchy(_scenario())
        assert count_people(result.forest[0]) == 4
        assert count_people(result.forest[0].children[0].children[0]) == 1


class TestValidation:
    def test_acyclic(self) -> None:
        assert validate_hierarchy_for_cycles(_scenario())

    def test_two_node_cycle(self, caplog) -> None:
        with caplog.at_level(logging.WARNING):
            assert not validate_hierarchy_for_cycles([_person("A", "B"), _person("B", "A")])
        assert "Cycle detected" in caplog.text

    def test_self_cycle(self) -> None:
        assert not validate_hierarchy_for_cycles([_person("A", "A")])

    def test_chain_into_cycle(self) -> None:
        people = [_person("X", "A"), _person("A", "B"), _person("B", "C"), _person("C", "A")]
        assert not validate_hierarchy_for_cycles(people)

    def test_find_orphans(self) -> None:
        people = [_person("1"), _person("2", "1"), _person("3", "ghost")]
        assert [p.id for p in find_orphans(people)] == ["3"]
