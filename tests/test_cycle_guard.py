"""Cycle guard tests on plain adjacency maps."""

from __future__ import annotations

from planner.cycle_guard import find_cycle, would_create_cycle


def test_two_node_cycle_detected() -> None:
    # b is blocked by a; making a blocked by b closes the loop.
    adjacency = {"a": [], "b": ["a"]}

    assert would_create_cycle(adjacency, "a", "b") is True
    assert would_create_cycle(adjacency, "b", "a") is False


def test_long_transitive_cycle_detected() -> None:
    adjacency = {"a": [], "b": ["a"], "c": ["b"], "d": ["c"]}

    assert would_create_cycle(adjacency, "a", "d") is True


def test_multiple_blockers_without_path_is_safe() -> None:
    adjacency = {"a": [], "b": [], "c": ["a", "b"], "d": []}

    assert would_create_cycle(adjacency, "d", "c") is False
    assert would_create_cycle(adjacency, "a", "c") is True


def test_dangling_reference_is_a_dead_end() -> None:
    adjacency = {"a": ["deleted"], "b": []}

    assert would_create_cycle(adjacency, "b", "a") is False


def test_find_cycle_returns_loop_members() -> None:
    adjacency = {"a": ["b"], "b": ["c"], "c": ["a"], "d": ["a"]}

    cycle = find_cycle(adjacency)

    assert cycle is not None
    assert set(cycle) == {"a", "b", "c"}
    for current, nxt in zip(cycle, cycle[1:] + cycle[:1]):
        assert nxt in adjacency[current]


def test_find_cycle_self_loop() -> None:
    assert find_cycle({"a": ["a"]}) == ["a"]


def test_find_cycle_none_for_dag() -> None:
    adjacency = {"a": [], "b": ["a"], "c": ["a", "b"], "d": ["c", "ghost"]}

    assert find_cycle(adjacency) is None
