"""Critical path and closure tests on plain adjacency maps."""

from __future__ import annotations

from planner.path_analyzer import critical_path, transitive_closure


def test_closure_skips_dangling_ids() -> None:
    adjacency = {"a": ["b", "deleted"], "b": ["c"], "c": []}

    assert transitive_closure(adjacency, "a") == {"b", "c"}


def test_closure_excludes_origin_on_cycle() -> None:
    adjacency = {"a": ["b"], "b": ["a"]}

    assert transitive_closure(adjacency, "a") == {"b"}


def test_critical_path_tie_keeps_first_predecessor() -> None:
    adjacency = {"s": [], "x": ["s"], "y": ["s"], "t": ["y", "x"]}
    durations = {"s": 1.0, "x": 2.0, "y": 2.0, "t": 1.0}

    result = critical_path(adjacency, durations, "s", "t")

    assert result.length == 4.0
    assert result.path == ["s", "y", "t"]


def test_critical_path_takes_heaviest_predecessor_chain() -> None:
    # "c" has no predecessors but outweighs the chain through "start".
    adjacency = {"start": [], "a": ["start"], "c": [], "end": ["a", "c"]}
    durations = {"start": 0.0, "a": 2.0, "c": 10.0, "end": 1.0}

    result = critical_path(adjacency, durations, "start", "end")

    assert result.length == 11.0
    assert result.path == ["c", "end"]


def test_critical_path_counts_predecessors_of_source() -> None:
    adjacency = {"before": [], "s": ["before"], "t": ["s"]}
    durations = {"before": 5.0, "s": 1.0, "t": 1.0}

    result = critical_path(adjacency, durations, "s", "t")

    assert result.length == 7.0
    assert result.path == ["before", "s", "t"]


def test_unconnected_sink_reports_own_duration() -> None:
    adjacency = {"s": [], "t": []}
    durations = {"s": 3.0, "t": 4.0}

    result = critical_path(adjacency, durations, "s", "t")

    assert result.length == 4.0
    assert result.path == ["t"]


def test_missing_source_reports_sink_duration() -> None:
    adjacency = {"t": ["ghost"]}

    result = critical_path(adjacency, {"t": 2.5}, "ghost", "t")

    assert result.length == 2.5
    assert result.path == ["t"]


def test_source_equal_to_sink() -> None:
    result = critical_path({"s": []}, {"s": 2.0}, "s", "s")

    assert result.length == 2.0
    assert result.path == ["s"]


def test_critical_path_terminates_on_corrupted_cycle() -> None:
    adjacency = {"s": [], "a": ["s", "b"], "b": ["a"], "t": ["b"]}
    durations = {"s": 1.0, "a": 1.0, "b": 1.0, "t": 1.0}

    result = critical_path(adjacency, durations, "s", "t")

    assert result.path == ["s", "a", "b", "t"]
    assert result.length == 4.0


def test_shared_predecessor_computed_once_per_call() -> None:
    # Wide diamond lattice; without memoization this would explode.
    layers = 30
    adjacency: dict[str, list[str]] = {"s": []}
    previous = ["s"]
    for depth in range(layers):
        current = [f"l{depth}a", f"l{depth}b"]
        for node in current:
            adjacency[node] = list(previous)
        previous = current
    adjacency["t"] = list(previous)
    durations = {node: 1.0 for node in adjacency}

    result = critical_path(adjacency, durations, "s", "t")

    assert result.length == layers + 2
    assert result.path[0] == "s"
    assert result.path[-1] == "t"
    assert all(step.endswith("a") for step in result.path[1:-1])
