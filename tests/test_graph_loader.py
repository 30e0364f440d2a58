"""Graph loader tests: node count, edge defaults and duration clamping."""

from __future__ import annotations

import asyncio

from planner.graph_loader import GraphLoader
from planner.models import Direction
from store.memory_source import InMemoryNodeSource


def build_source() -> InMemoryNodeSource:
    source = InMemoryNodeSource()
    source.add("ws", {"id": "a", "blockedBy": None, "blocks": ["b"], "durationDays": None})
    source.add("ws", {"id": "b", "blockedBy": ["a"], "blocks": None, "durationDays": -3})
    source.add("ws", {"id": "c", "durationDays": 1.5})
    source.add("other", {"id": "x"})
    return source


def test_load_counts_scope_nodes_and_defaults_edges() -> None:
    source = build_source()
    loader = GraphLoader(source, max_nodes=10)

    ancestors = asyncio.run(loader.load("ws", Direction.ANCESTORS))
    descendants = asyncio.run(loader.load("ws", Direction.DESCENDANTS))

    assert ancestors.node_count == 3
    assert ancestors.adjacency == {"a": [], "b": ["a"], "c": []}
    assert descendants.node_count == 3
    assert descendants.adjacency == {"a": ["b"], "b": [], "c": []}
    assert source.fetch_calls == 2


def test_load_clamps_missing_and_negative_durations() -> None:
    graph = asyncio.run(GraphLoader(build_source()).load("ws", Direction.ANCESTORS))

    assert graph.durations == {"a": 0.0, "b": 0.0, "c": 1.5}


def test_load_empty_scope() -> None:
    graph = asyncio.run(GraphLoader(build_source()).load("missing", Direction.ANCESTORS))

    assert graph.node_count == 0
    assert graph.adjacency == {}
