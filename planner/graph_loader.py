"""Single-read loader that turns a scope's tasks into an adjacency map."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from planner.models import Direction, TaskNode

DEFAULT_MAX_NODES = 500

logger = logging.getLogger("tg.graph_loader")


class NodeSource(Protocol):
    """Bulk task store consumed by the engine."""

    async def fetch_nodes(self, scope: str, cap: int) -> Sequence[TaskNode]:
        """Return up to ``cap`` tasks of ``scope`` as one consistent snapshot."""
        ...


class ScopeOverflowError(RuntimeError):
    """Raised when a scope holds more tasks than the loader is allowed to read."""

    def __init__(self, scope: str, cap: int) -> None:
        super().__init__(
            f"Scope '{scope}' holds more than {cap} tasks; "
            "raise graph.max_nodes or narrow the scope."
        )
        self.scope = scope
        self.cap = cap


@dataclass
class LoadedGraph:
    """Request-scoped adjacency map for one direction."""

    direction: Direction
    adjacency: dict[str, list[str]] = field(default_factory=dict)
    durations: dict[str, float] = field(default_factory=dict)
    node_count: int = 0


class GraphLoader:
    """Builds a :class:`LoadedGraph` from exactly one ``fetch_nodes`` call."""

    def __init__(self, source: NodeSource, max_nodes: int = DEFAULT_MAX_NODES) -> None:
        if max_nodes < 1:
            raise ValueError("max_nodes must be at least 1.")
        self.source = source
        self.max_nodes = max_nodes

    async def load(self, scope: str, direction: Direction) -> LoadedGraph:
        """Fetch the scope once and index the edge list for ``direction``.

        One extra row is requested so an oversized scope can be told apart
        from one that holds exactly ``max_nodes`` tasks.
        """
        nodes = await self.source.fetch_nodes(scope, self.max_nodes + 1)
        if len(nodes) > self.max_nodes:
            logger.warning(
                "Scope %s exceeds graph cap of %d tasks", scope, self.max_nodes
            )
            raise ScopeOverflowError(scope, self.max_nodes)

        graph = LoadedGraph(direction=direction, node_count=len(nodes))
        for node in nodes:
            graph.adjacency[node.id] = node.edges(direction)
            graph.durations[node.id] = node.duration_days
        logger.debug(
            "Loaded %d tasks for scope %s (%s)", graph.node_count, scope, direction.value
        )
        return graph
