"""Task dependency graph engine.

Every public operation performs at most one bulk read through the
:class:`~planner.graph_loader.NodeSource` and then works purely in memory
on an adjacency map owned by that call. Nothing is cached between calls.
"""

from __future__ import annotations

import logging

from planner import cycle_guard, path_analyzer
from planner.graph_loader import DEFAULT_MAX_NODES, GraphLoader, NodeSource
from planner.models import CriticalPath, Direction

logger = logging.getLogger("tg.dependency_graph")


class DependencyGraphEngine:
    """Read-only structural queries over one scope's task graph."""

    def __init__(self, source: NodeSource, max_nodes: int = DEFAULT_MAX_NODES) -> None:
        self.loader = GraphLoader(source=source, max_nodes=max_nodes)

    async def would_create_cycle(self, scope: str, task: str, proposed_blocker: str) -> bool:
        """Return True when ``task`` must not become blocked by ``proposed_blocker``."""
        if task == proposed_blocker:
            return True
        graph = await self.loader.load(scope, Direction.ANCESTORS)
        result = cycle_guard.would_create_cycle(graph.adjacency, task, proposed_blocker)
        if result:
            logger.info(
                "Rejected edge %s blockedBy %s in scope %s: cycle", task, proposed_blocker, scope
            )
        return result

    async def get_ancestors(self, scope: str, task: str) -> set[str]:
        """All tasks ``task`` depends on, directly or transitively."""
        graph = await self.loader.load(scope, Direction.ANCESTORS)
        return path_analyzer.transitive_closure(graph.adjacency, task)

    async def get_descendants(self, scope: str, task: str) -> set[str]:
        """All tasks affected by ``task``, following ``blocks`` edges."""
        graph = await self.loader.load(scope, Direction.DESCENDANTS)
        return path_analyzer.transitive_closure(graph.adjacency, task)

    async def get_critical_path(self, scope: str, source: str, sink: str) -> CriticalPath:
        graph = await self.loader.load(scope, Direction.ANCESTORS)
        return path_analyzer.critical_path(graph.adjacency, graph.durations, source, sink)

    async def get_critical_path_length(self, scope: str, source: str, sink: str) -> float:
        result = await self.get_critical_path(scope, source, sink)
        return result.length

    async def find_cycle(self, scope: str) -> list[str] | None:
        """Scan the whole scope for an existing ``blockedBy`` cycle."""
        graph = await self.loader.load(scope, Direction.ANCESTORS)
        cycle = cycle_guard.find_cycle(graph.adjacency)
        if cycle:
            logger.warning("Scope %s contains a dependency cycle: %s", scope, " -> ".join(cycle))
        return cycle
