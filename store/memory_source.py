"""In-memory task source used for fixtures and call accounting."""

from __future__ import annotations

from collections import defaultdict
from typing import Any

from planner.models import TaskNode


class InMemoryNodeSource:
    """Holds task snapshots per scope and counts bulk reads."""

    def __init__(self) -> None:
        self._scopes: dict[str, list[TaskNode]] = defaultdict(list)
        self.fetch_calls = 0

    def add(self, scope: str, node: TaskNode | dict[str, Any]) -> TaskNode:
        """Add a task to ``scope``; dicts may use camelCase edge names."""
        task = node if isinstance(node, TaskNode) else TaskNode.model_validate(node)
        self._scopes[scope].append(task)
        return task

    async def fetch_nodes(self, scope: str, cap: int) -> list[TaskNode]:
        self.fetch_calls += 1
        return [node.model_copy(deep=True) for node in self._scopes.get(scope, [])[:cap]]
