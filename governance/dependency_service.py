"""Dependency edits guarded by the graph engine's cycle check."""

from __future__ import annotations

import logging
from typing import Any

from governance.activity_log import ActivityLogger
from planner.dependency_graph import DependencyGraphEngine
from store.task_repository import TaskRepository

logger = logging.getLogger("tg.dependencies")


class TaskNotFoundError(LookupError):
    """Raised when an edit names a task that does not exist."""


class DependencyError(ValueError):
    """Raised when a requested dependency edit is not allowed."""


class CircularDependencyError(DependencyError):
    """Raised when an edge would make a task depend on itself."""


class DependencyService:
    """Adds and removes ``blockedBy`` edges and keeps task status in step.

    The cycle check is advisory: it reads a snapshot, then the write happens
    in a separate transaction. Callers that need check-then-write atomicity
    must serialize edits per workspace.
    """

    def __init__(
        self,
        repository: TaskRepository,
        engine: DependencyGraphEngine,
        activity_log: ActivityLogger | None = None,
    ) -> None:
        self.repository = repository
        self.engine = engine
        self.activity_log = activity_log

    async def add_dependency(
        self, task_id: str, blocked_by_task_id: str, added_by: str = "system"
    ) -> dict[str, Any]:
        """Make ``task_id`` blocked by ``blocked_by_task_id``."""
        task = self._require(task_id, "Task")
        blocker = self._require(blocked_by_task_id, "Blocking task")

        if task_id == blocked_by_task_id:
            raise CircularDependencyError("A task cannot block itself.")
        if task["workspace_id"] != blocker["workspace_id"]:
            raise DependencyError("Tasks in different workspaces cannot depend on each other.")

        scope = task["workspace_id"]
        if await self.engine.would_create_cycle(scope, task_id, blocked_by_task_id):
            raise CircularDependencyError(
                "Adding this dependency would create a circular reference."
            )

        self.repository.link(task_id, blocked_by_task_id)

        status = task["status"]
        if blocker["status"] != "done" and status not in {"done", "blocked"}:
            self.repository.set_status(task_id, "blocked")
            self._record(
                "task_blocked",
                task_id,
                added_by,
                f'Task "{task["title"]}" automatically blocked by "{blocker["title"]}"',
                old_value=status,
                new_value="blocked",
            )
            status = "blocked"

        self._record(
            "dependency_added",
            task_id,
            added_by,
            f'Added dependency: "{task["title"]}" is now blocked by "{blocker["title"]}"',
            new_value=blocked_by_task_id,
        )
        return {
            "success": True,
            "task_id": task_id,
            "blocked_by_task_id": blocked_by_task_id,
            "status": status,
        }

    async def remove_dependency(
        self, task_id: str, blocked_by_task_id: str, removed_by: str = "system"
    ) -> dict[str, Any]:
        """Drop the edge and unblock the task once no unfinished blocker remains."""
        task = self._require(task_id, "Task")
        blocker = self._require(blocked_by_task_id, "Blocking task")

        remaining = self.repository.unlink(task_id, blocked_by_task_id)

        status = task["status"]
        if status == "blocked":
            # Blockers deleted since the edge was written count as finished.
            statuses = self.repository.statuses(remaining)
            if all(value == "done" for value in statuses.values()):
                self.repository.set_status(task_id, "ready")
                self._record(
                    "task_unblocked",
                    task_id,
                    removed_by,
                    f'Task "{task["title"]}" automatically unblocked; all dependencies cleared',
                    old_value="blocked",
                    new_value="ready",
                )
                status = "ready"

        self._record(
            "dependency_removed",
            task_id,
            removed_by,
            f'Removed dependency: "{task["title"]}" is no longer blocked by "{blocker["title"]}"',
            old_value=blocked_by_task_id,
        )
        return {
            "success": True,
            "task_id": task_id,
            "blocked_by_task_id": blocked_by_task_id,
            "status": status,
        }

    def _require(self, task_id: str, label: str) -> dict[str, Any]:
        task = self.repository.get_task(task_id)
        if task is None:
            raise TaskNotFoundError(f"{label} not found: {task_id}")
        return task

    def _record(
        self, event_type: str, task_id: str, actor: str, message: str, **values: Any
    ) -> None:
        if self.activity_log is None:
            logger.info("%s: %s", event_type, message)
            return
        self.activity_log.log(event_type, task_id, actor, message, **values)
