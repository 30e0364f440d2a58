"""Task CRUD and edge writes over the SQL store."""

from __future__ import annotations

from typing import Any

from store.schemas import TASK_STATUSES, TaskRecord
from store.sql_store import SQLStore


class TaskRepository:
    """Reads and writes task rows, keeping both edge lists in step."""

    def __init__(self, sql_store: SQLStore) -> None:
        self.sql_store = sql_store
        self.sql_store.create_all()

    def create_task(
        self,
        workspace_id: str,
        title: str,
        duration_days: float = 0.0,
        status: str = "ready",
        task_id: str | None = None,
    ) -> dict[str, Any]:
        """Insert a task with no dependencies."""
        _check_status(status)
        record = TaskRecord(
            workspace_id=workspace_id,
            title=title,
            status=status,
            blocked_by=[],
            blocks=[],
            duration_days=max(0.0, float(duration_days)),
        )
        if task_id:
            record.id = task_id
        with self.sql_store.session() as sess:
            sess.add(record)
            sess.flush()
            payload = self._task_to_dict(record)
        return payload

    def get_task(self, task_id: str) -> dict[str, Any] | None:
        with self.sql_store.session() as sess:
            row = sess.get(TaskRecord, task_id)
            return self._task_to_dict(row) if row else None

    def list_tasks(self, workspace_id: str, limit: int = 100) -> list[dict[str, Any]]:
        """List a workspace's tasks in creation order."""
        with self.sql_store.session() as sess:
            rows = (
                sess.query(TaskRecord)
                .filter(TaskRecord.workspace_id == workspace_id)
                .order_by(TaskRecord.created_at, TaskRecord.id)
                .limit(limit)
                .all()
            )
            return [self._task_to_dict(row) for row in rows]

    def statuses(self, task_ids: list[str]) -> dict[str, str]:
        """Map each existing id in ``task_ids`` to its status in one query."""
        if not task_ids:
            return {}
        with self.sql_store.session() as sess:
            rows = sess.query(TaskRecord.id, TaskRecord.status).filter(
                TaskRecord.id.in_(task_ids)
            )
            return {row.id: row.status for row in rows}

    def set_status(self, task_id: str, status: str) -> dict[str, Any] | None:
        _check_status(status)
        with self.sql_store.session() as sess:
            row = sess.get(TaskRecord, task_id)
            if row is None:
                return None
            row.status = status
            sess.flush()
            return self._task_to_dict(row)

    def link(self, task_id: str, blocker_id: str) -> bool:
        """Record ``task_id`` blocked by ``blocker_id``; False if either is missing."""
        with self.sql_store.session() as sess:
            task = sess.get(TaskRecord, task_id)
            blocker = sess.get(TaskRecord, blocker_id)
            if task is None or blocker is None:
                return False
            # JSON columns only track reassignment, never in-place mutation.
            if blocker_id not in (task.blocked_by or []):
                task.blocked_by = [*(task.blocked_by or []), blocker_id]
            if task_id not in (blocker.blocks or []):
                blocker.blocks = [*(blocker.blocks or []), task_id]
        return True

    def unlink(self, task_id: str, blocker_id: str) -> list[str]:
        """Drop the edge from both ends and return the remaining blockers."""
        with self.sql_store.session() as sess:
            task = sess.get(TaskRecord, task_id)
            blocker = sess.get(TaskRecord, blocker_id)
            remaining: list[str] = []
            if task is not None:
                remaining = [i for i in (task.blocked_by or []) if i != blocker_id]
                task.blocked_by = remaining
            if blocker is not None:
                blocker.blocks = [i for i in (blocker.blocks or []) if i != task_id]
        return remaining

    def delete_task(self, task_id: str) -> bool:
        """Delete a task and scrub its id from neighbouring edge lists."""
        with self.sql_store.session() as sess:
            row = sess.get(TaskRecord, task_id)
            if row is None:
                return False
            neighbour_ids = set(row.blocked_by or []) | set(row.blocks or [])
            neighbour_ids.discard(task_id)
            if neighbour_ids:
                for other in sess.query(TaskRecord).filter(TaskRecord.id.in_(neighbour_ids)):
                    other.blocked_by = [i for i in (other.blocked_by or []) if i != task_id]
                    other.blocks = [i for i in (other.blocks or []) if i != task_id]
            sess.delete(row)
        return True

    @staticmethod
    def _task_to_dict(row: TaskRecord) -> dict[str, Any]:
        return {
            "id": row.id,
            "workspace_id": row.workspace_id,
            "title": row.title,
            "status": row.status,
            "blocked_by": list(row.blocked_by or []),
            "blocks": list(row.blocks or []),
            "duration_days": row.duration_days,
            "created_at": row.created_at,
            "updated_at": row.updated_at,
        }


def _check_status(status: str) -> None:
    if status not in TASK_STATUSES:
        raise ValueError(f"Unknown task status '{status}'. Expected one of {TASK_STATUSES}.")
