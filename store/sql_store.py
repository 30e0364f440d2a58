"""SQLite SQLAlchemy store wrapper and bulk task source."""

from __future__ import annotations

import asyncio
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from planner.models import TaskNode
from store.schemas import Base, TaskRecord


class SQLStore:
    """Provides SQLAlchemy session management for SQLite persistence."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        # Graph reads run in worker threads via asyncio.to_thread.
        self.engine = create_engine(
            f"sqlite+pysqlite:///{self.db_path}",
            future=True,
            connect_args={"check_same_thread": False},
        )
        self._session_factory = sessionmaker(bind=self.engine, future=True)

    def create_all(self) -> None:
        """Create all schema tables if missing."""
        Base.metadata.create_all(self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Context manager that commits on success and rolls back on error."""
        sess = self._session_factory()
        try:
            yield sess
            sess.commit()
        except Exception:
            sess.rollback()
            raise
        finally:
            sess.close()


class SQLNodeSource:
    """Serves a workspace's tasks to the graph engine in a single query."""

    def __init__(self, sql_store: SQLStore) -> None:
        self.sql_store = sql_store

    async def fetch_nodes(self, scope: str, cap: int) -> list[TaskNode]:
        return await asyncio.to_thread(self._fetch_nodes, scope, cap)

    def _fetch_nodes(self, scope: str, cap: int) -> list[TaskNode]:
        with self.sql_store.session() as sess:
            rows = (
                sess.query(TaskRecord)
                .filter(TaskRecord.workspace_id == scope)
                .order_by(TaskRecord.created_at, TaskRecord.id)
                .limit(cap)
                .all()
            )
            return [
                TaskNode(
                    id=row.id,
                    blocked_by=list(row.blocked_by or []),
                    blocks=list(row.blocks or []),
                    duration_days=row.duration_days,
                )
                for row in rows
            ]
