"""Top-level application wiring."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from core.policy_runtime import ensure_runtime_dirs, graph_max_nodes, load_effective_config
from governance.activity_log import ActivityLogger
from governance.dependency_service import DependencyService
from planner.dependency_graph import DependencyGraphEngine
from store.sql_store import SQLNodeSource, SQLStore
from store.task_repository import TaskRepository


@dataclass
class RuntimeBundle:
    """Holds initialized runtime components."""

    config: dict[str, Any]
    repository: TaskRepository
    engine: DependencyGraphEngine
    dependencies: DependencyService
    activity_log: ActivityLogger


class Orchestrator:
    """Creates and wires runtime components for CLI use."""

    def __init__(self, root: Path | None = None) -> None:
        default_root = Path(__file__).resolve().parents[1]
        self.root = (root or default_root).resolve()

    def build(self) -> RuntimeBundle:
        config = load_effective_config(self.root)
        paths = ensure_runtime_dirs(self.root, config)

        sql_store = SQLStore(paths["db_path"])
        sql_store.create_all()

        repository = TaskRepository(sql_store=sql_store)
        engine = DependencyGraphEngine(
            source=SQLNodeSource(sql_store),
            max_nodes=graph_max_nodes(config),
        )
        activity_log = ActivityLogger(paths["activity_log_path"])
        dependencies = DependencyService(
            repository=repository,
            engine=engine,
            activity_log=activity_log,
        )

        return RuntimeBundle(
            config=config,
            repository=repository,
            engine=engine,
            dependencies=dependencies,
            activity_log=activity_log,
        )
