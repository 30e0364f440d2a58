"""Typer command handlers."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Coroutine
from pathlib import Path
from typing import Any, TypeVar

import typer

from core.orchestrator import Orchestrator, RuntimeBundle
from core.policy_runtime import configure_logging
from governance.dependency_service import DependencyError, TaskNotFoundError
from planner.graph_loader import ScopeOverflowError

T = TypeVar("T")


def _runtime(root: Path | None = None) -> RuntimeBundle:
    bundle = Orchestrator(root=root).build()
    configure_logging(bundle.config)
    return bundle


def _fail(message: str) -> None:
    typer.echo(f"error: {message}", err=True)
    raise typer.Exit(code=1)


def tasks_add(workspace: str, title: str, duration_days: float, root: Path | None = None) -> None:
    """Create a task."""
    bundle = _runtime(root)
    task = bundle.repository.create_task(
        workspace_id=workspace, title=title, duration_days=duration_days
    )
    typer.echo(task["id"])


def tasks_list(workspace: str, limit: int, root: Path | None = None) -> None:
    """List a workspace's tasks."""
    bundle = _runtime(root)
    tasks = bundle.repository.list_tasks(workspace_id=workspace, limit=limit)
    typer.echo(json.dumps(_json_safe(tasks), indent=2))


def tasks_delete(task_id: str, root: Path | None = None) -> None:
    """Delete a task and its edges."""
    bundle = _runtime(root)
    if not bundle.repository.delete_task(task_id):
        _fail(f"Task not found: {task_id}")
    typer.echo(f"Deleted task: {task_id}")


def deps_add(task_id: str, blocked_by: str, actor: str, root: Path | None = None) -> None:
    """Add a dependency edge."""
    bundle = _runtime(root)
    try:
        result = asyncio.run(bundle.dependencies.add_dependency(task_id, blocked_by, actor))
    except (TaskNotFoundError, DependencyError, ScopeOverflowError) as exc:
        _fail(str(exc))
    typer.echo(json.dumps(result, indent=2))


def deps_remove(task_id: str, blocked_by: str, actor: str, root: Path | None = None) -> None:
    """Remove a dependency edge."""
    bundle = _runtime(root)
    try:
        result = asyncio.run(bundle.dependencies.remove_dependency(task_id, blocked_by, actor))
    except TaskNotFoundError as exc:
        _fail(str(exc))
    typer.echo(json.dumps(result, indent=2))


def graph_ancestors(workspace: str, task_id: str, root: Path | None = None) -> None:
    bundle = _runtime(root)
    ids = _run_query(bundle.engine.get_ancestors(workspace, task_id))
    typer.echo(json.dumps(sorted(ids), indent=2))


def graph_descendants(workspace: str, task_id: str, root: Path | None = None) -> None:
    bundle = _runtime(root)
    ids = _run_query(bundle.engine.get_descendants(workspace, task_id))
    typer.echo(json.dumps(sorted(ids), indent=2))


def graph_critical_path(workspace: str, source: str, sink: str, root: Path | None = None) -> None:
    """Print the critical path length and the chain achieving it."""
    bundle = _runtime(root)
    result = _run_query(bundle.engine.get_critical_path(workspace, source, sink))
    typer.echo(json.dumps({"length": result.length, "path": result.path}, indent=2))


def graph_check_cycle(
    workspace: str, task_id: str, blocked_by: str, root: Path | None = None
) -> None:
    """Report whether an edge would close a cycle; exits 1 when it would."""
    bundle = _runtime(root)
    if _run_query(bundle.engine.would_create_cycle(workspace, task_id, blocked_by)):
        typer.echo("cycle")
        raise typer.Exit(code=1)
    typer.echo("ok")


def graph_audit(workspace: str, root: Path | None = None) -> None:
    """Scan a workspace for an existing cycle."""
    bundle = _runtime(root)
    cycle = _run_query(bundle.engine.find_cycle(workspace))
    if cycle:
        typer.echo("cycle: " + " -> ".join([*cycle, cycle[0]]))
        raise typer.Exit(code=1)
    typer.echo("no cycles")


def config_show(root: Path | None = None) -> None:
    """Show effective runtime config."""
    bundle = _runtime(root)
    typer.echo(json.dumps(_json_safe(bundle.config), indent=2))


def _run_query(coro: Coroutine[Any, Any, T]) -> T:
    try:
        return asyncio.run(coro)
    except ScopeOverflowError as exc:
        _fail(str(exc))


def _json_safe(payload: object) -> object:
    """Convert datetimes to strings for JSON output."""
    if isinstance(payload, dict):
        return {k: _json_safe(v) for k, v in payload.items()}
    if isinstance(payload, list):
        return [_json_safe(v) for v in payload]
    if hasattr(payload, "isoformat"):
        return payload.isoformat()
    return payload
