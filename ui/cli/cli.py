"""CLI entrypoint for the task dependency graph."""

from __future__ import annotations

from pathlib import Path

import typer

from ui.cli import commands

app = typer.Typer(help="Task dependency graph engine")
tasks_app = typer.Typer(help="Task commands")
deps_app = typer.Typer(help="Dependency edit commands")
graph_app = typer.Typer(help="Graph query commands")
config_app = typer.Typer(help="Configuration commands")


@app.callback()
def main_callback(
    ctx: typer.Context,
    root: Path = typer.Option(None, "--root", help="Project root holding config/ and data"),
) -> None:
    """Select the project root for every subcommand."""
    ctx.obj = root


@tasks_app.command("add")
def tasks_add_cmd(
    ctx: typer.Context,
    title: str = typer.Argument(..., help="Task title"),
    workspace: str = typer.Option(..., "--workspace", "-w", help="Workspace id"),
    duration_days: float = typer.Option(0.0, "--days", min=0.0, help="Duration in days"),
) -> None:
    """Create a task and print its id."""
    commands.tasks_add(workspace=workspace, title=title, duration_days=duration_days, root=ctx.obj)


@tasks_app.command("list")
def tasks_list_cmd(
    ctx: typer.Context,
    workspace: str = typer.Option(..., "--workspace", "-w"),
    limit: int = typer.Option(100, min=1, max=1000),
) -> None:
    """List tasks in a workspace."""
    commands.tasks_list(workspace=workspace, limit=limit, root=ctx.obj)


@tasks_app.command("delete")
def tasks_delete_cmd(ctx: typer.Context, task_id: str) -> None:
    """Delete a task and clean up its edges."""
    commands.tasks_delete(task_id=task_id, root=ctx.obj)


@deps_app.command("add")
def deps_add_cmd(
    ctx: typer.Context,
    task_id: str = typer.Argument(..., help="Task that becomes blocked"),
    blocked_by: str = typer.Argument(..., help="Task that blocks it"),
    actor: str = typer.Option("user", help="Who made the change"),
) -> None:
    """Add a dependency; rejected when it would create a cycle."""
    commands.deps_add(task_id=task_id, blocked_by=blocked_by, actor=actor, root=ctx.obj)


@deps_app.command("remove")
def deps_remove_cmd(
    ctx: typer.Context,
    task_id: str = typer.Argument(...),
    blocked_by: str = typer.Argument(...),
    actor: str = typer.Option("user"),
) -> None:
    """Remove a dependency."""
    commands.deps_remove(task_id=task_id, blocked_by=blocked_by, actor=actor, root=ctx.obj)


@graph_app.command("ancestors")
def graph_ancestors_cmd(
    ctx: typer.Context,
    task_id: str,
    workspace: str = typer.Option(..., "--workspace", "-w"),
) -> None:
    """Tasks this task depends on, transitively."""
    commands.graph_ancestors(workspace=workspace, task_id=task_id, root=ctx.obj)


@graph_app.command("descendants")
def graph_descendants_cmd(
    ctx: typer.Context,
    task_id: str,
    workspace: str = typer.Option(..., "--workspace", "-w"),
) -> None:
    """Tasks that depend on this task, transitively."""
    commands.graph_descendants(workspace=workspace, task_id=task_id, root=ctx.obj)


@graph_app.command("critical-path")
def graph_critical_path_cmd(
    ctx: typer.Context,
    source: str,
    sink: str,
    workspace: str = typer.Option(..., "--workspace", "-w"),
) -> None:
    """Longest duration-weighted chain from SOURCE to SINK."""
    commands.graph_critical_path(workspace=workspace, source=source, sink=sink, root=ctx.obj)


@graph_app.command("check-cycle")
def graph_check_cycle_cmd(
    ctx: typer.Context,
    task_id: str,
    blocked_by: str,
    workspace: str = typer.Option(..., "--workspace", "-w"),
) -> None:
    """Check whether TASK_ID blocked by BLOCKED_BY would create a cycle."""
    commands.graph_check_cycle(
        workspace=workspace, task_id=task_id, blocked_by=blocked_by, root=ctx.obj
    )


@graph_app.command("audit")
def graph_audit_cmd(
    ctx: typer.Context,
    workspace: str = typer.Option(..., "--workspace", "-w"),
) -> None:
    """Scan a workspace for existing cycles."""
    commands.graph_audit(workspace=workspace, root=ctx.obj)


@config_app.command("show")
def config_show_cmd(ctx: typer.Context) -> None:
    """Show effective configuration."""
    commands.config_show(root=ctx.obj)


app.add_typer(tasks_app, name="tasks")
app.add_typer(deps_app, name="deps")
app.add_typer(graph_app, name="graph")
app.add_typer(config_app, name="config")


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
