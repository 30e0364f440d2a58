"""CLI smoke tests against a temporary project root."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from ui.cli.cli import app

runner = CliRunner()


def invoke(root: Path, *args: str):
    return runner.invoke(app, ["--root", str(root), *args])


def add_task(root: Path, title: str, days: str = "0") -> str:
    result = invoke(root, "tasks", "add", title, "--workspace", "ws", "--days", days)
    assert result.exit_code == 0, result.output
    return result.output.strip()


def test_cli_dependency_flow(tmp_path: Path) -> None:
    start = add_task(tmp_path, "Start")
    middle = add_task(tmp_path, "Middle", "2")
    end = add_task(tmp_path, "End", "1")

    assert invoke(tmp_path, "deps", "add", middle, start).exit_code == 0
    assert invoke(tmp_path, "deps", "add", end, middle).exit_code == 0

    rejected = invoke(tmp_path, "deps", "add", start, end)
    assert rejected.exit_code == 1

    check = invoke(tmp_path, "graph", "check-cycle", start, end, "--workspace", "ws")
    assert check.exit_code == 1
    assert "cycle" in check.output

    ancestors = invoke(tmp_path, "graph", "ancestors", end, "--workspace", "ws")
    assert sorted(json.loads(ancestors.output)) == sorted([start, middle])

    path = invoke(tmp_path, "graph", "critical-path", start, end, "--workspace", "ws")
    payload = json.loads(path.output)
    assert payload["length"] == 3.0
    assert payload["path"] == [start, middle, end]

    audit = invoke(tmp_path, "graph", "audit", "--workspace", "ws")
    assert audit.exit_code == 0
    assert "no cycles" in audit.output
    assert (tmp_path / "logs" / "activity.jsonl").exists()


def test_cli_reports_scope_overflow(tmp_path: Path) -> None:
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "local.yaml").write_text("graph:\n  max_nodes: 1\n", encoding="utf-8")
    first = add_task(tmp_path, "One")
    add_task(tmp_path, "Two")

    result = invoke(tmp_path, "graph", "descendants", first, "--workspace", "ws")

    assert result.exit_code == 1
