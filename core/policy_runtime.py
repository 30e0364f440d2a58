"""Configuration and runtime bootstrapping."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from planner.graph_loader import DEFAULT_MAX_NODES


def load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML from file, returning empty mapping when missing."""
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return data


def merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge dictionaries."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


def ensure_runtime_dirs(root: Path, config: dict[str, Any]) -> dict[str, Path]:
    """Ensure database and log directories exist and return resolved paths."""
    paths_cfg = config.get("paths", {})
    db_path = (root / paths_cfg.get("db_path", "workspace/tasks.db")).resolve()
    activity_log_path = (
        root / paths_cfg.get("activity_log_path", "logs/activity.jsonl")
    ).resolve()

    db_path.parent.mkdir(parents=True, exist_ok=True)
    activity_log_path.parent.mkdir(parents=True, exist_ok=True)

    return {
        "db_path": db_path,
        "activity_log_path": activity_log_path,
    }


def graph_max_nodes(config: dict[str, Any]) -> int:
    """Return the per-scope task cap, rejecting non-positive values."""
    value = int(config.get("graph", {}).get("max_nodes", DEFAULT_MAX_NODES))
    if value < 1:
        raise ValueError("graph.max_nodes must be a positive integer.")
    return value


def configure_logging(config: dict[str, Any]) -> None:
    """Apply the configured root log level."""
    level_name = str(config.get("logging", {}).get("level", "WARNING")).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown logging level: {level_name}")
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def load_effective_config(root: Path) -> dict[str, Any]:
    """Load defaults and merge the optional local override file on top."""
    config_dir = root / "config"
    default_cfg = load_yaml(config_dir / "default.yaml")
    local_cfg = load_yaml(config_dir / "local.yaml")
    return merge_dicts(default_cfg, local_cfg)
