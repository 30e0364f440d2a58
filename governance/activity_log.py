"""Structured JSONL activity log for dependency edits."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any


class ActivityLogger:
    """Writes task activity records as JSON lines."""

    def __init__(self, log_path: Path) -> None:
        self.log_path = log_path
        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self.logger = logging.getLogger("tg.activity")

    def log(
        self,
        event_type: str,
        task_id: str,
        actor: str,
        message: str,
        old_value: Any = None,
        new_value: Any = None,
    ) -> dict[str, Any]:
        """Append one JSONL activity event and return it."""
        event = {
            "timestamp": datetime.now(UTC).isoformat(),
            "type": event_type,
            "task_id": task_id,
            "actor": actor,
            "message": message,
            "old_value": old_value,
            "new_value": new_value,
        }
        with self.log_path.open("a", encoding="utf-8") as fh:
            fh.write(json.dumps(event, ensure_ascii=True) + "\n")
        self.logger.info("%s: %s", event_type, message)
        return event

    def read(self, limit: int = 50) -> list[dict[str, Any]]:
        """Return the most recent events, newest last."""
        if not self.log_path.exists():
            return []
        with self.log_path.open("r", encoding="utf-8") as fh:
            lines = [line for line in fh if line.strip()]
        return [json.loads(line) for line in lines[-limit:]]
