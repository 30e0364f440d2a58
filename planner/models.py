"""Task graph snapshot models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Direction(str, Enum):
    """Traversal direction and the edge list it reads."""

    ANCESTORS = "ancestors"
    DESCENDANTS = "descendants"

    @property
    def edge_field(self) -> str:
        return "blocked_by" if self is Direction.ANCESTORS else "blocks"


class TaskNode(BaseModel):
    """Engine view of one task: identity, edge lists and duration weight."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    blocked_by: list[str] = Field(default_factory=list, alias="blockedBy")
    blocks: list[str] = Field(default_factory=list)
    duration_days: float = Field(default=0.0, alias="durationDays")

    @field_validator("blocked_by", "blocks", mode="before")
    @classmethod
    def _missing_edges_are_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("duration_days", mode="before")
    @classmethod
    def _clamp_duration(cls, value: Any) -> float:
        if value is None:
            return 0.0
        return max(0.0, float(value))

    def edges(self, direction: Direction) -> list[str]:
        """Return the edge list authoritative for ``direction``."""
        return list(getattr(self, direction.edge_field))


@dataclass
class CriticalPath:
    """Longest duration-weighted chain, ordered from its head to the sink."""

    length: float
    path: list[str] = field(default_factory=list)
