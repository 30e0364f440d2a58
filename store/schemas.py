"""SQLAlchemy schemas for persistent task tables."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import JSON, DateTime, Float, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

TASK_STATUSES = ("backlog", "ready", "in_progress", "review", "blocked", "done")


def utc_now() -> datetime:
    """Return UTC datetime for default timestamps."""
    return datetime.now(UTC)


def new_task_id() -> str:
    return uuid.uuid4().hex


class Base(DeclarativeBase):
    """Declarative base."""


class TaskRecord(Base):
    """Task table; edge lists are stored denormalized on both ends."""

    __tablename__ = "tasks"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_task_id)
    workspace_id: Mapped[str] = mapped_column(String(64), index=True)
    title: Mapped[str] = mapped_column(Text, default="")
    status: Mapped[str] = mapped_column(String(32), default="ready")
    blocked_by: Mapped[list[str]] = mapped_column(JSON, default=list)
    blocks: Mapped[list[str]] = mapped_column(JSON, default=list)
    duration_days: Mapped[float] = mapped_column(Float, default=0.0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )
