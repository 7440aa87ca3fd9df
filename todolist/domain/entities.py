from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .enums import Priority, priority_label


_MILLIS_FIELDS = frozenset({"created_at", "due_date"})


def truncate_millis(value: datetime | None) -> datetime | None:
    """Drop sub-millisecond digits; the store keeps timestamps as epoch milliseconds."""
    if value is None:
        return None
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def now() -> datetime:
    return truncate_millis(datetime.now())


def is_valid_title(title: str | None) -> bool:
    return bool(title and title.strip())


@dataclass
class Task:
    title: str = ""
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    priority: int = Priority.MEDIUM
    category: Optional[str] = None
    completed: bool = False
    created_at: datetime = field(default_factory=now)
    id: int | None = None

    def __setattr__(self, name: str, value) -> None:
        if name in _MILLIS_FIELDS:
            value = truncate_millis(value)
        super().__setattr__(name, value)

    def is_overdue(self, at: datetime | None = None) -> bool:
        if self.due_date is None or self.completed:
            return False
        return (at or datetime.now()) > self.due_date

    def priority_label(self) -> str:
        return priority_label(self.priority)

    def has_valid_title(self) -> bool:
        return is_valid_title(self.title)

    def __str__(self) -> str:
        due = self.due_date.isoformat(sep=" ", timespec="minutes") if self.due_date else "-"
        state = "done" if self.completed else "open"
        return f"Task #{self.id} {self.title!r} [{state}, {self.priority_label()}, due {due}]"
