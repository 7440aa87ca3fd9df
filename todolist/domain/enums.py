from __future__ import annotations

from enum import IntEnum, StrEnum


class Priority(IntEnum):
    HIGH = 1
    MEDIUM = 2
    LOW = 3

    @classmethod
    def parse(cls, value: int | None) -> Priority | None:
        if value is None:
            return None
        try:
            return cls(int(value))
        except ValueError:
            return None


PRIORITY_LABELS = {
    Priority.HIGH: "High priority",
    Priority.MEDIUM: "Medium priority",
    Priority.LOW: "Low priority",
}
UNKNOWN_PRIORITY_LABEL = "Unknown"


def priority_label(value: int | None) -> str:
    priority = Priority.parse(value)
    if priority is None:
        return UNKNOWN_PRIORITY_LABEL
    return PRIORITY_LABELS[priority]


class FilterKey(StrEnum):
    ALL = "all"
    INCOMPLETE = "incomplete"
    COMPLETED = "completed"


class SortKey(StrEnum):
    CREATED = "created"
    DUE = "due"
    PRIORITY = "priority"
    TITLE = "title"
