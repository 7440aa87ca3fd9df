from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable

from .entities import Task
from .enums import FilterKey, SortKey


@dataclass(frozen=True)
class TaskFilters:
    filter_key: FilterKey = FilterKey.ALL
    sort_key: SortKey | None = None


def _due_key(task: Task) -> tuple[bool, datetime]:
    # Tasks without a due date sort after every dated task.
    return (task.due_date is None, task.due_date or datetime.min)


_SORT_KEYS: dict[SortKey, Callable[[Task], object]] = {
    SortKey.CREATED: lambda task: task.created_at,
    SortKey.DUE: _due_key,
    SortKey.PRIORITY: lambda task: task.priority,
    SortKey.TITLE: lambda task: (task.title or "").casefold(),
}


def filter_tasks(tasks: Iterable[Task], key: FilterKey | str) -> list[Task]:
    key = FilterKey(key)
    if key == FilterKey.INCOMPLETE:
        return [task for task in tasks if not task.completed]
    if key == FilterKey.COMPLETED:
        return [task for task in tasks if task.completed]
    return list(tasks)


def sort_tasks(tasks: Iterable[Task], key: SortKey | str) -> list[Task]:
    return sorted(tasks, key=_SORT_KEYS[SortKey(key)])
