from __future__ import annotations

from dataclasses import dataclass

from todolist.domain.entities import Task
from todolist.domain.enums import FilterKey
from todolist.domain.filters import TaskFilters, sort_tasks
from todolist.infra.repository import WRITE_FAILED, TaskStore

from .reminders import ReminderScheduler

MSG_TITLE_REQUIRED = "Title is required"
MSG_ADDED = "Task added"
MSG_ADD_FAILED = "Failed to add task"
MSG_UPDATED = "Task updated"
MSG_UPDATE_FAILED = "Update failed, please retry"
MSG_DELETED = "Task deleted"
MSG_DELETE_FAILED = "Delete failed, please retry"
MSG_NOT_FOUND = "Task no longer exists"
MSG_COMPLETED = "Task completed"
MSG_REOPENED = "Task reopened"


@dataclass(frozen=True)
class OperationResult:
    ok: bool
    message: str
    task: Task | None = None


class TaskService:
    """Caller-side flow: validate, persist, then re-sync the task's reminder."""

    def __init__(self, store: TaskStore, scheduler: ReminderScheduler) -> None:
        self._store = store
        self._scheduler = scheduler

    def list_tasks(self, filters: TaskFilters) -> list[Task]:
        if filters.filter_key == FilterKey.INCOMPLETE:
            tasks = self._store.get_incomplete()
        elif filters.filter_key == FilterKey.COMPLETED:
            tasks = self._store.get_completed()
        else:
            tasks = self._store.get_all()
        if filters.sort_key is not None:
            tasks = sort_tasks(tasks, filters.sort_key)
        return tasks

    def get_task(self, task_id: int) -> Task | None:
        return self._store.get_by_id(task_id)

    def create_task(self, task: Task) -> OperationResult:
        if not task.has_valid_title():
            return OperationResult(False, MSG_TITLE_REQUIRED, task)
        task.title = task.title.strip()
        if self._store.insert(task) == WRITE_FAILED:
            return OperationResult(False, MSG_ADD_FAILED, task)
        self._scheduler.reschedule(task)
        return OperationResult(True, MSG_ADDED, task)

    def update_task(self, task: Task) -> OperationResult:
        if not task.has_valid_title():
            return OperationResult(False, MSG_TITLE_REQUIRED, task)
        task.title = task.title.strip()
        rows = self._store.update(task)
        if rows == WRITE_FAILED:
            return OperationResult(False, MSG_UPDATE_FAILED, task)
        if rows == 0:
            self._scheduler.cancel(task.id)
            return OperationResult(False, MSG_NOT_FOUND, task)
        self._scheduler.reschedule(task)
        return OperationResult(True, MSG_UPDATED, task)

    def set_completed(self, task: Task, completed: bool) -> OperationResult:
        if task.id is None:
            return OperationResult(False, MSG_NOT_FOUND, task)
        if completed:
            rows = self._store.mark_completed(task.id)
        else:
            rows = self._store.mark_incomplete(task.id)
        if rows == WRITE_FAILED:
            return OperationResult(False, MSG_UPDATE_FAILED, task)
        if rows == 0:
            self._scheduler.cancel(task.id)
            return OperationResult(False, MSG_NOT_FOUND, task)
        task.completed = completed
        self._scheduler.reschedule(task)
        return OperationResult(True, MSG_COMPLETED if completed else MSG_REOPENED, task)

    def delete_task(self, task_id: int) -> OperationResult:
        rows = self._store.delete(task_id)
        if rows == WRITE_FAILED:
            return OperationResult(False, MSG_DELETE_FAILED)
        self._scheduler.cancel(task_id)
        if rows == 0:
            return OperationResult(False, MSG_NOT_FOUND)
        return OperationResult(True, MSG_DELETED)

    def restore_reminders(self) -> int:
        return self._scheduler.restore(self._store.get_incomplete())
