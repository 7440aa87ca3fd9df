from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Callable, Iterable

from todolist.domain.entities import Task
from todolist.domain.ports import AlarmHost, ReminderPayload, ReminderUnavailable

logger = logging.getLogger(__name__)

REMINDER_LEAD_TIME = timedelta(minutes=15)


def trigger_time(task: Task) -> datetime | None:
    if task.due_date is None:
        return None
    return task.due_date - REMINDER_LEAD_TIME


class ReminderScheduler:
    """Keeps at most one wake-up registered per task id.

    Registration is best effort: when the host cannot take a trigger the
    reminder is dropped with a warning and the caller carries on.
    """

    def __init__(self, host: AlarmHost, clock: Callable[[], datetime] = datetime.now) -> None:
        self._host = host
        self._clock = clock

    def schedule(self, task: Task) -> bool:
        trigger_at = trigger_time(task)
        if trigger_at is None:
            return False
        if task.id is None:
            logger.warning("Cannot schedule a reminder for an unsaved task %r", task.title)
            return False
        if trigger_at <= self._clock():
            logger.debug("Reminder for task %s is already in the past, skipped", task.id)
            return False

        payload = ReminderPayload(task_id=task.id, title=task.title, description=task.description)
        try:
            self._host.set_exact(task.id, trigger_at, payload)
        except ReminderUnavailable as exc:
            logger.warning("Reminder for task %s dropped: %s", task.id, exc)
            return False
        logger.info("Reminder for task %s scheduled at %s", task.id, trigger_at.isoformat(sep=" "))
        return True

    def cancel(self, task_id: int | None) -> None:
        if task_id is None:
            return
        try:
            self._host.cancel(task_id)
        except ReminderUnavailable as exc:
            logger.warning("Reminder for task %s could not be cancelled: %s", task_id, exc)
            return
        logger.debug("Reminder for task %s cancelled", task_id)

    def reschedule(self, task: Task) -> bool:
        self.cancel(task.id)
        if task.completed or task.due_date is None:
            return False
        return self.schedule(task)

    def restore(self, tasks: Iterable[Task]) -> int:
        """Re-register reminders after a restart; returns how many were scheduled."""
        scheduled = sum(1 for task in tasks if self.reschedule(task))
        logger.info("Restored %s reminder(s)", scheduled)
        return scheduled
