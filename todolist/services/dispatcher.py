from __future__ import annotations

import logging

from todolist.domain.ports import Notification, Notifier, ReminderPayload

logger = logging.getLogger(__name__)

MISSING_TASK_ID = -1
TITLE_PREFIX = "Todo reminder: "
DEFAULT_TEXT = "Task due soon"
DEFAULT_BIG_TEXT = "Task due soon, please take care of it."


def build_notification(task_id: int, title: str, description: str | None) -> Notification:
    has_description = bool(description)
    return Notification(
        key=task_id,
        title=f"{TITLE_PREFIX}{title}",
        text=description if has_description else DEFAULT_TEXT,
        big_text=description if has_description else DEFAULT_BIG_TEXT,
    )


class TriggerDispatcher:
    """Turns a fired wake-up into a user-facing alert.

    The alert uses the title and description captured when the reminder was
    scheduled; the store is not consulted, so a task edited, completed or
    deleted after scheduling still alerts with the old text.
    """

    def __init__(self, notifier: Notifier) -> None:
        self._notifier = notifier

    def on_fire(self, task_id: int | None, title: str | None, description: str | None) -> Notification | None:
        if task_id is None or task_id == MISSING_TASK_ID or title is None:
            logger.warning("Ignoring reminder without a task id or title (id=%s)", task_id)
            return None
        notification = build_notification(task_id, title, description)
        self._notifier.show(notification)
        logger.info("Reminder shown for task %s", task_id)
        return notification

    def handle(self, payload: ReminderPayload) -> Notification | None:
        return self.on_fire(payload.task_id, payload.title, payload.description)
