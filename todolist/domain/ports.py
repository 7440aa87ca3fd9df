"""Host-side collaborators the reminder layer talks to.

The scheduler and dispatcher depend on these Protocols rather than on Qt, so
the same core runs under the desktop shell and under test fakes.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Protocol

REMINDER_CHANNEL_ID = "todo_reminder_channel"


class ReminderUnavailable(RuntimeError):
    """Raised by a wake-up facility that cannot register triggers right now."""


@dataclass(frozen=True)
class ReminderPayload:
    task_id: int
    title: str
    description: str | None


@dataclass(frozen=True)
class Notification:
    key: int
    title: str
    text: str
    big_text: str
    channel_id: str = REMINDER_CHANNEL_ID
    auto_cancel: bool = True


FireCallback = Callable[[ReminderPayload], None]


class AlarmHost(Protocol):
    """One-shot, exact-time wake-ups keyed by an integer.

    Registering a key that is already registered replaces the earlier trigger.
    """

    def set_exact(self, key: int, trigger_at: datetime, payload: ReminderPayload) -> None: ...

    def cancel(self, key: int) -> None: ...


class Notifier(Protocol):
    """Shows user-facing alerts; a second alert with the same key replaces the first."""

    def show(self, notification: Notification) -> None: ...
