from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from PySide6.QtCore import QCoreApplication, QObject, Qt, QTimer

from todolist.domain.ports import FireCallback, ReminderPayload, ReminderUnavailable

logger = logging.getLogger(__name__)

# QTimer intervals are signed 32-bit milliseconds (about 24.8 days).
MAX_TIMER_MS = 2**31 - 1


@dataclass
class _Alarm:
    timer: QTimer
    trigger_at: datetime
    payload: ReminderPayload


class QtAlarmHost(QObject):
    """In-process wake-up facility built on one single-shot QTimer per key.

    Long delays are covered in hops no longer than ``MAX_TIMER_MS``; each hop
    recomputes the remaining time from the wall clock, so a clock change moves
    the fire time instead of being ignored.
    """

    def __init__(
        self,
        on_fire: FireCallback,
        clock: Callable[[], datetime] = datetime.now,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._on_fire = on_fire
        self._clock = clock
        self._alarms: dict[int, _Alarm] = {}

    def set_exact(self, key: int, trigger_at: datetime, payload: ReminderPayload) -> None:
        if QCoreApplication.instance() is None:
            raise ReminderUnavailable("no Qt application instance is running")
        self.cancel(key)

        timer = QTimer(self)
        timer.setSingleShot(True)
        timer.setTimerType(Qt.TimerType.PreciseTimer)
        timer.timeout.connect(lambda: self._on_timeout(key, timer))
        self._alarms[key] = _Alarm(timer=timer, trigger_at=trigger_at, payload=payload)
        self._arm(self._alarms[key])

    def cancel(self, key: int) -> None:
        alarm = self._alarms.pop(key, None)
        if alarm is None:
            return
        alarm.timer.stop()
        alarm.timer.deleteLater()

    def pending(self, key: int) -> datetime | None:
        alarm = self._alarms.get(key)
        return alarm.trigger_at if alarm else None

    def keys(self) -> list[int]:
        return list(self._alarms)

    def _arm(self, alarm: _Alarm) -> None:
        remaining_ms = int((alarm.trigger_at - self._clock()).total_seconds() * 1000)
        alarm.timer.start(min(max(remaining_ms, 0), MAX_TIMER_MS))

    def _on_timeout(self, key: int, timer: QTimer) -> None:
        alarm = self._alarms.get(key)
        if alarm is None or alarm.timer is not timer:
            return
        if alarm.trigger_at > self._clock():
            self._arm(alarm)
            return
        del self._alarms[key]
        timer.deleteLater()
        logger.debug("Wake-up fired for key %s", key)
        self._on_fire(alarm.payload)
