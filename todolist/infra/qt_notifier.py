from __future__ import annotations

import logging
from typing import Callable

from PySide6.QtCore import QObject
from PySide6.QtWidgets import QSystemTrayIcon

from todolist.domain.ports import Notification

logger = logging.getLogger(__name__)

MESSAGE_TIMEOUT_MS = 10_000


class TrayNotifier(QObject):
    """Shows reminders as system tray balloon messages.

    The tray displays a single message at a time, so any newer message, for
    the same task or another, takes the place of the visible one. Clicking the
    message dismisses it and opens the task list.
    """

    def __init__(
        self,
        tray: QSystemTrayIcon,
        open_task_list: Callable[[], None],
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._tray = tray
        self._open_task_list = open_task_list
        self._visible: Notification | None = None
        tray.messageClicked.connect(self._on_message_clicked)

    @property
    def visible(self) -> Notification | None:
        return self._visible

    def show(self, notification: Notification) -> None:
        if not self._tray.isSystemTrayAvailable() or not self._tray.supportsMessages():
            logger.warning("System tray cannot show messages; reminder %s dropped", notification.key)
            return
        self._visible = notification
        self._tray.showMessage(
            notification.title,
            notification.big_text,
            QSystemTrayIcon.MessageIcon.Information,
            MESSAGE_TIMEOUT_MS,
        )

    def _on_message_clicked(self) -> None:
        if self._visible is not None and self._visible.auto_cancel:
            self._visible = None
        self._open_task_list()
