from __future__ import annotations

import logging
import sys

from PySide6.QtWidgets import QApplication, QMenu, QMessageBox, QStyle, QSystemTrayIcon

from todolist.config import load_settings
from todolist.infra.db import Database
from todolist.infra.logging import setup_logging
from todolist.infra.qt_alarms import QtAlarmHost
from todolist.infra.qt_notifier import TrayNotifier
from todolist.infra.repository import TaskStore
from todolist.services.dispatcher import TriggerDispatcher
from todolist.services.reminders import ReminderScheduler
from todolist.services.task_service import TaskService
from todolist.ui.task_list import TaskListWindow

logger = logging.getLogger(__name__)


def _install_tray_menu(app: QApplication, tray: QSystemTrayIcon, window: TaskListWindow) -> None:
    menu = QMenu(window)
    menu.addAction("Show tasks", window.bring_to_front)
    menu.addAction("Quit", app.quit)
    tray.setContextMenu(menu)
    tray.setToolTip("Todo List")
    tray.show()


def main() -> None:
    settings = load_settings()
    setup_logging(settings)

    app = QApplication(sys.argv)
    app.setQuitOnLastWindowClosed(False)

    database = Database(settings.database_path)
    try:
        database.open()
    except Exception as exc:  # noqa: BLE001
        logger.exception("Could not open the task database")
        QMessageBox.critical(None, "DB error", str(exc))
        return

    try:
        tray = QSystemTrayIcon(app.style().standardIcon(QStyle.SP_FileDialogDetailedView), app)
        window: TaskListWindow | None = None

        def open_task_list() -> None:
            if window is not None:
                window.bring_to_front()

        dispatcher = TriggerDispatcher(TrayNotifier(tray, open_task_list))
        scheduler = ReminderScheduler(QtAlarmHost(on_fire=dispatcher.handle, parent=app))
        service = TaskService(TaskStore(database), scheduler)

        window = TaskListWindow(service)
        _install_tray_menu(app, tray, window)

        service.restore_reminders()
        window.show()
        exit_code = app.exec()
    finally:
        database.close()

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
