from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QBrush, QColor
from PySide6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QVBoxLayout,
    QWidget,
)

from todolist.domain.entities import Task
from todolist.domain.enums import FilterKey, SortKey
from todolist.domain.filters import TaskFilters
from todolist.services.task_service import TaskService

FILTERS = [
    ("All", FilterKey.ALL),
    ("Incomplete", FilterKey.INCOMPLETE),
    ("Completed", FilterKey.COMPLETED),
]

SORTS = [
    ("Default", None),
    ("Date created", SortKey.CREATED),
    ("Due date", SortKey.DUE),
    ("Priority", SortKey.PRIORITY),
    ("Title", SortKey.TITLE),
]

NOTICE_TIMEOUT_MS = 3000
OVERDUE_COLOR = QColor("#DC2626")


def _item_text(task: Task) -> str:
    due = task.due_date.strftime("%Y-%m-%d %H:%M") if task.due_date else "no due date"
    mark = "[x]" if task.completed else "[ ]"
    overdue = " (overdue)" if task.is_overdue() else ""
    return f"{mark} {task.title}  |  {task.priority_label()}  |  {due}{overdue}"


class TaskListWindow(QMainWindow):
    def __init__(self, service: TaskService):
        super().__init__()
        self.setWindowTitle("Todo List")
        self.resize(560, 640)
        self.service = service

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(12, 12, 12, 12)

        controls = QHBoxLayout()
        self.filter_combo = QComboBox()
        for label, key in FILTERS:
            self.filter_combo.addItem(label, key)
        self.sort_combo = QComboBox()
        for label, key in SORTS:
            self.sort_combo.addItem(label, key)
        controls.addWidget(QLabel("Show"))
        controls.addWidget(self.filter_combo)
        controls.addWidget(QLabel("Sort"))
        controls.addWidget(self.sort_combo)
        controls.addStretch(1)
        layout.addLayout(controls)

        self.task_list = QListWidget()
        layout.addWidget(self.task_list)
        self.setCentralWidget(central)

        self.filter_combo.currentIndexChanged.connect(self.refresh_tasks)
        self.sort_combo.currentIndexChanged.connect(self.refresh_tasks)
        self.task_list.itemDoubleClicked.connect(self._toggle_completed)

        self.refresh_tasks()

    def refresh_tasks(self) -> None:
        filters = TaskFilters(
            filter_key=self.filter_combo.currentData(),
            sort_key=self.sort_combo.currentData(),
        )
        self.task_list.clear()
        for task in self.service.list_tasks(filters):
            item = QListWidgetItem(_item_text(task))
            item.setData(Qt.UserRole, task.id)
            if task.is_overdue():
                item.setForeground(QBrush(OVERDUE_COLOR))
            self.task_list.addItem(item)

    def bring_to_front(self) -> None:
        self.refresh_tasks()
        self.showNormal()
        self.raise_()
        self.activateWindow()

    def _toggle_completed(self, item: QListWidgetItem) -> None:
        task = self.service.get_task(item.data(Qt.UserRole))
        if task is None:
            self.statusBar().showMessage("Could not load the task", NOTICE_TIMEOUT_MS)
            self.refresh_tasks()
            return
        result = self.service.set_completed(task, not task.completed)
        self.statusBar().showMessage(result.message, NOTICE_TIMEOUT_MS)
        self.refresh_tasks()
