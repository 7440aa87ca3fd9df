from __future__ import annotations

from pathlib import Path

import pytest

from todolist.infra.db import Database
from todolist.infra.repository import TaskStore


@pytest.fixture()
def database(tmp_path: Path):
    db = Database(tmp_path / "todo.db")
    db.open()
    yield db
    db.close()


@pytest.fixture()
def store(database: Database) -> TaskStore:
    return TaskStore(database)


@pytest.fixture(scope="session")
def qt_app():
    QtCore = pytest.importorskip("PySide6.QtCore")
    return QtCore.QCoreApplication.instance() or QtCore.QCoreApplication([])
