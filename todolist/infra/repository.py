from __future__ import annotations

import logging
import threading
from typing import Callable, Optional, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from todolist.domain.entities import Task
from todolist.domain.enums import Priority

from .db import Database
from .models import TodoModel, from_millis, to_millis

logger = logging.getLogger(__name__)

WRITE_FAILED = -1

T = TypeVar("T")

# Rows written with a 0 due date predate the NULL convention; both mean "none".
_NO_DUE_DATE = func.coalesce(TodoModel.due_date, 0) <= 0


def _to_entity(model: TodoModel) -> Task:
    return Task(
        id=model.id,
        title=model.title,
        description=model.description,
        completed=bool(model.is_completed),
        created_at=from_millis(model.created_at),
        due_date=from_millis(model.due_date),
        priority=Priority.parse(model.priority) or model.priority,
        category=model.category,
    )


def _to_columns(task: Task) -> dict:
    return {
        "title": task.title,
        "description": task.description,
        "is_completed": 1 if task.completed else 0,
        "created_at": to_millis(task.created_at),
        "due_date": to_millis(task.due_date),
        "priority": int(task.priority),
        "category": task.category,
    }


class TaskStore:
    """CRUD and list queries over the ``todos`` table.

    Every public method returns a failure value instead of raising: writes
    return ``WRITE_FAILED``, ``get_by_id`` returns ``None`` and list queries
    return an empty list. Access to the database is serialized by a lock, so a
    single store may be shared between threads.
    """

    def __init__(self, database: Database) -> None:
        self._db = database
        self._lock = threading.RLock()

    def insert(self, task: Task) -> int:
        def work(session: Session) -> int:
            row = TodoModel(**_to_columns(task))
            session.add(row)
            session.flush()
            new_id = row.id
            session.commit()
            return new_id

        new_id = self._run("insert", work, WRITE_FAILED)
        if new_id != WRITE_FAILED:
            task.id = new_id
            logger.debug("Inserted task %s", new_id)
        return new_id

    def update(self, task: Task) -> int:
        if task.id is None:
            return 0

        def work(session: Session) -> int:
            row = session.get(TodoModel, task.id)
            if row is None:
                return 0
            for key, value in _to_columns(task).items():
                setattr(row, key, value)
            session.commit()
            return 1

        return self._run("update", work, WRITE_FAILED)

    def delete(self, task_id: int) -> int:
        def work(session: Session) -> int:
            row = session.get(TodoModel, task_id)
            if row is None:
                return 0
            session.delete(row)
            session.commit()
            return 1

        return self._run("delete", work, WRITE_FAILED)

    def get_by_id(self, task_id: int) -> Optional[Task]:
        def work(session: Session) -> Optional[Task]:
            row = session.get(TodoModel, task_id)
            return _to_entity(row) if row else None

        return self._run("get_by_id", work, None)

    def get_all(self) -> list[Task]:
        stmt = select(TodoModel).order_by(TodoModel.created_at.desc(), TodoModel.id.desc())
        return self._query("get_all", stmt)

    def get_incomplete(self) -> list[Task]:
        stmt = (
            select(TodoModel)
            .where(TodoModel.is_completed == 0)
            .order_by(
                TodoModel.priority.asc(),
                _NO_DUE_DATE,
                TodoModel.due_date.asc(),
                TodoModel.id.asc(),
            )
        )
        return self._query("get_incomplete", stmt)

    def get_completed(self) -> list[Task]:
        stmt = (
            select(TodoModel)
            .where(TodoModel.is_completed == 1)
            .order_by(TodoModel.created_at.desc(), TodoModel.id.desc())
        )
        return self._query("get_completed", stmt)

    def get_by_priority(self, priority: int) -> list[Task]:
        def work(session: Session) -> list[Task]:
            stmt = (
                select(TodoModel)
                .where(TodoModel.priority == int(priority))
                .order_by(_NO_DUE_DATE, TodoModel.due_date.asc(), TodoModel.id.asc())
            )
            return [_to_entity(row) for row in session.scalars(stmt)]

        return self._run("get_by_priority", work, [])

    def mark_completed(self, task_id: int) -> int:
        return self._set_completed(task_id, True)

    def mark_incomplete(self, task_id: int) -> int:
        return self._set_completed(task_id, False)

    def _set_completed(self, task_id: int, completed: bool) -> int:
        def work(session: Session) -> int:
            row = session.get(TodoModel, task_id)
            if row is None:
                return 0
            row.is_completed = 1 if completed else 0
            session.commit()
            return 1

        return self._run("mark_completed" if completed else "mark_incomplete", work, WRITE_FAILED)

    def _query(self, name: str, stmt) -> list[Task]:
        def work(session: Session) -> list[Task]:
            return [_to_entity(row) for row in session.scalars(stmt)]

        return self._run(name, work, [])

    def _run(self, name: str, work: Callable[[Session], T], failure: T) -> T:
        with self._lock:
            try:
                with self._db.session() as session:
                    return work(session)
            except (SQLAlchemyError, TypeError, ValueError):
                logger.exception("TaskStore.%s failed", name)
                return failure
