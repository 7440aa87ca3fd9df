from __future__ import annotations

from datetime import datetime, timedelta
from pathlib import Path

from sqlalchemy import insert

from todolist.domain.entities import Task
from todolist.domain.enums import Priority
from todolist.infra.db import Database
from todolist.infra.models import TodoModel, from_millis, to_millis
from todolist.infra.repository import WRITE_FAILED, TaskStore

from fakes import NOW


def _task(title: str, **kwargs) -> Task:
    return Task(title, **kwargs)


def test_insert_assigns_id_and_round_trips(store: TaskStore) -> None:
    task = Task(
        "Dentist",
        "Bring the insurance card",
        NOW + timedelta(days=2, hours=3),
        Priority.HIGH,
        category="health",
        created_at=datetime(2026, 3, 1, 8, 15, 30, 123000),
    )

    new_id = store.insert(task)

    assert new_id > 0
    assert task.id == new_id
    assert store.get_by_id(new_id) == task


def test_insert_keeps_optional_fields_empty(store: TaskStore) -> None:
    task = Task("Just a title")
    store.insert(task)

    loaded = store.get_by_id(task.id)
    assert loaded.description is None
    assert loaded.due_date is None
    assert loaded.category is None
    assert loaded.completed is False
    assert loaded.priority == Priority.MEDIUM


def test_sub_millisecond_times_round_trip(store: TaskStore) -> None:
    task = Task(
        "Standup",
        due_date=datetime(2026, 12, 1, 9, 30, 0, 123456),
        created_at=datetime(2026, 11, 30, 17, 5, 9, 999999),
    )

    store.insert(task)

    assert task.due_date == datetime(2026, 12, 1, 9, 30, 0, 123000)
    assert store.get_by_id(task.id) == task


def test_due_date_assigned_after_insert_round_trips(store: TaskStore) -> None:
    task = Task("Retro")
    store.insert(task)

    task.due_date = datetime.now() + timedelta(days=1, microseconds=777)
    store.update(task)

    assert store.get_by_id(task.id) == task


def test_ids_are_not_reused_after_delete(store: TaskStore) -> None:
    first = _task("first")
    second = _task("second")
    store.insert(first)
    store.insert(second)

    assert store.delete(second.id) == 1
    third = _task("third")
    store.insert(third)

    assert third.id > second.id > first.id


def test_update_overwrites_row(store: TaskStore) -> None:
    task = _task("Draft", description="v1", priority=Priority.LOW)
    store.insert(task)

    task.title = "Final"
    task.description = "v2"
    task.priority = Priority.HIGH
    task.category = "work"
    task.completed = True

    assert store.update(task) == 1
    assert store.get_by_id(task.id) == task


def test_update_with_cleared_due_date_nulls_column(store: TaskStore) -> None:
    task = _task("Call bank", due_date=NOW + timedelta(days=1))
    store.insert(task)

    task.due_date = None
    assert store.update(task) == 1

    assert store.get_by_id(task.id).due_date is None


def test_stale_ids_affect_zero_rows(store: TaskStore) -> None:
    ghost = _task("ghost", id=999)

    assert store.update(ghost) == 0
    assert store.update(_task("never saved")) == 0
    assert store.delete(999) == 0
    assert store.mark_completed(999) == 0
    assert store.mark_incomplete(999) == 0
    assert store.get_by_id(999) is None


def test_get_all_orders_by_created_at_descending(store: TaskStore) -> None:
    for day, title in [(1, "old"), (3, "newest"), (2, "middle")]:
        store.insert(_task(title, created_at=datetime(2026, 1, day, 12, 0)))

    assert [task.title for task in store.get_all()] == ["newest", "middle", "old"]


def test_get_incomplete_orders_by_priority_then_due_date_nulls_last(store: TaskStore) -> None:
    store.insert(_task("low-none", priority=Priority.LOW))
    store.insert(_task("high-later", priority=Priority.HIGH, due_date=NOW + timedelta(days=1)))
    store.insert(_task("high-earlier", priority=Priority.HIGH, due_date=NOW - timedelta(days=1)))
    store.insert(_task("done", priority=Priority.HIGH, completed=True))

    assert [task.title for task in store.get_incomplete()] == [
        "high-earlier",
        "high-later",
        "low-none",
    ]


def test_get_incomplete_puts_undated_after_dated_within_priority(store: TaskStore) -> None:
    store.insert(_task("medium-none"))
    store.insert(_task("medium-dated", due_date=NOW + timedelta(days=30)))

    assert [task.title for task in store.get_incomplete()] == ["medium-dated", "medium-none"]


def test_get_completed(store: TaskStore) -> None:
    store.insert(_task("open"))
    store.insert(_task("done-old", completed=True, created_at=datetime(2026, 1, 1)))
    store.insert(_task("done-new", completed=True, created_at=datetime(2026, 2, 1)))

    assert [task.title for task in store.get_completed()] == ["done-new", "done-old"]


def test_get_by_priority_orders_by_due_date(store: TaskStore) -> None:
    store.insert(_task("low", priority=Priority.LOW, due_date=NOW))
    store.insert(_task("high-late", priority=Priority.HIGH, due_date=NOW + timedelta(days=5)))
    store.insert(_task("high-none", priority=Priority.HIGH))
    store.insert(_task("high-soon", priority=Priority.HIGH, due_date=NOW + timedelta(days=1)))

    titles = [task.title for task in store.get_by_priority(Priority.HIGH)]
    assert titles == ["high-soon", "high-late", "high-none"]


def test_mark_completed_and_incomplete(store: TaskStore) -> None:
    task = _task("Laundry", description="whites", due_date=NOW)
    store.insert(task)

    assert store.mark_completed(task.id) == 1
    loaded = store.get_by_id(task.id)
    assert loaded.completed is True
    assert loaded.description == "whites"
    assert loaded.due_date == NOW

    assert store.mark_incomplete(task.id) == 1
    assert store.get_by_id(task.id).completed is False


def test_zero_due_date_reads_as_absent(store: TaskStore, database: Database) -> None:
    with database.session() as session:
        session.execute(
            insert(TodoModel).values(
                title="legacy",
                created_at=to_millis(NOW),
                due_date=0,
                priority=2,
            )
        )
        session.commit()

    [task] = store.get_all()
    assert task.due_date is None
    assert store.get_incomplete() == [task]


def test_unknown_priority_is_kept_and_labelled(store: TaskStore, database: Database) -> None:
    with database.session() as session:
        session.execute(
            insert(TodoModel).values(title="odd", created_at=to_millis(NOW), priority=9)
        )
        session.commit()

    [task] = store.get_all()
    assert task.priority == 9
    assert task.priority_label() == "Unknown"


def test_failures_return_sentinels(tmp_path: Path) -> None:
    # The schema is never created, so every statement fails.
    broken = TaskStore(Database(tmp_path / "missing.db"))
    task = _task("lost")

    assert broken.insert(task) == WRITE_FAILED
    assert task.id is None
    task.id = 1
    assert broken.update(task) == WRITE_FAILED
    assert broken.delete(1) == WRITE_FAILED
    assert broken.mark_completed(1) == WRITE_FAILED
    assert broken.mark_incomplete(1) == WRITE_FAILED
    assert broken.get_by_id(1) is None
    assert broken.get_all() == []
    assert broken.get_incomplete() == []
    assert broken.get_completed() == []
    assert broken.get_by_priority(Priority.HIGH) == []


def test_unbindable_priority_does_not_raise(store: TaskStore) -> None:
    store.insert(_task("anything"))

    assert store.get_by_priority(None) == []
    assert store.get_by_priority("high") == []


def test_millis_conversion() -> None:
    moment = datetime(2026, 5, 17, 18, 45, 2, 250000)

    assert from_millis(to_millis(moment)) == moment
    assert to_millis(None) is None
    assert from_millis(None) is None
    assert from_millis(0) is None


def test_database_context_manager_releases_engine(tmp_path: Path) -> None:
    with Database(tmp_path / "scoped.db") as database:
        store = TaskStore(database)
        store.insert(_task("inside"))

    reopened = Database(tmp_path / "scoped.db")
    reopened.open()
    try:
        assert [task.title for task in TaskStore(reopened).get_all()] == ["inside"]
    finally:
        reopened.close()
