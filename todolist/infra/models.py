from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, Column, Integer, Text

from .db import Base


def to_millis(value: datetime | None) -> int | None:
    if value is None:
        return None
    return int(value.replace(microsecond=0).timestamp()) * 1000 + value.microsecond // 1000


def from_millis(value: int | None) -> datetime | None:
    # 0 and NULL both mean "not set".
    if not value or value <= 0:
        return None
    seconds, millis = divmod(int(value), 1000)
    return datetime.fromtimestamp(seconds).replace(microsecond=millis * 1000)


class TodoModel(Base):
    __tablename__ = "todos"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    is_completed = Column(Integer, default=0, server_default="0")
    created_at = Column(BigInteger, nullable=False)
    due_date = Column(BigInteger, nullable=True)
    priority = Column(Integer, default=2, server_default="2")
    category = Column(Text, nullable=True)
