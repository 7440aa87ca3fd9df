from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.orm import Session, declarative_base, sessionmaker

logger = logging.getLogger(__name__)

Base = declarative_base()


def _to_url(location: str | Path) -> str:
    value = str(location)
    if value.startswith("sqlite"):
        return value
    path = Path(value)
    path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{path}"


class Database:
    """Long-lived handle on the embedded task database.

    The engine is created on first use and reused for every session until
    ``close()``; use it as a context manager to bracket the application run.
    """

    def __init__(self, location: str | Path) -> None:
        self._location = location
        self._engine: Engine | None = None
        self._sessions: sessionmaker[Session] | None = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._engine = create_engine(_to_url(self._location))
            self._sessions = sessionmaker(bind=self._engine, autoflush=False, autocommit=False)
        return self._engine

    def session(self) -> Session:
        if self._sessions is None:
            self._sessions = sessionmaker(bind=self.engine, autoflush=False, autocommit=False)
        return self._sessions()

    def open(self) -> None:
        # Registers the table on Base.metadata.
        from . import models  # noqa: F401

        Base.metadata.create_all(self.engine)
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        logger.info("Database ready at %s", self._location)

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            logger.info("Database closed at %s", self._location)
        self._engine = None
        self._sessions = None

    def __enter__(self) -> Database:
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
