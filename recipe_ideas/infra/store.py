"""Data store port used by the request handlers.

Handlers never touch a session directly; they get a ``DataStore`` that speaks
in tables, equality filters and plain dict rows. ``SqlAlchemyStore`` is the
production implementation; tests can swap in an in-memory fake.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Iterator, Optional, Sequence

from sqlalchemy import delete, inspect, select, text, update
from sqlalchemy.orm import Session

from ..db import Base

logger = logging.getLogger("recipe_ideas.store")

Row = dict[str, Any]


class DataStore(ABC):
    """Generic relational store.

    ``where`` is always a conjunction of equality filters
    (``{"id": ..., "user_id": ...}``).
    """

    @abstractmethod
    def insert(self, table: type[Base], rows: Sequence[Row]) -> int:
        """Insert rows. Returns the number inserted."""

    @abstractmethod
    def update(self, table: type[Base], values: Row, where: Row) -> int:
        """Set ``values`` on every matching row. Returns the match count."""

    @abstractmethod
    def delete(self, table: type[Base], where: Row) -> int:
        """Delete every matching row. Returns the number deleted."""

    @abstractmethod
    def select(
        self,
        table: type[Base],
        where: Optional[Row] = None,
        order_by: Sequence[str] = (),
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Row]:
        """Matching rows as dicts, ascending by ``order_by`` columns."""

    @contextmanager
    def transaction(self) -> Iterator["DataStore"]:
        """Group writes. Stores without transactions just run them in order."""
        yield self

    def ping(self) -> bool:
        return True


def _row_to_dict(obj: Base) -> Row:
    mapper = inspect(type(obj))
    return {attr.key: getattr(obj, attr.key) for attr in mapper.column_attrs}


class SqlAlchemyStore(DataStore):
    """DataStore over a request-scoped SQLAlchemy session.

    Outside ``transaction()`` every write commits immediately. Inside, writes
    are flushed and committed once when the outermost block exits, or rolled
    back if it raises.
    """

    def __init__(self, db: Session):
        self.db = db
        self._depth = 0

    def _finish_write(self) -> None:
        if self._depth == 0:
            self.db.commit()
        else:
            self.db.flush()

    @contextmanager
    def transaction(self) -> Iterator["SqlAlchemyStore"]:
        self._depth += 1
        try:
            yield self
            if self._depth == 1:
                self.db.commit()
        except Exception:
            if self._depth == 1:
                logger.warning("Rolling back store transaction")
                self.db.rollback()
            raise
        finally:
            self._depth -= 1

    def insert(self, table: type[Base], rows: Sequence[Row]) -> int:
        if not rows:
            return 0
        self.db.add_all([table(**row) for row in rows])
        self._finish_write()
        return len(rows)

    def update(self, table: type[Base], values: Row, where: Row) -> int:
        stmt = (
            update(table)
            .filter_by(**where)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        self._finish_write()
        return result.rowcount

    def delete(self, table: type[Base], where: Row) -> int:
        # Evict matching instances so re-inserted rows may reuse their ids
        stmt = (
            delete(table)
            .filter_by(**where)
            .execution_options(synchronize_session="evaluate")
        )
        result = self.db.execute(stmt)
        self._finish_write()
        return result.rowcount

    def select(
        self,
        table: type[Base],
        where: Optional[Row] = None,
        order_by: Sequence[str] = (),
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Row]:
        stmt = (
            select(table)
            .filter_by(**(where or {}))
            .execution_options(populate_existing=True)
        )
        if order_by:
            stmt = stmt.order_by(*[getattr(table, col).asc() for col in order_by])
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset:
            stmt = stmt.offset(offset)
        return [_row_to_dict(obj) for obj in self.db.scalars(stmt).all()]

    def ping(self) -> bool:
        try:
            self.db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning(f"Database ping failed: {e}")
            return False
