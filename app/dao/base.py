# app/dao/base.py
"""
Generic data-access contract shared by the entity DAOs.

Every DAO wraps one table and runs plain parameterized statements through the
session it was given. Database errors never escape a DAO: they are logged and
turned into an empty list, ``None``, ``0`` or ``False``.
"""

import logging
from typing import Any, Dict, Generic, List, Optional, Sequence, TypeVar

from sqlalchemy import Table, delete, func, insert, select, update
from sqlalchemy.engine import Row
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseDAO(Generic[T]):
    """Base class for table-backed DAOs"""

    #: Table the DAO reads and writes, set by subclasses
    table: Table = None

    def __init__(self, db: Session):
        self.db = db
        # Related records already loaded by the query in progress
        self._lookups: Optional[Dict[Any, Any]] = None

    # ---- contract supplied by subclasses ----

    @property
    def table_name(self) -> str:
        return self.table.name

    def default_order(self) -> Sequence[Any]:
        """Ordering used by find_all"""
        return (self.table.c.id,)

    def _map_row(self, row: Row) -> T:
        raise NotImplementedError

    def _insert_values(self, entity: T) -> Dict[str, Any]:
        raise NotImplementedError

    def _update_values(self, entity: T) -> Dict[str, Any]:
        raise NotImplementedError

    # ---- generic operations ----

    def find_by_id(self, entity_id: int) -> Optional[T]:
        stmt = select(self.table).where(self.table.c.id == entity_id)
        return self._fetch_one(stmt, "finding %s by id" % self.table_name)

    def find_all(self) -> List[T]:
        stmt = select(self.table).order_by(*self.default_order())
        return self._fetch_all(stmt, "finding all %s" % self.table_name)

    def save(self, entity: Optional[T]) -> bool:
        """Insert new records, update records that already have an id"""
        if entity is None or not entity.is_valid():
            return False
        if not entity.id:
            return self.insert(entity)
        return self.update(entity)

    def insert(self, entity: T) -> bool:
        stmt = insert(self.table).values(**self._insert_values(entity))
        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as e:
            self._handle_error("inserting into %s" % self.table_name, e)
            return False

        if result.rowcount == 0:
            return False
        entity.id = result.inserted_primary_key[0]
        return True

    def update(self, entity: T) -> bool:
        stmt = (
            update(self.table)
            .where(self.table.c.id == entity.id)
            .values(**self._update_values(entity))
        )
        return self._execute_write(stmt, "updating %s" % self.table_name)

    def delete_by_id(self, entity_id: int) -> bool:
        stmt = delete(self.table).where(self.table.c.id == entity_id)
        return self._execute_write(stmt, "deleting from %s" % self.table_name)

    def count(self) -> int:
        stmt = select(func.count()).select_from(self.table)
        return self._scalar(stmt, "counting %s" % self.table_name, default=0)

    # ---- statement helpers ----

    def _fetch_all(self, stmt, action: str) -> List[T]:
        """Map every row of a query; rows share their related-record lookups"""
        try:
            rows = self.db.execute(stmt).all()
        except SQLAlchemyError as e:
            self._handle_error(action, e)
            return []
        self._lookups = {}
        try:
            return [self._map_row(row) for row in rows]
        finally:
            self._lookups = None

    def _related(self, dao: "BaseDAO", entity_id: Optional[int]) -> Any:
        """find_by_id on another DAO, loaded once per query while rows are mapped"""
        if entity_id is None:
            return None
        if self._lookups is None:
            return dao.find_by_id(entity_id)
        key = (dao.table_name, entity_id)
        if key not in self._lookups:
            self._lookups[key] = dao.find_by_id(entity_id)
        return self._lookups[key]

    def _fetch_one(self, stmt, action: str) -> Optional[T]:
        try:
            row = self.db.execute(stmt).first()
        except SQLAlchemyError as e:
            self._handle_error(action, e)
            return None
        return self._map_row(row) if row is not None else None

    def _fetch_rows(self, stmt, action: str) -> List[Row]:
        try:
            return self.db.execute(stmt).all()
        except SQLAlchemyError as e:
            self._handle_error(action, e)
            return []

    def _scalar(self, stmt, action: str, default: Any = None) -> Any:
        try:
            value = self.db.execute(stmt).scalar()
        except SQLAlchemyError as e:
            self._handle_error(action, e)
            return default
        return default if value is None else value

    def _execute_write(self, stmt, action: str) -> bool:
        """Run a single UPDATE/DELETE and commit it; True when a row changed"""
        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as e:
            self._handle_error(action, e)
            return False
        return result.rowcount > 0

    def _handle_error(self, action: str, error: Exception) -> None:
        logger.error("Error %s: %s", action, error)
        try:
            self.db.rollback()
        except SQLAlchemyError as rollback_error:
            logger.error("Error rolling back after %s: %s", action, rollback_error)
