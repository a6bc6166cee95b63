# gymapp/repositories/base.py
from __future__ import annotations
import logging
from typing import Generic, TypeVar

from sqlalchemy.exc import OperationalError, ProgrammingError
from sqlalchemy.orm import Session

T = TypeVar("T")  # SQLAlchemy model type

log = logging.getLogger(__name__)

MISSING_RELATION_MARKERS = ("does not exist", "no such table", "42P01")


def is_missing_relation(exc: Exception) -> bool:
    code = getattr(getattr(exc, "orig", None), "pgcode", None)
    if code == "42P01":
        return True
    return any(marker in str(exc) for marker in MISSING_RELATION_MARKERS)


class BaseRepository(Generic[T]):
    """Lightweight base for repositories using SQLAlchemy 2.0 style."""
    model: type

    def __init__(self, db: Session):
        self.db = db

    def add_and_refresh(self, entity: T) -> T:
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def delete_owned(self, entity_id: int, user_id: int) -> bool:
        entity = self.db.get(self.model, entity_id)
        if entity is None or entity.user_id != user_id:
            return False
        self.db.delete(entity)
        self.db.commit()
        return True

    def get_owned(self, entity_id: int, user_id: int):
        entity = self.db.get(self.model, entity_id)
        if entity is None or entity.user_id != user_id:
            return None
        return entity

    def read_or_empty(self, stmt) -> list[T]:
        """
        Run a list query, degrading to [] when the table has not been
        migrated yet. Any other database error propagates.
        """
        try:
            return list(self.db.execute(stmt).scalars().all())
        except (ProgrammingError, OperationalError) as e:
            if not is_missing_relation(e):
                raise
            self.db.rollback()
            log.warning("%s table missing, returning empty result: %s", self.model.__tablename__, e.orig)
            return []
