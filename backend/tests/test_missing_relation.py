import logging

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError, ProgrammingError
from sqlalchemy.orm import sessionmaker

from gymapp.db import make_engine
from gymapp.repositories.achievement_repo import AchievementRepository
from gymapp.repositories.base import is_missing_relation
from gymapp.repositories.goal_repo import GoalRepository
from gymapp.repositories.measurement_repo import MeasurementRepository


@pytest.fixture
def empty_db():
    # a database nobody has migrated yet
    engine = make_engine("sqlite://")
    with sessionmaker(bind=engine)() as session:
        yield session
    engine.dispose()


class _PgError(Exception):
    pgcode = "42P01"


def test_missing_tables_read_as_empty(empty_db, caplog):
    with caplog.at_level(logging.WARNING, logger="gymapp.repositories.base"):
        assert GoalRepository(empty_db).list_by_user(1) == []
        assert MeasurementRepository(empty_db).list_by_user(1) == []
        assert AchievementRepository(empty_db).catalogue() == []
        assert AchievementRepository(empty_db).for_user(1) == {}
    assert "user_goals table missing" in caplog.text

def test_session_still_usable_after_missing_table(empty_db):
    GoalRepository(empty_db).list_by_user(1)
    assert empty_db.execute(text("SELECT 1")).scalar() == 1

def test_other_database_errors_propagate(empty_db):
    repo = GoalRepository(empty_db)
    with pytest.raises(OperationalError):
        repo.read_or_empty(text("SELEC nonsense"))

def test_missing_relation_detection():
    assert is_missing_relation(ProgrammingError("SELECT 1", {}, _PgError("boom")))
    assert is_missing_relation(OperationalError("SELECT 1", {}, Exception("no such table: user_goals")))
    assert is_missing_relation(ProgrammingError("SELECT 1", {}, Exception('relation "user_goals" does not exist')))
    assert not is_missing_relation(OperationalError("SELECT 1", {}, Exception("database is locked")))
