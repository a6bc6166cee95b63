# gymapp/repositories/exercise_repo.py
from __future__ import annotations
from typing import Optional

from sqlalchemy import select

from gymapp.models import Exercise
from gymapp.repositories.base import BaseRepository

class ExerciseRepository(BaseRepository[Exercise]):
    model = Exercise

    def list_custom(self, user_id: int) -> list[Exercise]:
        stmt = select(Exercise).where(Exercise.user_id == user_id, Exercise.is_system.is_(False))\
                               .order_by(Exercise.name.asc())
        return self.read_or_empty(stmt)

    def get(self, exercise_id: int, user_id: int) -> Optional[Exercise]:
        return self.get_owned(exercise_id, user_id)

    def create(self, user_id: int, **fields) -> Exercise:
        return self.add_and_refresh(Exercise(user_id=user_id, is_system=False, **fields))

    def delete(self, exercise_id: int, user_id: int) -> bool:
        return self.delete_owned(exercise_id, user_id)
