# gymapp/repositories/goal_repo.py
from __future__ import annotations
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select

from gymapp.models import UserGoal
from gymapp.repositories.base import BaseRepository

def goal_progress(goal: UserGoal) -> int:
    """Percent toward target, capped at 100; a zero target reads as 0."""
    if not goal.target_value:
        return 0
    return min(100, round((goal.current_value or 0) / goal.target_value * 100))

class GoalRepository(BaseRepository[UserGoal]):
    model = UserGoal

    def list_by_user(self, user_id: int) -> list[UserGoal]:
        stmt = select(UserGoal).where(UserGoal.user_id == user_id).order_by(UserGoal.created_at.desc(), UserGoal.id.desc())
        return self.read_or_empty(stmt)

    def get(self, goal_id: int, user_id: int) -> Optional[UserGoal]:
        return self.get_owned(goal_id, user_id)

    def create(self, user_id: int, **fields) -> UserGoal:
        return self.add_and_refresh(UserGoal(user_id=user_id, **fields))

    def update(self, goal: UserGoal, **fields) -> UserGoal:
        for key, value in fields.items():
            setattr(goal, key, value)
        self.db.commit()
        self.db.refresh(goal)
        return goal

    def update_progress(self, goal: UserGoal, current_value: float) -> UserGoal:
        completed = current_value >= goal.target_value
        goal.current_value = current_value
        if completed and not goal.is_completed:
            goal.completed_at = datetime.now(timezone.utc)
        elif not completed:
            goal.completed_at = None
        goal.is_completed = completed
        self.db.commit()
        self.db.refresh(goal)
        return goal

    def delete(self, goal_id: int, user_id: int) -> bool:
        return self.delete_owned(goal_id, user_id)
