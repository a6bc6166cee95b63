# gymapp/repositories/achievement_repo.py
from __future__ import annotations
from datetime import datetime, timezone

from sqlalchemy import select

from gymapp.models import Achievement, UserAchievement
from gymapp.repositories.base import BaseRepository

class AchievementRepository(BaseRepository[Achievement]):
    model = Achievement

    def catalogue(self) -> list[Achievement]:
        return self.read_or_empty(select(Achievement).order_by(Achievement.category, Achievement.points))

    def for_user(self, user_id: int) -> dict[int, UserAchievement]:
        stmt = select(UserAchievement).where(UserAchievement.user_id == user_id)
        return {ua.achievement_id: ua for ua in self.read_or_empty(stmt)}

    def record_progress(self, user_id: int, achievement_id: int, progress: int, *, existing: UserAchievement | None = None) -> UserAchievement:
        """Upsert the user's progress row; stamps ``unlocked_at`` the first time progress reaches 100."""
        ua = existing or UserAchievement(user_id=user_id, achievement_id=achievement_id, progress=0)
        ua.progress = progress
        if progress >= 100 and ua.unlocked_at is None:
            ua.unlocked_at = datetime.now(timezone.utc)
        self.db.add(ua)
        return ua

    def commit(self) -> None:
        self.db.commit()

    def seed(self, defaults) -> int:
        """Insert catalogue entries missing by name. Returns how many were added."""
        existing = {a.name for a in self.catalogue()}
        added = [Achievement(**d) for d in defaults if d["name"] not in existing]
        self.db.add_all(added)
        self.db.commit()
        return len(added)
