from datetime import datetime
from pydantic import BaseModel

class AchievementRead(BaseModel):
    id: int
    name: str
    description: str
    icon: str
    category: str
    points: int
    criteria: dict
    unlocked: bool = False
    progress: int = 0
    unlocked_at: datetime | None = None

class AchievementList(BaseModel):
    achievements: list[AchievementRead]
    total_points: int

class EvaluationResult(BaseModel):
    newly_unlocked: list[AchievementRead]
    total_points: int
