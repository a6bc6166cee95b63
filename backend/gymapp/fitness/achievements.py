"""
Achievement criteria as tagged variants, evaluated against workout history.

Criteria are stored as JSON on the achievement row, e.g.
``{"kind": "workout_count", "count": 10}``, and parsed with
``parse_criteria``. Unknown kinds fail validation instead of being ignored.
"""
from __future__ import annotations

from datetime import date
from typing import Annotated, Literal, Optional, Sequence, Union

from pydantic import BaseModel, Field, TypeAdapter

from gymapp.fitness.records import calculate_all_prs, calculate_day_streak, calculate_longest_streak


class WorkoutCountCriteria(BaseModel):
    kind: Literal["workout_count"] = "workout_count"
    count: int = Field(ge=1)

    def current(self, history: Sequence, today: Optional[date] = None) -> float:
        return len(history)

    @property
    def target(self) -> float:
        return self.count


class DayStreakCriteria(BaseModel):
    kind: Literal["day_streak"] = "day_streak"
    days: int = Field(ge=1)

    def current(self, history: Sequence, today: Optional[date] = None) -> float:
        # an earlier streak that reached the target still counts
        return max(calculate_day_streak(history, today=today), calculate_longest_streak(history))

    @property
    def target(self) -> float:
        return self.days


class TotalVolumeCriteria(BaseModel):
    kind: Literal["total_volume"] = "total_volume"
    kg: float = Field(gt=0)

    def current(self, history: Sequence, today: Optional[date] = None) -> float:
        return sum(w.volume or 0 for w in history)

    @property
    def target(self) -> float:
        return self.kg


class PersonalRecordsCriteria(BaseModel):
    kind: Literal["personal_records"] = "personal_records"
    count: int = Field(ge=1)

    def current(self, history: Sequence, today: Optional[date] = None) -> float:
        return len(calculate_all_prs(history))

    @property
    def target(self) -> float:
        return self.count


AchievementCriteria = Annotated[
    Union[WorkoutCountCriteria, DayStreakCriteria, TotalVolumeCriteria, PersonalRecordsCriteria],
    Field(discriminator="kind"),
]

_criteria_adapter = TypeAdapter(AchievementCriteria)


def parse_criteria(raw: dict) -> AchievementCriteria:
    return _criteria_adapter.validate_python(raw)


def progress_percent(criteria: AchievementCriteria, history: Sequence, today: Optional[date] = None) -> int:
    """Progress toward the criteria as 0..100."""
    current = criteria.current(history, today=today)
    return min(100, int(current * 100 // criteria.target))


# seeded by the initial migration
DEFAULT_ACHIEVEMENTS: tuple[dict, ...] = (
    {"name": "First Workout", "description": "Complete your first workout", "icon": "trophy",
     "category": "milestone", "criteria": {"kind": "workout_count", "count": 1}, "points": 10},
    {"name": "Getting Started", "description": "Complete 10 workouts", "icon": "medal",
     "category": "milestone", "criteria": {"kind": "workout_count", "count": 10}, "points": 25},
    {"name": "Dedicated", "description": "Complete 50 workouts", "icon": "star",
     "category": "milestone", "criteria": {"kind": "workout_count", "count": 50}, "points": 50},
    {"name": "Centurion", "description": "Complete 100 workouts", "icon": "crown",
     "category": "milestone", "criteria": {"kind": "workout_count", "count": 100}, "points": 100},
    {"name": "Three-Peat", "description": "Work out 3 days in a row", "icon": "flame",
     "category": "streak", "criteria": {"kind": "day_streak", "days": 3}, "points": 15},
    {"name": "Week Warrior", "description": "Work out 7 days in a row", "icon": "fire",
     "category": "streak", "criteria": {"kind": "day_streak", "days": 7}, "points": 50},
    {"name": "Ton Lifter", "description": "Lift 1,000 kg in total", "icon": "weight",
     "category": "volume", "criteria": {"kind": "total_volume", "kg": 1000}, "points": 15},
    {"name": "Heavy Hauler", "description": "Lift 100,000 kg in total", "icon": "truck",
     "category": "volume", "criteria": {"kind": "total_volume", "kg": 100000}, "points": 75},
    {"name": "Record Breaker", "description": "Hold 5 personal records", "icon": "chart",
     "category": "strength", "criteria": {"kind": "personal_records", "count": 5}, "points": 30},
)
