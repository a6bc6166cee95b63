from datetime import datetime
from pydantic import BaseModel

class PersonalRecordRead(BaseModel):
    exercise_name: str
    weight: float
    reps: int
    score: float
    estimated_1rm: float
    date: datetime
    workout_id: str | None = None
    model_config = {"from_attributes": True}

class WorkoutStatsRead(BaseModel):
    total_workouts: int
    total_volume: float
    total_duration: int
    current_streak: int
    longest_streak: int
    workouts_this_week: int
    workouts_this_month: int
    total_volume_display: str = ""
    total_duration_display: str = ""
    model_config = {"from_attributes": True}

class StreakRead(BaseModel):
    current_streak: int
    longest_streak: int

class PercentageRow(BaseModel):
    percent: int
    description: str
    weight: float

class OneRepMaxRead(BaseModel):
    weight: float
    reps: int
    one_rep_max: float
    percentages: list[PercentageRow]

class PlateRead(BaseModel):
    weight: float
    count: int
    color: str
    model_config = {"from_attributes": True}

class PlatesRead(BaseModel):
    target: float
    bar: float
    per_side: list[PlateRead]
    actual: float
