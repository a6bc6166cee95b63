from typing import Annotated, Literal
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from gymapp.schemas.history import SavedWorkout

InsightType = Literal["recommendation", "analysis", "warning", "celebration"]
WorkoutType = Literal["push", "pull", "legs", "upper", "lower", "full_body", "custom"]

class Insight(BaseModel):
    id: str
    type: InsightType
    title: str
    content: str
    created_at: datetime
    is_read: bool = False

class InsightsRequest(BaseModel):
    # defaults to the caller's stored history
    workouts: list[SavedWorkout] | None = None

class InsightsResponse(BaseModel):
    insights: list[Insight]

class RecentWorkout(BaseModel):
    name: str
    exercises: list[str] = []

class GenerateWorkoutRequest(BaseModel):
    workout_type: WorkoutType
    custom_muscle_groups: list[str] | None = None
    duration: Literal[30, 45, 60, 75, 90]
    equipment: Annotated[list[str], Field(min_length=1)]
    experience_level: Literal["beginner", "intermediate", "advanced"]
    goal: Literal["strength", "hypertrophy", "endurance", "general"]
    recent_workouts: list[RecentWorkout] | None = None

class GeneratedExercise(BaseModel):
    exercise_id: str = Field(alias="exerciseId")
    name: str
    sets: int
    reps: str
    rest_seconds: int = Field(alias="restSeconds")
    notes: str | None = None
    intensity: str | None = None
    model_config = {"populate_by_name": True}

    @field_validator("reps", mode="before")
    @classmethod
    def reps_as_text(cls, v):
        # models sometimes answer 10 instead of "10"
        return str(v) if isinstance(v, (int, float)) else v

class GeneratedWorkout(BaseModel):
    name: str
    estimated_duration: int = Field(alias="estimatedDuration")
    target_muscle_groups: list[str] = Field(default_factory=list, alias="targetMuscleGroups")
    warmup: list[GeneratedExercise] = []
    main_workout: list[GeneratedExercise] = Field(default_factory=list, alias="mainWorkout")
    cooldown: list[GeneratedExercise] | None = None
    model_config = {"populate_by_name": True}

class GenerateWorkoutResponse(BaseModel):
    workout: GeneratedWorkout
