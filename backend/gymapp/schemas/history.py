from typing import Annotated
from datetime import datetime, timezone
from pydantic import BaseModel, Field, StringConstraints, field_validator

NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]

class SavedSet(BaseModel):
    weight: float | None = None
    reps: int | None = None
    completed: bool = False

class SavedExercise(BaseModel):
    name: str
    sets: list[SavedSet] = []

class SavedWorkout(BaseModel):
    id: str
    name: str
    date: datetime
    duration: int = 0  # seconds
    exercises: list[SavedExercise] = []
    volume: float = 0
    rating: int | None = None
    notes: str | None = None

    @field_validator("date")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        return v if v.tzinfo else v.replace(tzinfo=timezone.utc)

class RatingUpdate(BaseModel):
    rating: Annotated[int, Field(ge=1, le=5)]

class TemplateExercise(BaseModel):
    name: NameStr
    sets: Annotated[int, Field(ge=1, le=20)]
    default_weight: float | None = None
    default_reps: int | None = None

class WorkoutTemplate(BaseModel):
    id: str
    name: str
    exercises: list[TemplateExercise] = []
    created_at: str
    last_used: str | None = None

class TemplateCreate(BaseModel):
    name: NameStr
    exercises: list[TemplateExercise] = []

class TemplateUpdate(BaseModel):
    name: NameStr | None = None
    exercises: list[TemplateExercise] | None = None
