from typing import Annotated, Literal
from datetime import datetime
from pydantic import BaseModel, Field, StringConstraints, computed_field

SetType = Literal["warmup", "working", "dropset", "failure", "amrap"]

# ---- requests ----------------------------------------------------------

class WorkoutStart(BaseModel):
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)] = "Workout"
    template_id: str | None = None

class ExerciseAdd(BaseModel):
    exercise_id: Annotated[str, Field(min_length=1)]

class SetUpdate(BaseModel):
    reps: Annotated[int, Field(ge=0)] | None = None
    weight_kg: Annotated[float, Field(ge=0)] | None = None
    rpe: Annotated[float, Field(ge=1, le=10)] | None = None
    set_type: SetType | None = None
    notes: str | None = None

class CardioUpdate(BaseModel):
    duration_sec: Annotated[int, Field(ge=0)] | None = None
    distance_km: Annotated[float, Field(ge=0)] | None = None
    avg_heart_rate: Annotated[int, Field(gt=0)] | None = None
    max_heart_rate: Annotated[int, Field(gt=0)] | None = None
    avg_pace_sec_per_km: Annotated[int, Field(ge=0)] | None = None
    calories_burned: Annotated[int, Field(ge=0)] | None = None
    elevation_gain_m: float | None = None
    notes: str | None = None

class RestTimerStart(BaseModel):
    seconds: Annotated[int, Field(gt=0, le=3600)] = 90

class WorkoutEnd(BaseModel):
    notes: str | None = None
    rating: Annotated[int, Field(ge=1, le=5)] | None = None
    perceived_exertion: Annotated[int, Field(ge=1, le=10)] | None = None
    calories_burned: Annotated[int, Field(ge=0)] | None = None

# ---- reads -------------------------------------------------------------

class ExerciseDefinitionRead(BaseModel):
    id: str
    name: str
    category: str
    muscle_groups: list[str]
    equipment: list[str]
    is_compound: bool
    difficulty: str
    model_config = {"from_attributes": True}

class ActiveSetRead(BaseModel):
    set_number: int
    reps: int | None = None
    weight_kg: float | None = None
    rpe: float | None = None
    set_type: str
    completed_at: datetime | None = None
    is_pr: bool
    notes: str | None = None
    model_config = {"from_attributes": True}

    @computed_field
    @property
    def completed(self) -> bool:
        return self.completed_at is not None

class ActiveExerciseLogRead(BaseModel):
    id: str
    exercise: ExerciseDefinitionRead
    order_index: int
    sets: list[ActiveSetRead]
    cardio_log: dict | None = None
    notes: str = ""
    model_config = {"from_attributes": True}

class WorkoutSessionRead(BaseModel):
    id: str
    name: str
    status: str
    template_id: str | None = None
    started_at: datetime
    completed_at: datetime | None = None
    duration_sec: int | None = None
    notes: str | None = None
    rating: int | None = None
    perceived_exertion: int | None = None
    calories_burned: int | None = None
    model_config = {"from_attributes": True}

class ActiveWorkoutRead(BaseModel):
    is_active: bool
    is_paused: bool
    session: WorkoutSessionRead | None = None
    exercise_logs: list[ActiveExerciseLogRead] = []
    elapsed_seconds: int
    elapsed_display: str
    rest_timer_end_at: datetime | None = None
    rest_timer_remaining: int
    total_sets: int
    total_volume: float

class WorkoutFinished(BaseModel):
    finished: bool
    session: WorkoutSessionRead | None = None
    total_volume: float = 0
    new_prs: int = 0
    persisted: bool = False

class WorkoutStarted(ActiveWorkoutRead):
    replaced: bool = False
