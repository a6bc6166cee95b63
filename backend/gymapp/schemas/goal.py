from typing import Annotated, Literal
from datetime import datetime
from pydantic import BaseModel, Field, StringConstraints

GoalType = Literal["strength", "weight", "body_fat", "workout_frequency", "volume", "custom"]

class GoalCreate(BaseModel):
    goal_type: GoalType
    title: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]
    description: str | None = None
    target_value: Annotated[float, Field(ge=0)]
    current_value: Annotated[float, Field(ge=0)] = 0
    unit: Annotated[str, Field(min_length=1, max_length=32)]
    exercise_id: str | None = None
    deadline: datetime | None = None

class GoalUpdate(BaseModel):
    title: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)] | None = None
    description: str | None = None
    target_value: Annotated[float, Field(ge=0)] | None = None
    unit: str | None = None
    exercise_id: str | None = None
    deadline: datetime | None = None

class GoalProgress(BaseModel):
    current_value: Annotated[float, Field(ge=0)]

class GoalRead(BaseModel):
    id: int
    goal_type: str
    title: str
    description: str | None = None
    target_value: float
    current_value: float
    unit: str
    exercise_id: str | None = None
    deadline: datetime | None = None
    is_completed: bool
    completed_at: datetime | None = None
    created_at: datetime
    progress: int = 0
    model_config = {"from_attributes": True}
