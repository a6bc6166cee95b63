from typing import Annotated, Literal
from datetime import datetime
from pydantic import BaseModel, StringConstraints

class CustomExerciseCreate(BaseModel):
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]
    category: Literal["strength", "cardio", "flexibility", "warmup"] = "strength"
    muscle_groups: list[str] = []
    equipment: list[str] = []
    difficulty: Literal["beginner", "intermediate", "advanced"] = "beginner"
    is_compound: bool = False

class CustomExerciseRead(CustomExerciseCreate):
    id: int
    is_system: bool
    created_at: datetime
    model_config = {"from_attributes": True}
