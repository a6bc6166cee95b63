from typing import Annotated
from datetime import datetime
from pydantic import BaseModel, Field

Positive = Annotated[float, Field(gt=0)]

class MeasurementCreate(BaseModel):
    measured_at: datetime | None = None
    weight_kg: Positive | None = None
    body_fat_percent: Annotated[float, Field(ge=0, le=100)] | None = None
    muscle_mass_kg: Positive | None = None
    chest_cm: Positive | None = None
    waist_cm: Positive | None = None
    hips_cm: Positive | None = None
    bicep_cm: Positive | None = None
    thigh_cm: Positive | None = None
    notes: str | None = None

class MeasurementRead(MeasurementCreate):
    id: int
    measured_at: datetime
    model_config = {"from_attributes": True}

class WeightPoint(BaseModel):
    date: datetime
    weight_kg: float
