from typing import Annotated, Literal
from pydantic import BaseModel, EmailStr, Field, StringConstraints, field_validator
from datetime import date, datetime

from gymapp.models.user import SubscriptionStatus, UnitSystem

NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]

class UserBase(BaseModel):
    email: EmailStr = Field(max_length=255)
    username: NameStr

class UserRegister(UserBase):
    # no regex here; Pydantic v2 core regex doesn't support look-arounds
    password: Annotated[str, Field(min_length=12, max_length=128)]

    @field_validator("password")
    @classmethod
    def password_policy(cls, v: str) -> str:
        if not any(c.islower() for c in v):
            raise ValueError("password must include a lowercase letter")
        if not any(c.isupper() for c in v):
            raise ValueError("password must include an uppercase letter")
        if not any(c.isdigit() for c in v):
            raise ValueError("password must include a digit")
        if not any(not c.isalnum() for c in v):
            raise ValueError("password must include a special character")
        return v

class UserLogin(BaseModel):
    email: EmailStr
    password: Annotated[str, Field(min_length=1, max_length=256)]

class TokenRead(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds

class UserRead(UserBase):
    id: int
    display_name: str | None = None
    unit_system: UnitSystem
    subscription_status: SubscriptionStatus
    created_at: datetime
    model_config = {"from_attributes": True}

class ProfileRead(UserRead):
    avatar_url: str | None = None
    bio: str | None = None
    date_of_birth: date | None = None
    gender: str | None = None
    height_cm: float | None = None
    weight_kg: float | None = None
    fitness_goal: str | None = None
    experience_level: str | None = None
    updated_at: datetime | None = None

class ProfileUpdate(BaseModel):
    username: NameStr | None = None
    display_name: NameStr | None = None
    avatar_url: str | None = None
    bio: Annotated[str, Field(max_length=500)] | None = None
    date_of_birth: date | None = None
    gender: Literal["male", "female", "other", "prefer_not_to_say"] | None = None
    height_cm: Annotated[float, Field(gt=0, lt=300)] | None = None
    weight_kg: Annotated[float, Field(gt=0, lt=700)] | None = None
    unit_system: UnitSystem | None = None
    fitness_goal: Literal["strength", "hypertrophy", "endurance", "weight_loss", "general"] | None = None
    experience_level: Literal["beginner", "intermediate", "advanced"] | None = None
