from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, ForeignKey, DateTime, Numeric, Text, func
from gymapp.db import Base

def _num():
    return mapped_column(Numeric(6, 2, asdecimal=False), nullable=True)

class BodyMeasurement(Base):
    __tablename__ = "body_measurements"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    measured_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    weight_kg: Mapped[float | None] = _num()
    body_fat_percent: Mapped[float | None] = _num()
    muscle_mass_kg: Mapped[float | None] = _num()
    chest_cm: Mapped[float | None] = _num()
    waist_cm: Mapped[float | None] = _num()
    hips_cm: Mapped[float | None] = _num()
    bicep_cm: Mapped[float | None] = _num()
    thigh_cm: Mapped[float | None] = _num()
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
