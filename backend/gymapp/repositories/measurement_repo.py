# gymapp/repositories/measurement_repo.py
from __future__ import annotations
from typing import Optional

from sqlalchemy import select

from gymapp.models import BodyMeasurement
from gymapp.repositories.base import BaseRepository

class MeasurementRepository(BaseRepository[BodyMeasurement]):
    model = BodyMeasurement

    def list_by_user(self, user_id: int) -> list[BodyMeasurement]:
        stmt = select(BodyMeasurement).where(BodyMeasurement.user_id == user_id)\
                                      .order_by(BodyMeasurement.measured_at.desc(), BodyMeasurement.id.desc())
        return self.read_or_empty(stmt)

    def latest(self, user_id: int) -> Optional[BodyMeasurement]:
        items = self.list_by_user(user_id)
        return items[0] if items else None

    def weight_history(self, user_id: int) -> list[BodyMeasurement]:
        """Measurements that carry a weight, oldest first."""
        return [m for m in reversed(self.list_by_user(user_id)) if m.weight_kg is not None]

    def create(self, user_id: int, **fields) -> BodyMeasurement:
        if fields.get("measured_at") is None:
            fields.pop("measured_at", None)
        return self.add_and_refresh(BodyMeasurement(user_id=user_id, **fields))

    def delete(self, measurement_id: int, user_id: int) -> bool:
        return self.delete_owned(measurement_id, user_id)
