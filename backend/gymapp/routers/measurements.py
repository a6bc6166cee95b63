from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from gymapp.db import get_db
from gymapp.deps.auth import get_current_user
from gymapp.models import User
from gymapp.repositories.measurement_repo import MeasurementRepository
from gymapp.schemas.measurement import MeasurementCreate, MeasurementRead, WeightPoint

router = APIRouter(prefix="/measurements", tags=["measurements"])

@router.get("", response_model=list[MeasurementRead])
def list_measurements(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return MeasurementRepository(db).list_by_user(current.id)

@router.get("/latest", response_model=MeasurementRead | None)
def latest_measurement(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return MeasurementRepository(db).latest(current.id)

@router.get("/weight-history", response_model=list[WeightPoint])
def weight_history(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return [
        {"date": m.measured_at, "weight_kg": m.weight_kg}
        for m in MeasurementRepository(db).weight_history(current.id)
    ]

@router.post("", response_model=MeasurementRead, status_code=status.HTTP_201_CREATED)
def add_measurement(payload: MeasurementCreate, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return MeasurementRepository(db).create(current.id, **payload.model_dump())

@router.delete("/{measurement_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_measurement(measurement_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    if not MeasurementRepository(db).delete(measurement_id, current.id):
        raise HTTPException(status_code=404, detail="Measurement not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
