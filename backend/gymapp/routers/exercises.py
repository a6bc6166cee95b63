from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session
from gymapp.db import get_db
from gymapp.deps.auth import get_current_user
from gymapp.fitness.exercises import EXERCISE_LIBRARY, EXERCISES_BY_ID
from gymapp.models import User
from gymapp.repositories.exercise_repo import ExerciseRepository
from gymapp.schemas.exercise import CustomExerciseCreate, CustomExerciseRead
from gymapp.schemas.workout import ExerciseDefinitionRead

router = APIRouter(prefix="/exercises", tags=["exercises"])

@router.get("/library", response_model=list[ExerciseDefinitionRead])
def library(
    category: str | None = None,
    muscle: list[str] | None = Query(None),
    equipment: list[str] | None = Query(None),
):
    """Built-in exercises. ``equipment`` lists what is available; every piece an exercise needs must be in it."""
    items = EXERCISE_LIBRARY
    if category:
        items = [e for e in items if e.category == category]
    if muscle:
        items = [e for e in items if set(muscle).intersection(e.muscle_groups)]
    if equipment:
        items = [e for e in items if set(e.equipment) <= set(equipment)]
    return list(items)

@router.get("/library/{exercise_id}", response_model=ExerciseDefinitionRead)
def library_exercise(exercise_id: str):
    if exercise_id not in EXERCISES_BY_ID:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return EXERCISES_BY_ID[exercise_id]

@router.get("/custom", response_model=list[CustomExerciseRead])
def list_custom(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return ExerciseRepository(db).list_custom(current.id)

@router.post("/custom", response_model=CustomExerciseRead, status_code=status.HTTP_201_CREATED)
def add_custom(payload: CustomExerciseCreate, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return ExerciseRepository(db).create(current.id, **payload.model_dump())

@router.delete("/custom/{exercise_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_custom(exercise_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    if not ExerciseRepository(db).delete(exercise_id, current.id):
        raise HTTPException(status_code=404, detail="Exercise not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
