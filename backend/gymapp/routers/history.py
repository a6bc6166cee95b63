from fastapi import APIRouter, Depends, HTTPException, Response, status
from gymapp.deps.auth import get_current_user
from gymapp.local_store import history_for
from gymapp.models import User
from gymapp.schemas.history import RatingUpdate, SavedWorkout

router = APIRouter(prefix="/history", tags=["history"])

@router.get("", response_model=list[SavedWorkout])
def list_history(current: User = Depends(get_current_user)):
    return history_for(current.id).all()

@router.get("/{workout_id}", response_model=SavedWorkout)
def get_workout(workout_id: str, current: User = Depends(get_current_user)):
    workout = history_for(current.id).get(workout_id)
    if workout is None:
        raise HTTPException(status_code=404, detail="Workout not found")
    return workout

@router.delete("/{workout_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_workout(workout_id: str, current: User = Depends(get_current_user)):
    if not history_for(current.id).delete(workout_id):
        raise HTTPException(status_code=404, detail="Workout not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.patch("/{workout_id}/rating", response_model=SavedWorkout)
def rate_workout(workout_id: str, payload: RatingUpdate, current: User = Depends(get_current_user)):
    workout = history_for(current.id).update_rating(workout_id, payload.rating)
    if workout is None:
        raise HTTPException(status_code=404, detail="Workout not found")
    return workout
