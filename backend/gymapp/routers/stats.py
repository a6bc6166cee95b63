from datetime import date
from fastapi import APIRouter, Depends, HTTPException
from gymapp.deps.auth import get_current_user
from gymapp.fitness.records import (
    calculate_all_prs, calculate_day_streak, calculate_longest_streak,
    calculate_workout_stats, get_exercise_pr, get_prs_this_month,
)
from gymapp.fitness.timefmt import format_duration
from gymapp.fitness.units import UnitConverter
from gymapp.local_store import history_for
from gymapp.models import User
from gymapp.schemas.stats import PersonalRecordRead, StreakRead, WorkoutStatsRead

router = APIRouter(prefix="/stats", tags=["stats"])

def _pr_view(pr) -> dict:
    return {
        "exercise_name": pr.exercise_name,
        "weight": pr.weight,
        "reps": pr.reps,
        "score": pr.score,
        "estimated_1rm": pr.estimated_1rm,
        "date": pr.date,
        "workout_id": pr.workout_id,
    }

@router.get("/summary", response_model=WorkoutStatsRead)
def summary(current: User = Depends(get_current_user)):
    stats = WorkoutStatsRead.model_validate(calculate_workout_stats(history_for(current.id).all()))
    units = UnitConverter(current.unit_system.value)
    stats.total_volume_display = units.format_volume(stats.total_volume)
    stats.total_duration_display = format_duration(stats.total_duration)
    return stats

@router.get("/prs", response_model=list[PersonalRecordRead])
def all_prs(current: User = Depends(get_current_user)):
    prs = calculate_all_prs(history_for(current.id).all())
    return [_pr_view(prs[name]) for name in sorted(prs)]

@router.get("/prs/month", response_model=list[PersonalRecordRead])
def prs_this_month(current: User = Depends(get_current_user)):
    return [_pr_view(pr) for pr in get_prs_this_month(history_for(current.id).all())]

@router.get("/prs/{exercise_name}", response_model=PersonalRecordRead)
def exercise_pr(exercise_name: str, current: User = Depends(get_current_user)):
    pr = get_exercise_pr(history_for(current.id).all(), exercise_name)
    if pr is None:
        raise HTTPException(status_code=404, detail="No record for this exercise")
    return _pr_view(pr)

@router.get("/streak", response_model=StreakRead)
def streak(current: User = Depends(get_current_user)):
    history = history_for(current.id).all()
    return {
        "current_streak": calculate_day_streak(history, today=date.today()),
        "longest_streak": calculate_longest_streak(history),
    }
