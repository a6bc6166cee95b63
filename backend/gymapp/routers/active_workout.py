import logging
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gymapp.db import get_db
from gymapp.deps.auth import get_active_workout, get_current_user
from gymapp.fitness.active_workout import ActiveWorkout, FinishedWorkout
from gymapp.fitness.exercises import ExerciseDefinition, find_exercise
from gymapp.fitness.records import calculate_all_prs, flag_new_prs
from gymapp.fitness.timefmt import format_time
from gymapp.local_store import history_for
from gymapp.models import User
from gymapp.repositories.exercise_repo import ExerciseRepository
from gymapp.repositories.workout_repo import WorkoutRepository
from gymapp.schemas.history import SavedExercise, SavedSet, SavedWorkout
from gymapp.schemas.workout import (
    ActiveWorkoutRead, CardioUpdate, ExerciseAdd, RestTimerStart, SetUpdate,
    WorkoutEnd, WorkoutFinished, WorkoutStart, WorkoutStarted,
)

log = logging.getLogger(__name__)

router = APIRouter(prefix="/workouts/active", tags=["active workout"])

CUSTOM_PREFIX = "custom:"

def state_view(active: ActiveWorkout) -> dict:
    return {
        "is_active": active.is_active,
        "is_paused": active.is_paused,
        "session": active.session,
        "exercise_logs": active.exercise_logs,
        "elapsed_seconds": active.elapsed_seconds,
        "elapsed_display": format_time(active.elapsed_seconds),
        "rest_timer_end_at": active.rest_timer_end_at,
        "rest_timer_remaining": active.rest_timer_remaining,
        "total_sets": active.total_sets,
        "total_volume": active.total_volume,
    }

def running(active: ActiveWorkout = Depends(get_active_workout)) -> ActiveWorkout:
    if not active.is_active:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="No active workout")
    return active

def _not_found(what: str):
    return HTTPException(status_code=404, detail=f"{what} not found")

def to_saved_workout(finished: FinishedWorkout) -> SavedWorkout:
    s = finished.session
    return SavedWorkout(
        id=s.id,
        name=s.name,
        date=s.completed_at,
        duration=s.duration_sec or 0,
        exercises=[
            SavedExercise(
                name=entry.exercise.name,
                sets=[SavedSet(weight=st.weight_kg, reps=st.reps, completed=st.completed) for st in entry.sets],
            )
            for entry in finished.exercise_logs
        ],
        volume=finished.total_volume,
        rating=s.rating,
        notes=s.notes,
    )

@router.get("", response_model=ActiveWorkoutRead)
def get_state(active: ActiveWorkout = Depends(get_active_workout)):
    return state_view(active)

@router.post("/start", response_model=WorkoutStarted, status_code=status.HTTP_201_CREATED)
def start(payload: WorkoutStart | None = None, active: ActiveWorkout = Depends(get_active_workout)):
    payload = payload or WorkoutStart()
    replaced = active.is_active
    active.start(payload.name, template_id=payload.template_id)
    return {**state_view(active), "replaced": replaced}

@router.post("/pause", response_model=ActiveWorkoutRead)
def pause(active: ActiveWorkout = Depends(running)):
    active.pause()
    return state_view(active)

@router.post("/resume", response_model=ActiveWorkoutRead)
def resume(active: ActiveWorkout = Depends(running)):
    active.resume()
    return state_view(active)

@router.post("/cancel", response_model=ActiveWorkoutRead)
def cancel(
    request: Request,
    active: ActiveWorkout = Depends(get_active_workout),
    current: User = Depends(get_current_user),
):
    active.cancel()
    request.app.state.workouts.discard(current.id)
    return state_view(active)

@router.post("/end", response_model=WorkoutFinished)
def end(
    request: Request,
    payload: WorkoutEnd | None = None,
    active: ActiveWorkout = Depends(get_active_workout),
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    if not active.is_active:
        return {"finished": False}
    payload = payload or WorkoutEnd()
    history = history_for(current.id)
    prior = calculate_all_prs(history.all())
    finished = active.end(**payload.model_dump(exclude_none=True))
    request.app.state.workouts.discard(current.id)
    new_prs = flag_new_prs(finished.exercise_logs, prior, finished.session.completed_at)
    history.add(to_saved_workout(finished))

    persisted = True
    try:
        WorkoutRepository(db).save_finished(current.id, finished)
    except SQLAlchemyError:
        db.rollback()
        log.exception("failed to persist workout %s for user %s", finished.session.id, current.id)
        persisted = False
    return {
        "finished": True,
        "session": finished.session,
        "total_volume": finished.total_volume,
        "new_prs": new_prs,
        "persisted": persisted,
    }

# ---- exercises -------------------------------------------------------------

def lookup_exercise(exercise_id: str, user_id: int, db: Session) -> ExerciseDefinition | None:
    if exercise_id.startswith(CUSTOM_PREFIX):
        try:
            row = ExerciseRepository(db).get(int(exercise_id[len(CUSTOM_PREFIX):]), user_id)
        except ValueError:
            return None
        if row is None:
            return None
        return ExerciseDefinition(
            id=exercise_id,
            name=row.name,
            category=row.category,
            muscle_groups=tuple(row.muscle_groups or ()),
            equipment=tuple(row.equipment or ()),
            is_compound=row.is_compound,
            difficulty=row.difficulty,
        )
    return find_exercise(exercise_id)

@router.post("/exercises", response_model=ActiveWorkoutRead, status_code=status.HTTP_201_CREATED)
def add_exercise(
    payload: ExerciseAdd,
    active: ActiveWorkout = Depends(running),
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    definition = lookup_exercise(payload.exercise_id, current.id, db)
    if definition is None:
        raise _not_found("Exercise")
    active.add_exercise(definition)
    return state_view(active)

@router.delete("/exercises/{exercise_index}", response_model=ActiveWorkoutRead)
def remove_exercise(exercise_index: int, active: ActiveWorkout = Depends(running)):
    if not active.remove_exercise(exercise_index):
        raise _not_found("Exercise")
    return state_view(active)

@router.patch("/exercises/{exercise_index}/cardio", response_model=ActiveWorkoutRead)
def update_cardio(exercise_index: int, payload: CardioUpdate, active: ActiveWorkout = Depends(running)):
    if not active.update_cardio_log(exercise_index, **payload.model_dump(exclude_unset=True)):
        raise _not_found("Cardio exercise")
    return state_view(active)

# ---- sets ------------------------------------------------------------------

@router.post("/exercises/{exercise_index}/sets", response_model=ActiveWorkoutRead, status_code=status.HTTP_201_CREATED)
def add_set(exercise_index: int, active: ActiveWorkout = Depends(running)):
    if active.add_set(exercise_index) is None:
        raise _not_found("Exercise")
    return state_view(active)

@router.patch("/exercises/{exercise_index}/sets/{set_index}", response_model=ActiveWorkoutRead)
def update_set(exercise_index: int, set_index: int, payload: SetUpdate, active: ActiveWorkout = Depends(running)):
    if not active.update_set(exercise_index, set_index, **payload.model_dump(exclude_unset=True)):
        raise _not_found("Set")
    return state_view(active)

@router.post("/exercises/{exercise_index}/sets/{set_index}/complete", response_model=ActiveWorkoutRead)
def complete_set(
    exercise_index: int,
    set_index: int,
    payload: SetUpdate | None = None,
    active: ActiveWorkout = Depends(running),
):
    payload = payload or SetUpdate()
    if not active.complete_set(exercise_index, set_index, **payload.model_dump(exclude_unset=True)):
        raise _not_found("Set")
    return state_view(active)

@router.post("/exercises/{exercise_index}/sets/{set_index}/uncomplete", response_model=ActiveWorkoutRead)
def uncomplete_set(exercise_index: int, set_index: int, active: ActiveWorkout = Depends(running)):
    if not active.uncomplete_set(exercise_index, set_index):
        raise _not_found("Set")
    return state_view(active)

@router.delete("/exercises/{exercise_index}/sets/{set_index}", response_model=ActiveWorkoutRead)
def remove_set(exercise_index: int, set_index: int, active: ActiveWorkout = Depends(running)):
    if not active.remove_set(exercise_index, set_index):
        raise _not_found("Set")
    return state_view(active)

# ---- rest timer ------------------------------------------------------------

@router.post("/rest-timer", response_model=ActiveWorkoutRead)
def start_rest_timer(payload: RestTimerStart | None = None, active: ActiveWorkout = Depends(running)):
    payload = payload or RestTimerStart()
    active.start_rest_timer(payload.seconds)
    return state_view(active)

@router.delete("/rest-timer", response_model=ActiveWorkoutRead)
def cancel_rest_timer(active: ActiveWorkout = Depends(running)):
    active.cancel_rest_timer()
    return state_view(active)
