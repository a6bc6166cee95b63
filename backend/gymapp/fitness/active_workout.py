"""
In-memory state of the workout a user is currently performing.

One ``ActiveWorkout`` is owned per user (see ``ActiveWorkoutRegistry``). All
mutations are synchronous and driven by discrete user actions. Timers are
never ticking state: ``elapsed_seconds`` and ``rest_timer_remaining`` are
recomputed from stored instants on every read.

Elapsed time excludes paused intervals::

    elapsed = floor((ref - started_at - total_paused) / 1s)

where ``ref`` is now while running and the pause instant while paused, so the
clock freezes exactly for the duration of a pause.

Operations with unmet preconditions (resume when not paused, index out of
range, ...) are no-ops; they return ``False``/``None`` instead of raising.
"""
from __future__ import annotations

import copy
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

from gymapp.fitness.exercises import ExerciseDefinition

log = logging.getLogger(__name__)

Clock = Callable[[], datetime]

SET_TYPES = ("warmup", "working", "dropset", "failure", "amrap")
SET_FIELDS = frozenset({"reps", "weight_kg", "rpe", "set_type", "is_pr", "notes"})
CARDIO_FIELDS = frozenset({
    "duration_sec", "distance_km", "avg_heart_rate", "max_heart_rate",
    "avg_pace_sec_per_km", "calories_burned", "elevation_gain_m", "notes",
})
SUMMARY_FIELDS = frozenset({"notes", "rating", "perceived_exertion", "calories_burned"})

_MS = timedelta(milliseconds=1)
_SECOND = timedelta(seconds=1)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class WorkoutSession:
    id: str
    name: str
    started_at: datetime
    status: str = "in_progress"
    template_id: Optional[str] = None
    completed_at: Optional[datetime] = None
    duration_sec: Optional[int] = None
    notes: Optional[str] = None
    rating: Optional[int] = None
    perceived_exertion: Optional[int] = None
    calories_burned: Optional[int] = None


@dataclass
class ActiveSet:
    set_number: int
    reps: Optional[int] = None
    weight_kg: Optional[float] = None
    rpe: Optional[float] = None
    set_type: str = "working"
    completed_at: Optional[datetime] = None  # None means not done yet
    is_pr: bool = False
    notes: Optional[str] = None

    @property
    def completed(self) -> bool:
        return self.completed_at is not None

    @property
    def volume(self) -> float:
        if self.completed_at is None or not self.reps or not self.weight_kg:
            return 0
        return self.reps * self.weight_kg


@dataclass
class ActiveExerciseLog:
    id: str
    exercise: ExerciseDefinition
    order_index: int
    sets: list[ActiveSet] = field(default_factory=list)
    cardio_log: Optional[dict[str, Any]] = None
    notes: str = ""


@dataclass(frozen=True)
class FinishedWorkout:
    """Snapshot handed off by ``ActiveWorkout.end``; detached from live state."""
    session: WorkoutSession
    exercise_logs: tuple[ActiveExerciseLog, ...]

    @property
    def total_volume(self) -> float:
        return sum(s.volume for log_ in self.exercise_logs for s in log_.sets)


def _apply(target: Any, fields: dict[str, Any], allowed: frozenset[str]) -> None:
    unknown = set(fields) - allowed
    if unknown:
        raise TypeError(f"unknown fields: {', '.join(sorted(unknown))}")
    if fields.get("set_type") is not None and fields["set_type"] not in SET_TYPES:
        raise ValueError(f"invalid set_type {fields['set_type']!r}")
    for key, value in fields.items():
        setattr(target, key, value)


class ActiveWorkout:
    def __init__(self, clock: Optional[Clock] = None):
        self._clock: Clock = clock or utcnow
        self._reset()

    def _reset(self) -> None:
        self.session: Optional[WorkoutSession] = None
        self.exercise_logs: list[ActiveExerciseLog] = []
        self.is_active = False
        self.is_paused = False
        self.started_at: Optional[datetime] = None
        self.paused_at: Optional[datetime] = None
        self.total_paused_ms = 0
        self.rest_timer_end_at: Optional[datetime] = None

    # ---- derived reads -------------------------------------------------

    @property
    def elapsed_seconds(self) -> int:
        if self.started_at is None:
            return 0
        ref = self.paused_at if self.is_paused and self.paused_at else self._clock()
        elapsed_ms = (ref - self.started_at) // _MS - self.total_paused_ms
        return elapsed_ms // 1000

    @property
    def rest_timer_remaining(self) -> int:
        if self.rest_timer_end_at is None:
            return 0
        return max(0, (self.rest_timer_end_at - self._clock()) // _SECOND)

    @property
    def current_exercise(self) -> Optional[ActiveExerciseLog]:
        return self.exercise_logs[-1] if self.exercise_logs else None

    @property
    def total_sets(self) -> int:
        return sum(1 for log_ in self.exercise_logs for s in log_.sets if s.completed)

    @property
    def total_volume(self) -> float:
        return sum(s.volume for log_ in self.exercise_logs for s in log_.sets)

    # ---- lifecycle -----------------------------------------------------

    def start(self, name: str, template_id: Optional[str] = None) -> WorkoutSession:
        """Begin a workout. An already-active workout is discarded."""
        if self.is_active:
            log.warning("replacing active workout %s with %r", self.session.id, name)
        now = self._clock()
        self._reset()
        self.session = WorkoutSession(
            id=str(uuid.uuid4()),
            name=name,
            started_at=now,
            template_id=template_id,
        )
        self.is_active = True
        self.started_at = now
        return self.session

    def pause(self) -> bool:
        if not self.is_active or self.is_paused:
            return False
        self.is_paused = True
        self.paused_at = self._clock()
        return True

    def resume(self) -> bool:
        if not self.is_paused or self.paused_at is None:
            return False
        self.total_paused_ms += (self._clock() - self.paused_at) // _MS
        self.is_paused = False
        self.paused_at = None
        return True

    def end(self, **summary: Any) -> Optional[FinishedWorkout]:
        if self.session is None or self.started_at is None:
            return None
        _apply(self.session, summary, SUMMARY_FIELDS)
        self.session.duration_sec = self.elapsed_seconds
        self.session.status = "completed"
        self.session.completed_at = self._clock()

        finished = FinishedWorkout(
            session=copy.deepcopy(self.session),
            exercise_logs=tuple(copy.deepcopy(self.exercise_logs)),
        )
        self._reset()
        return finished

    def cancel(self) -> None:
        self._reset()

    # ---- exercises -----------------------------------------------------

    def add_exercise(self, exercise: ExerciseDefinition) -> ActiveExerciseLog:
        entry = ActiveExerciseLog(
            id=str(uuid.uuid4()),
            exercise=exercise,
            order_index=len(self.exercise_logs),
            cardio_log={} if exercise.category == "cardio" else None,
        )
        self.exercise_logs.append(entry)
        return entry

    def remove_exercise(self, index: int) -> bool:
        if not 0 <= index < len(self.exercise_logs):
            return False
        del self.exercise_logs[index]
        for i, entry in enumerate(self.exercise_logs):
            entry.order_index = i
        return True

    def update_cardio_log(self, exercise_index: int, **fields: Any) -> bool:
        entry = self._log(exercise_index)
        if entry is None or entry.cardio_log is None:
            return False
        unknown = set(fields) - CARDIO_FIELDS
        if unknown:
            raise TypeError(f"unknown fields: {', '.join(sorted(unknown))}")
        entry.cardio_log.update(fields)
        return True

    # ---- sets ----------------------------------------------------------

    def add_set(self, exercise_index: int) -> Optional[ActiveSet]:
        """Append a set, carrying reps/weight forward from the previous one."""
        entry = self._log(exercise_index)
        if entry is None:
            return None
        last = entry.sets[-1] if entry.sets else None
        new_set = ActiveSet(
            set_number=len(entry.sets) + 1,
            reps=last.reps if last else None,
            weight_kg=last.weight_kg if last else None,
        )
        entry.sets.append(new_set)
        return new_set

    def update_set(self, exercise_index: int, set_index: int, **fields: Any) -> bool:
        target = self._set(exercise_index, set_index)
        if target is None:
            return False
        _apply(target, fields, SET_FIELDS)
        return True

    def complete_set(self, exercise_index: int, set_index: int, **fields: Any) -> bool:
        target = self._set(exercise_index, set_index)
        if target is None:
            return False
        _apply(target, fields, SET_FIELDS)
        target.completed_at = self._clock()
        return True

    def uncomplete_set(self, exercise_index: int, set_index: int) -> bool:
        target = self._set(exercise_index, set_index)
        if target is None:
            return False
        target.completed_at = None
        return True

    def remove_set(self, exercise_index: int, set_index: int) -> bool:
        entry = self._log(exercise_index)
        if entry is None or not 0 <= set_index < len(entry.sets):
            return False
        del entry.sets[set_index]
        for i, s in enumerate(entry.sets):
            s.set_number = i + 1
        return True

    # ---- rest timer ----------------------------------------------------

    def start_rest_timer(self, seconds: int) -> datetime:
        self.rest_timer_end_at = self._clock() + timedelta(seconds=seconds)
        return self.rest_timer_end_at

    def cancel_rest_timer(self) -> None:
        self.rest_timer_end_at = None

    # ---- helpers -------------------------------------------------------

    def _log(self, index: int) -> Optional[ActiveExerciseLog]:
        if 0 <= index < len(self.exercise_logs):
            return self.exercise_logs[index]
        return None

    def _set(self, exercise_index: int, set_index: int) -> Optional[ActiveSet]:
        entry = self._log(exercise_index)
        if entry is None or not 0 <= set_index < len(entry.sets):
            return None
        return entry.sets[set_index]


class ActiveWorkoutRegistry:
    """Holds the single active workout of each user."""

    def __init__(self, clock: Optional[Clock] = None):
        self._clock = clock
        self._workouts: dict[int, ActiveWorkout] = {}

    def get(self, user_id: int) -> ActiveWorkout:
        workout = self._workouts.get(user_id)
        if workout is None:
            workout = self._workouts[user_id] = ActiveWorkout(clock=self._clock)
        return workout

    def discard(self, user_id: int) -> None:
        self._workouts.pop(user_id, None)

    def __contains__(self, user_id: int) -> bool:
        return user_id in self._workouts

    def __len__(self) -> int:
        return len(self._workouts)
