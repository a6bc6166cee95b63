"""
Personal records and streaks derived from workout history.

Nothing here is stored; every figure is recomputed from the full history on
request. History items are ``SavedWorkout``-shaped: ``id``, ``name``,
``date`` (aware datetime), ``duration``, ``volume`` and ``exercises`` each
with a ``name`` and ``sets`` of ``weight``/``reps``/``completed``.

Calendar arithmetic uses the local calendar day of each workout, not rolling
24h windows: two workouts thirty hours apart that straddle one midnight are
on consecutive days.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Sequence

from gymapp.fitness.strength import calculate_1rm

_ONE_DAY = timedelta(days=1)


@dataclass(frozen=True, slots=True)
class PersonalRecord:
    exercise_name: str
    weight: float
    reps: int
    date: datetime
    workout_id: Optional[str] = None

    @property
    def score(self) -> float:
        return self.weight * self.reps

    @property
    def estimated_1rm(self) -> float:
        return calculate_1rm(self.weight, self.reps)


@dataclass(frozen=True, slots=True)
class WorkoutStats:
    total_workouts: int
    total_volume: float
    total_duration: int
    current_streak: int
    longest_streak: int
    workouts_this_week: int
    workouts_this_month: int


def local_day(value: datetime) -> date:
    return value.astimezone().date()


def qualifies(weight: Optional[float], reps: Optional[int], completed: bool) -> bool:
    """Only completed sets with positive weight and reps count toward PRs."""
    return bool(completed) and bool(weight) and bool(reps) and weight > 0 and reps > 0


def beats(weight: float, reps: int, best: Optional[PersonalRecord]) -> bool:
    """Higher weight*reps wins; at equal score the heavier set wins."""
    if best is None:
        return True
    score = weight * reps
    return score > best.score or (score == best.score and weight > best.weight)


def calculate_all_prs(history: Iterable) -> dict[str, PersonalRecord]:
    """
    Best set per exercise name over the whole history.

    Workouts are scanned oldest to newest so the record carries the date it
    was first achieved. Result order follows first appearance; sort
    explicitly when a stable order matters.
    """
    records: dict[str, PersonalRecord] = {}
    for workout in sorted(history, key=lambda w: w.date):
        for exercise in workout.exercises:
            for s in exercise.sets:
                if not qualifies(s.weight, s.reps, s.completed):
                    continue
                if beats(s.weight, s.reps, records.get(exercise.name)):
                    records[exercise.name] = PersonalRecord(
                        exercise_name=exercise.name,
                        weight=s.weight,
                        reps=s.reps,
                        date=workout.date,
                        workout_id=workout.id,
                    )
    return records


def get_prs_this_month(history: Iterable, now: Optional[datetime] = None) -> list[PersonalRecord]:
    now = (now or datetime.now()).astimezone()
    month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    return [pr for pr in calculate_all_prs(history).values() if pr.date >= month_start]


def get_exercise_pr(history: Iterable, exercise_name: str) -> Optional[PersonalRecord]:
    return calculate_all_prs(history).get(exercise_name)


def _workout_days(history: Iterable) -> list[date]:
    return sorted({local_day(w.date) for w in history})


def calculate_day_streak(history: Iterable, today: Optional[date] = None) -> int:
    """
    Consecutive workout days ending at the most recent workout.

    A streak is only live if the latest workout was today or yesterday;
    otherwise it has already broken and the result is 0.
    """
    days = _workout_days(history)
    if not days:
        return 0
    today = today or date.today()
    cursor = days[-1]
    if cursor not in (today, today - _ONE_DAY):
        return 0

    streak = 1
    for day in reversed(days[:-1]):
        if day != cursor - _ONE_DAY:
            break
        streak += 1
        cursor = day
    return streak


def calculate_longest_streak(history: Iterable) -> int:
    days = _workout_days(history)
    if not days:
        return 0
    best = current = 1
    for prev, nxt in zip(days, days[1:]):
        current = current + 1 if nxt - prev == _ONE_DAY else 1
        best = max(best, current)
    return best


def calculate_workout_stats(history: Sequence, now: Optional[datetime] = None) -> WorkoutStats:
    now = (now or datetime.now()).astimezone()
    today = now.date()
    week_start = today - timedelta(days=today.weekday())
    month_start = today.replace(day=1)
    days = [local_day(w.date) for w in history]
    return WorkoutStats(
        total_workouts=len(history),
        total_volume=sum(w.volume or 0 for w in history),
        total_duration=sum(w.duration or 0 for w in history),
        current_streak=calculate_day_streak(history, today=today),
        longest_streak=calculate_longest_streak(history),
        workouts_this_week=sum(1 for d in days if week_start <= d <= today),
        workouts_this_month=sum(1 for d in days if month_start <= d <= today),
    )


def flag_new_prs(exercise_logs: Iterable, prior: dict[str, PersonalRecord], when: datetime) -> int:
    """
    Mark ``is_pr`` on completed sets of a just-finished workout that beat the
    best known set for their exercise. Returns the number of sets flagged.
    """
    best = dict(prior)
    flagged = 0
    for entry in exercise_logs:
        name = entry.exercise.name
        for s in entry.sets:
            if not qualifies(s.weight_kg, s.reps, s.completed):
                continue
            if beats(s.weight_kg, s.reps, best.get(name)):
                s.is_pr = True
                flagged += 1
                best[name] = PersonalRecord(exercise_name=name, weight=s.weight_kg, reps=s.reps, date=when)
    return flagged
