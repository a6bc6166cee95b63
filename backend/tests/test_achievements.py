from datetime import date, datetime

import pytest
from pydantic import ValidationError

from gymapp.fitness.achievements import (
    DayStreakCriteria, PersonalRecordsCriteria, TotalVolumeCriteria, WorkoutCountCriteria,
    parse_criteria, progress_percent,
)
from gymapp.local_store import history_for
from gymapp.schemas.history import SavedExercise, SavedSet, SavedWorkout


def saved(id, day, volume=0, exercise="Bench Press", weight=100):
    return SavedWorkout(
        id=id, name="W", date=datetime(2024, 3, day, 12).astimezone(), volume=volume,
        exercises=[SavedExercise(name=exercise, sets=[SavedSet(weight=weight, reps=5, completed=True)])],
    )

HISTORY = [saved("a", 1, 400), saved("b", 2, 600, exercise="Squat"), saved("c", 3, 500, exercise="Row")]


def test_parse_tagged_criteria():
    assert isinstance(parse_criteria({"kind": "workout_count", "count": 10}), WorkoutCountCriteria)
    assert isinstance(parse_criteria({"kind": "day_streak", "days": 7}), DayStreakCriteria)
    assert isinstance(parse_criteria({"kind": "total_volume", "kg": 1000}), TotalVolumeCriteria)
    assert isinstance(parse_criteria({"kind": "personal_records", "count": 5}), PersonalRecordsCriteria)

def test_unknown_or_invalid_criteria_rejected():
    with pytest.raises(ValidationError):
        parse_criteria({"kind": "steps", "count": 10000})
    with pytest.raises(ValidationError):
        parse_criteria({"kind": "workout_count", "count": 0})

def test_progress_percent():
    assert progress_percent(WorkoutCountCriteria(count=6), HISTORY) == 50
    assert progress_percent(WorkoutCountCriteria(count=2), HISTORY) == 100  # capped
    assert progress_percent(TotalVolumeCriteria(kg=3000), HISTORY) == 50
    assert progress_percent(PersonalRecordsCriteria(count=3), HISTORY) == 100
    assert progress_percent(WorkoutCountCriteria(count=1), []) == 0

def test_day_streak_counts_a_past_streak():
    # the streak broke long ago but did reach three days
    assert progress_percent(DayStreakCriteria(days=3), HISTORY, today=date(2024, 6, 1)) == 100


def test_catalogue_starts_locked(client, auth):
    r = client.get("/achievements", headers=auth)
    assert r.status_code == 200
    body = r.json()
    assert body["total_points"] == 0
    assert len(body["achievements"]) >= 9
    assert not any(a["unlocked"] for a in body["achievements"])

def test_evaluate_unlocks_from_history(client, make_user):
    headers, me = make_user()
    history_for(me["id"]).add(saved("first", 1, volume=1200))

    r = client.post("/achievements/evaluate", headers=headers)
    assert r.status_code == 200
    unlocked = {a["name"] for a in r.json()["newly_unlocked"]}
    assert {"First Workout", "Ton Lifter"} <= unlocked
    assert r.json()["total_points"] >= 25

    # second pass unlocks nothing new and keeps the points
    again = client.post("/achievements/evaluate", headers=headers).json()
    assert again["newly_unlocked"] == []
    listing = client.get("/achievements", headers=headers).json()
    first = next(a for a in listing["achievements"] if a["name"] == "First Workout")
    assert first["unlocked"] and first["progress"] == 100 and first["unlocked_at"]
    dedicated = next(a for a in listing["achievements"] if a["name"] == "Getting Started")
    assert not dedicated["unlocked"] and dedicated["progress"] == 10
