from datetime import datetime, timedelta, timezone

from gymapp.local_store import history_for
from gymapp.schemas.history import SavedExercise, SavedSet, SavedWorkout


def seed_history(user_id, *workouts):
    store = history_for(user_id)
    for w in workouts:
        store.add(w)
    return store

def workout(id, when, exercise, weight, reps, duration=2700):
    return SavedWorkout(
        id=id, name=id, date=when, duration=duration, volume=weight * reps,
        exercises=[SavedExercise(name=exercise, sets=[SavedSet(weight=weight, reps=reps, completed=True)])],
    )


def test_one_rep_max(client):
    r = client.get("/tools/one-rep-max", params={"weight": 100, "reps": 5})
    assert r.status_code == 200
    body = r.json()
    assert body["one_rep_max"] == 117
    assert body["percentages"][0] == {"percent": 100, "description": "1RM (max single)", "weight": 117}
    assert [row["percent"] for row in body["percentages"]][-1] == 60

def test_one_rep_max_single_rep_is_the_weight(client):
    assert client.get("/tools/one-rep-max", params={"weight": 140, "reps": 1}).json()["one_rep_max"] == 140

def test_one_rep_max_validation(client):
    assert client.get("/tools/one-rep-max", params={"weight": 0, "reps": 5}).status_code == 422
    assert client.get("/tools/one-rep-max", params={"weight": 100, "reps": 0}).status_code == 422

def test_plates_metric(client):
    r = client.get("/tools/plates", params={"target": 100})
    assert r.status_code == 200
    body = r.json()
    assert [(p["weight"], p["count"], p["color"]) for p in body["per_side"]] == [(25, 1, "red"), (15, 1, "yellow")]
    assert body["actual"] == 100

def test_plates_unreachable_remainder(client):
    body = client.get("/tools/plates", params={"target": 61}).json()
    assert [(p["weight"], p["count"]) for p in body["per_side"]] == [(20, 1)]
    assert body["actual"] == 60

def test_plates_bar_only_and_too_light(client):
    assert client.get("/tools/plates", params={"target": 20}).json()["per_side"] == []
    r = client.get("/tools/plates", params={"target": 15})
    assert r.status_code == 400

def test_plates_imperial(client):
    body = client.get("/tools/plates", params={"target": 102.06, "bar": 20.41, "plate_set": "imperial"}).json()
    assert [(p["weight"], p["count"]) for p in body["per_side"]] == [(20.41, 2)]


def test_summary_of_empty_history(client, auth):
    r = client.get("/stats/summary", headers=auth)
    assert r.status_code == 200
    body = r.json()
    assert body["total_workouts"] == 0
    assert body["total_volume_display"] == "0 kg"
    assert body["total_duration_display"] == "0s"

def test_summary_and_records(client, make_user):
    headers, me = make_user()
    now = datetime.now(timezone.utc)
    seed_history(
        me["id"],
        workout("a", now - timedelta(days=1), "Bench Press", 100, 5),
        workout("b", now, "Bench Press", 90, 8),
        workout("c", now, "Squat", 140, 3),
    )
    body = client.get("/stats/summary", headers=headers).json()
    assert body["total_workouts"] == 3
    assert body["total_volume"] == 500 + 720 + 420
    assert body["total_volume_display"] == "1.6k kg"
    assert body["total_duration_display"] == "2h 15min"
    assert body["current_streak"] >= 1

    prs = client.get("/stats/prs", headers=headers).json()
    assert [(p["exercise_name"], p["weight"], p["reps"]) for p in prs] == [("Bench Press", 90, 8), ("Squat", 140, 3)]
    assert prs[0]["workout_id"] == "b"
    assert prs[0]["score"] == 720

    r = client.get("/stats/prs/Squat", headers=headers)
    assert r.status_code == 200
    assert r.json()["estimated_1rm"] == 154

    r = client.get("/stats/prs/Curl", headers=headers)
    assert r.status_code == 404
    assert r.json()["detail"] == "No record for this exercise"

def test_summary_in_imperial(client, make_user):
    headers, me = make_user()
    client.patch("/profile", headers=headers, json={"unit_system": "imperial"})
    seed_history(me["id"], workout("a", datetime.now(timezone.utc), "Deadlift", 100, 1))
    assert client.get("/stats/summary", headers=headers).json()["total_volume_display"] == "220.5 lbs"

def test_streak(client, make_user):
    headers, me = make_user()
    now = datetime.now(timezone.utc)
    seed_history(
        me["id"],
        workout("old1", now - timedelta(days=40), "Row", 60, 10),
        workout("old2", now - timedelta(days=39), "Row", 60, 10),
        workout("old3", now - timedelta(days=38), "Row", 60, 10),
    )
    assert client.get("/stats/streak", headers=headers).json() == {"current_streak": 0, "longest_streak": 3}
