from datetime import datetime, timezone

from gymapp.local_store import history_for
from gymapp.schemas.history import SavedWorkout


def test_new_user_gets_default_templates(client, auth):
    r = client.get("/templates", headers=auth)
    assert r.status_code == 200
    ids = [t["id"] for t in r.json()]
    assert ids == ["push-day", "pull-day", "leg-day", "full-body"]

def test_template_crud(client, auth):
    r = client.post("/templates", headers=auth, json={
        "name": "Arms", "exercises": [{"name": "Barbell Curl", "sets": 3, "default_reps": 10}],
    })
    assert r.status_code == 201
    created = r.json()
    assert created["id"].startswith("custom-")
    assert created["last_used"] is None

    r = client.patch(f"/templates/{created['id']}", headers=auth, json={"name": "Big Arms"})
    assert r.status_code == 200
    assert r.json()["name"] == "Big Arms"
    assert r.json()["exercises"][0]["name"] == "Barbell Curl"

    assert client.delete(f"/templates/{created['id']}", headers=auth).status_code == 204
    assert client.delete(f"/templates/{created['id']}", headers=auth).status_code == 404
    assert len(client.get("/templates", headers=auth).json()) == 4

def test_default_templates_can_be_deleted(client, auth):
    assert client.delete("/templates/leg-day", headers=auth).status_code == 204
    ids = [t["id"] for t in client.get("/templates", headers=auth).json()]
    assert "leg-day" not in ids

def test_template_validation(client, auth):
    r = client.post("/templates", headers=auth, json={"name": "  ", "exercises": []})
    assert r.status_code == 422
    r = client.post("/templates", headers=auth, json={"name": "X", "exercises": [{"name": "Curl", "sets": 0}]})
    assert r.status_code == 422

def test_template_names_are_trimmed(client, auth):
    r = client.post("/templates", headers=auth, json={
        "name": "  Arms  ", "exercises": [{"name": " Barbell Curl ", "sets": 3}],
    })
    assert r.status_code == 201
    assert r.json()["name"] == "Arms"
    assert r.json()["exercises"][0]["name"] == "Barbell Curl"

def test_unknown_template(client, auth):
    assert client.patch("/templates/nope", headers=auth, json={"name": "x"}).status_code == 404
    assert client.post("/templates/nope/use", headers=auth).status_code == 404

def test_use_template_starts_prefilled_workout(client, auth):
    client.post("/templates", headers=auth, json={
        "name": "Quick", "exercises": [
            {"name": "Bench Press", "sets": 3, "default_weight": 80, "default_reps": 8},
            {"name": "plank", "sets": 2},
        ],
    })
    template = client.get("/templates", headers=auth).json()[-1]

    r = client.post(f"/templates/{template['id']}/use", headers=auth)
    assert r.status_code == 201
    body = r.json()
    assert body["replaced"] is False
    assert body["session"]["name"] == "Quick"
    assert body["session"]["template_id"] == template["id"]

    bench, plank = body["exercise_logs"]
    assert bench["exercise"]["name"] == "Bench Press"
    assert [(s["reps"], s["weight_kg"]) for s in bench["sets"]] == [(8, 80), (8, 80), (8, 80)]
    assert plank["exercise"]["id"] == "plank"
    assert len(plank["sets"]) == 2

    used = next(t for t in client.get("/templates", headers=auth).json() if t["id"] == template["id"])
    assert used["last_used"] is not None


def test_history_empty_then_crud(client, make_user):
    headers, me = make_user()
    assert client.get("/history", headers=headers).json() == []
    history_for(me["id"]).add(SavedWorkout(
        id="w1", name="Morning", date=datetime(2024, 5, 1, 7, tzinfo=timezone.utc), duration=1800, volume=1000,
    ))

    r = client.get("/history/w1", headers=headers)
    assert r.status_code == 200
    assert r.json()["name"] == "Morning"

    r = client.patch("/history/w1/rating", headers=headers, json={"rating": 5})
    assert r.status_code == 200
    assert r.json()["rating"] == 5
    assert client.get("/history/w1", headers=headers).json()["rating"] == 5

    assert client.patch("/history/w1/rating", headers=headers, json={"rating": 6}).status_code == 422
    assert client.patch("/history/w1/rating", headers=headers, json={"rating": 0}).status_code == 422

    assert client.delete("/history/w1", headers=headers).status_code == 204
    assert client.get("/history/w1", headers=headers).status_code == 404
    assert client.delete("/history/w1", headers=headers).status_code == 404

def test_history_newest_first(client, make_user):
    headers, me = make_user()
    store = history_for(me["id"])
    for i in range(3):
        store.add(SavedWorkout(id=f"w{i}", name=f"W{i}", date=datetime(2024, 5, i + 1, tzinfo=timezone.utc)))
    assert [w["id"] for w in client.get("/history", headers=headers).json()] == ["w2", "w1", "w0"]

def test_history_is_private(client, make_user):
    owner, me = make_user()
    other, _ = make_user()
    history_for(me["id"]).add(SavedWorkout(id="mine", name="Mine", date=datetime(2024, 5, 1, tzinfo=timezone.utc)))
    assert client.get("/history/mine", headers=other).status_code == 404
