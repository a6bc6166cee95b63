import json
import logging
from datetime import datetime, timezone

from gymapp.local_store import HISTORY_KEY, TEMPLATES_KEY, HistoryStore, TemplateStore
from gymapp.schemas.history import SavedWorkout, TemplateExercise


def saved(id, day):
    return SavedWorkout(id=id, name=id, date=datetime(2024, 3, day, tzinfo=timezone.utc))


def test_history_starts_empty_and_adds_newest_first(tmp_path):
    store = HistoryStore(tmp_path)
    assert store.all() == []
    store.add(saved("one", 1))
    store.add(saved("two", 2))
    assert [w.id for w in store.all()] == ["two", "one"]
    # a fresh instance reads the same file
    assert [w.id for w in HistoryStore(tmp_path).all()] == ["two", "one"]
    assert (tmp_path / f"{HISTORY_KEY}.json").exists()

def test_history_rating_and_delete(tmp_path):
    store = HistoryStore(tmp_path)
    store.add(saved("one", 1))
    assert store.update_rating("one", 5).rating == 5
    assert HistoryStore(tmp_path).get("one").rating == 5
    assert store.update_rating("nope", 3) is None
    assert store.delete("one")
    assert not store.delete("one")
    assert HistoryStore(tmp_path).all() == []

def test_corrupt_history_resets_to_empty(tmp_path, caplog):
    path = tmp_path / f"{HISTORY_KEY}.json"
    path.write_text("{not json")
    with caplog.at_level(logging.WARNING, logger="gymapp.local_store"):
        assert HistoryStore(tmp_path).all() == []
    assert "corrupt" in caplog.text
    # left alone until the next write
    assert path.read_text() == "{not json"

def test_wrong_shape_counts_as_corrupt(tmp_path):
    (tmp_path / f"{HISTORY_KEY}.json").write_text(json.dumps({"workouts": []}))
    assert HistoryStore(tmp_path).all() == []

def test_undecodable_history_resets_to_empty(tmp_path, caplog):
    (tmp_path / f"{HISTORY_KEY}.json").write_bytes(b"\xff\xfe[garbage")
    with caplog.at_level(logging.WARNING, logger="gymapp.local_store"):
        assert HistoryStore(tmp_path).all() == []
    assert "corrupt" in caplog.text

def test_undecodable_templates_fall_back_to_defaults(tmp_path):
    path = tmp_path / f"{TEMPLATES_KEY}.json"
    path.write_bytes(b"\xff\xfe")
    assert len(TemplateStore(tmp_path).all()) == 4
    assert len(json.loads(path.read_text(encoding="utf-8"))) == 4

def test_templates_seed_defaults(tmp_path):
    store = TemplateStore(tmp_path)
    assert [t.name for t in store.all()] == ["Push Day", "Pull Day", "Leg Day", "Full Body"]
    assert (tmp_path / f"{TEMPLATES_KEY}.json").exists()

def test_corrupt_templates_fall_back_to_defaults(tmp_path):
    path = tmp_path / f"{TEMPLATES_KEY}.json"
    path.write_text("[[[")
    assert len(TemplateStore(tmp_path).all()) == 4
    assert len(json.loads(path.read_text())) == 4

def test_template_crud(tmp_path):
    store = TemplateStore(tmp_path)
    a = store.add("Arms", [TemplateExercise(name="Barbell Curl", sets=3, default_reps=10)])
    b = store.add("Arms 2", [])
    assert a.id.startswith("custom-") and a.id != b.id
    assert store.update(a.id, name="Arms & Abs").name == "Arms & Abs"
    assert store.update("missing", name="x") is None
    assert store.mark_used(a.id).last_used is not None

    reloaded = TemplateStore(tmp_path)
    assert reloaded.get(a.id).name == "Arms & Abs"
    assert reloaded.get(a.id).exercises[0].default_reps == 10
    assert reloaded.delete(b.id)
    assert len(TemplateStore(tmp_path).all()) == 5
