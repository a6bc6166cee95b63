"""
Durable per-user JSON collections: workout history and saved templates.

Each collection lives in ``<LOCAL_STORE_DIR>/<user_id>/<key>.json`` under a
fixed key, is read on first access and rewritten on every mutation. A
corrupt file never blocks the caller: history falls back to empty and
templates fall back to the defaults.
"""
from __future__ import annotations

import json
import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from gymapp.schemas.history import SavedWorkout, TemplateExercise, WorkoutTemplate
from gymapp.settings import get_settings

log = logging.getLogger(__name__)

HISTORY_KEY = "gym-app-workout-history"
TEMPLATES_KEY = "gym-app-workout-templates"

M = TypeVar("M", bound=BaseModel)


def _tpl(id: str, name: str, exercises: list[tuple[str, int, int]]) -> WorkoutTemplate:
    return WorkoutTemplate(
        id=id,
        name=name,
        exercises=[TemplateExercise(name=n, sets=s, default_reps=r) for n, s, r in exercises],
        created_at="2024-01-01",
    )


DEFAULT_TEMPLATES: tuple[WorkoutTemplate, ...] = (
    _tpl("push-day", "Push Day", [
        ("Bench Press", 4, 8), ("Incline Dumbbell Press", 3, 10), ("Shoulder Press", 3, 10),
        ("Lateral Raise", 3, 12), ("Tricep Pushdown", 3, 12), ("Overhead Tricep Extension", 3, 12),
    ]),
    _tpl("pull-day", "Pull Day", [
        ("Deadlift", 4, 6), ("Barbell Row", 4, 8), ("Lat Pulldown", 3, 10),
        ("Seated Cable Row", 3, 10), ("Barbell Curl", 3, 10),
    ]),
    _tpl("leg-day", "Leg Day", [
        ("Squat", 4, 8), ("Romanian Deadlift", 3, 10), ("Leg Press", 3, 12), ("Leg Curl", 3, 12),
        ("Leg Extension", 3, 12), ("Standing Calf Raise", 4, 15), ("Seated Calf Raise", 3, 15),
    ]),
    _tpl("full-body", "Full Body", [
        ("Squat", 3, 8), ("Bench Press", 3, 8), ("Barbell Row", 3, 8), ("Shoulder Press", 3, 10),
        ("Romanian Deadlift", 3, 10), ("Lat Pulldown", 3, 10), ("Barbell Curl", 2, 12),
        ("Tricep Pushdown", 2, 12), ("Standing Calf Raise", 3, 15), ("Plank", 3, 60),
    ]),
)


def user_dir(user_id: int, root: Optional[str] = None) -> Path:
    return Path(root or get_settings().LOCAL_STORE_DIR) / str(user_id)


class JsonCollection(Generic[M]):
    key: str
    model: type[M]

    def __init__(self, directory: Path):
        self.path = directory / f"{self.key}.json"
        self._adapter = TypeAdapter(list[self.model])
        self._items: Optional[list[M]] = None

    def defaults(self) -> list[M]:
        return []

    def on_missing(self) -> list[M]:
        return self.defaults()

    def on_corrupt(self) -> list[M]:
        return self.defaults()

    def load(self) -> list[M]:
        try:
            self._items = self._adapter.validate_python(json.loads(self.path.read_text(encoding="utf-8")))
        except FileNotFoundError:
            self._items = self.on_missing()
        except (UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
            log.warning("corrupt %s at %s, resetting: %s", self.key, self.path, e)
            self._items = self.on_corrupt()
        return self._items

    @property
    def items(self) -> list[M]:
        if self._items is None:
            self.load()
        return self._items

    def all(self) -> list[M]:
        return list(self.items)

    def get(self, item_id: str) -> Optional[M]:
        return next((i for i in self.items if i.id == item_id), None)

    def delete(self, item_id: str) -> bool:
        before = len(self.items)
        self._items = [i for i in self.items if i.id != item_id]
        self.save()
        return len(self._items) != before

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = self._adapter.dump_python(self.items, mode="json")
        self.path.write_text(json.dumps(payload), encoding="utf-8")


class HistoryStore(JsonCollection[SavedWorkout]):
    key = HISTORY_KEY
    model = SavedWorkout

    def add(self, workout: SavedWorkout) -> SavedWorkout:
        self.items.insert(0, workout)  # newest first
        self.save()
        return workout

    def update_rating(self, workout_id: str, rating: int) -> Optional[SavedWorkout]:
        workout = self.get(workout_id)
        if workout is None:
            return None
        workout.rating = rating
        self.save()
        return workout


class TemplateStore(JsonCollection[WorkoutTemplate]):
    key = TEMPLATES_KEY
    model = WorkoutTemplate

    def defaults(self) -> list[WorkoutTemplate]:
        return [t.model_copy(deep=True) for t in DEFAULT_TEMPLATES]

    def on_missing(self) -> list[WorkoutTemplate]:
        self._items = self.defaults()
        self.save()
        return self._items

    on_corrupt = on_missing

    def add(self, name: str, exercises: list[TemplateExercise]) -> WorkoutTemplate:
        stamp = int(time.time() * 1000)
        while self.get(f"custom-{stamp}") is not None:
            stamp += 1
        template = WorkoutTemplate(
            id=f"custom-{stamp}",
            name=name,
            exercises=exercises,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        self.items.append(template)
        self.save()
        return template

    def update(self, template_id: str, **updates) -> Optional[WorkoutTemplate]:
        for i, template in enumerate(self.items):
            if template.id == template_id:
                self.items[i] = template.model_copy(update=updates)
                self.save()
                return self.items[i]
        return None

    def mark_used(self, template_id: str) -> Optional[WorkoutTemplate]:
        return self.update(template_id, last_used=datetime.now(timezone.utc).isoformat())


def history_for(user_id: int) -> HistoryStore:
    return HistoryStore(user_dir(user_id))


def templates_for(user_id: int) -> TemplateStore:
    return TemplateStore(user_dir(user_id))
