"""
Built-in exercise library used by the active workout and the AI planner.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Literal

ExerciseCategory = Literal["strength", "cardio", "flexibility", "warmup"]
Difficulty = Literal["beginner", "intermediate", "advanced"]

MUSCLE_GROUPS = (
    "chest", "back", "shoulders", "biceps", "triceps", "forearms", "abs",
    "obliques", "quads", "hamstrings", "glutes", "calves", "traps", "lats",
    "lower_back",
)

EQUIPMENT = (
    "barbell", "dumbbell", "kettlebell", "cable", "machine", "bodyweight",
    "resistance_band", "bench", "pull_up_bar", "treadmill", "bike", "rower",
)


@dataclass(frozen=True, slots=True)
class ExerciseDefinition:
    id: str
    name: str
    category: str
    muscle_groups: tuple[str, ...] = field(default_factory=tuple)
    equipment: tuple[str, ...] = field(default_factory=tuple)
    is_compound: bool = False
    difficulty: str = "beginner"


def _ex(id, name, muscles, equipment, compound, difficulty, category="strength"):
    return ExerciseDefinition(
        id=id,
        name=name,
        category=category,
        muscle_groups=tuple(muscles),
        equipment=tuple(equipment),
        is_compound=compound,
        difficulty=difficulty,
    )


EXERCISE_LIBRARY: tuple[ExerciseDefinition, ...] = (
    # chest
    _ex("bench-press", "Barbell Bench Press", ["chest", "triceps", "shoulders"], ["barbell", "bench"], True, "intermediate"),
    _ex("incline-bench-press", "Incline Barbell Bench Press", ["chest", "triceps", "shoulders"], ["barbell", "bench"], True, "intermediate"),
    _ex("dumbbell-bench-press", "Dumbbell Bench Press", ["chest", "triceps", "shoulders"], ["dumbbell", "bench"], True, "beginner"),
    _ex("incline-dumbbell-press", "Incline Dumbbell Press", ["chest", "triceps", "shoulders"], ["dumbbell", "bench"], True, "beginner"),
    _ex("dumbbell-fly", "Dumbbell Fly", ["chest"], ["dumbbell", "bench"], False, "beginner"),
    _ex("cable-crossover", "Cable Crossover", ["chest"], ["cable"], False, "beginner"),
    _ex("push-ups", "Push-Ups", ["chest", "triceps", "shoulders"], ["bodyweight"], True, "beginner"),
    _ex("dips", "Dips", ["chest", "triceps", "shoulders"], ["bodyweight"], True, "intermediate"),
    _ex("chest-press-machine", "Chest Press Machine", ["chest", "triceps"], ["machine"], True, "beginner"),
    # back
    _ex("deadlift", "Conventional Deadlift", ["back", "hamstrings", "glutes", "lower_back"], ["barbell"], True, "intermediate"),
    _ex("barbell-row", "Barbell Row", ["back", "lats", "biceps"], ["barbell"], True, "intermediate"),
    _ex("dumbbell-row", "Dumbbell Row", ["back", "lats", "biceps"], ["dumbbell", "bench"], True, "beginner"),
    _ex("pull-ups", "Pull-Ups", ["lats", "back", "biceps"], ["bodyweight", "pull_up_bar"], True, "intermediate"),
    _ex("chin-ups", "Chin-Ups", ["lats", "back", "biceps"], ["bodyweight", "pull_up_bar"], True, "intermediate"),
    _ex("lat-pulldown", "Lat Pulldown", ["lats", "back", "biceps"], ["cable", "machine"], True, "beginner"),
    _ex("seated-cable-row", "Seated Cable Row", ["back", "lats", "biceps"], ["cable"], True, "beginner"),
    _ex("face-pulls", "Face Pulls", ["back", "shoulders", "traps"], ["cable"], False, "beginner"),
    # shoulders
    _ex("overhead-press", "Barbell Overhead Press", ["shoulders", "triceps"], ["barbell"], True, "intermediate"),
    _ex("dumbbell-shoulder-press", "Dumbbell Shoulder Press", ["shoulders", "triceps"], ["dumbbell"], True, "beginner"),
    _ex("arnold-press", "Arnold Press", ["shoulders", "triceps"], ["dumbbell"], True, "intermediate"),
    _ex("lateral-raises", "Lateral Raises", ["shoulders"], ["dumbbell"], False, "beginner"),
    _ex("rear-delt-fly", "Rear Delt Fly", ["shoulders", "back"], ["dumbbell"], False, "beginner"),
    _ex("upright-rows", "Upright Rows", ["shoulders", "traps"], ["barbell", "dumbbell"], True, "intermediate"),
    # arms
    _ex("barbell-curl", "Barbell Curl", ["biceps"], ["barbell"], False, "beginner"),
    _ex("dumbbell-curl", "Dumbbell Curl", ["biceps"], ["dumbbell"], False, "beginner"),
    _ex("hammer-curl", "Hammer Curl", ["biceps", "forearms"], ["dumbbell"], False, "beginner"),
    _ex("cable-curl", "Cable Curl", ["biceps"], ["cable"], False, "beginner"),
    _ex("close-grip-bench", "Close-Grip Bench Press", ["triceps", "chest"], ["barbell", "bench"], True, "intermediate"),
    _ex("skull-crushers", "Skull Crushers", ["triceps"], ["barbell", "bench"], False, "intermediate"),
    _ex("tricep-pushdown", "Tricep Pushdown", ["triceps"], ["cable"], False, "beginner"),
    _ex("overhead-tricep-extension", "Overhead Tricep Extension", ["triceps"], ["dumbbell", "cable"], False, "beginner"),
    _ex("tricep-dips", "Tricep Dips", ["triceps", "chest"], ["bodyweight"], True, "beginner"),
    # legs
    _ex("barbell-squat", "Barbell Back Squat", ["quads", "glutes", "hamstrings"], ["barbell"], True, "intermediate"),
    _ex("front-squat", "Front Squat", ["quads", "glutes"], ["barbell"], True, "advanced"),
    _ex("goblet-squat", "Goblet Squat", ["quads", "glutes"], ["dumbbell", "kettlebell"], True, "beginner"),
    _ex("leg-press", "Leg Press", ["quads", "glutes", "hamstrings"], ["machine"], True, "beginner"),
    _ex("leg-extension", "Leg Extension", ["quads"], ["machine"], False, "beginner"),
    _ex("lunges", "Lunges", ["quads", "glutes", "hamstrings"], ["bodyweight", "dumbbell"], True, "beginner"),
    _ex("bulgarian-split-squat", "Bulgarian Split Squat", ["quads", "glutes"], ["bodyweight", "dumbbell", "bench"], True, "intermediate"),
    _ex("romanian-deadlift", "Romanian Deadlift", ["hamstrings", "glutes", "lower_back"], ["barbell", "dumbbell"], True, "intermediate"),
    _ex("leg-curl", "Leg Curl", ["hamstrings"], ["machine"], False, "beginner"),
    _ex("hip-thrust", "Hip Thrust", ["glutes", "hamstrings"], ["barbell", "bench"], True, "intermediate"),
    _ex("glute-bridge", "Glute Bridge", ["glutes", "hamstrings"], ["bodyweight"], True, "beginner"),
    _ex("standing-calf-raise", "Standing Calf Raise", ["calves"], ["machine", "bodyweight"], False, "beginner"),
    _ex("seated-calf-raise", "Seated Calf Raise", ["calves"], ["machine"], False, "beginner"),
    # core
    _ex("plank", "Plank", ["abs", "obliques"], ["bodyweight"], True, "beginner"),
    _ex("crunches", "Crunches", ["abs"], ["bodyweight"], False, "beginner"),
    _ex("leg-raises", "Hanging Leg Raises", ["abs", "obliques"], ["bodyweight", "pull_up_bar"], False, "intermediate"),
    _ex("russian-twists", "Russian Twists", ["obliques", "abs"], ["bodyweight", "dumbbell"], False, "beginner"),
    _ex("dead-bug", "Dead Bug", ["abs"], ["bodyweight"], False, "beginner"),
    # cardio
    _ex("treadmill-run", "Treadmill Run", ["quads", "hamstrings", "calves"], ["treadmill"], True, "beginner", "cardio"),
    _ex("stationary-bike", "Stationary Bike", ["quads", "hamstrings"], ["bike"], True, "beginner", "cardio"),
    _ex("rowing-machine", "Rowing Machine", ["back", "lats", "quads"], ["rower"], True, "beginner", "cardio"),
    # warmup
    _ex("arm-circles", "Arm Circles", ["shoulders"], ["bodyweight"], False, "beginner", "warmup"),
    _ex("band-pull-aparts", "Band Pull-Aparts", ["back", "shoulders"], ["resistance_band"], False, "beginner", "warmup"),
    _ex("leg-swings", "Leg Swings", ["hamstrings", "quads"], ["bodyweight"], False, "beginner", "warmup"),
    _ex("hip-circles", "Hip Circles", ["glutes", "hamstrings"], ["bodyweight"], False, "beginner", "warmup"),
    _ex("cat-cow", "Cat-Cow Stretch", ["back", "abs"], ["bodyweight"], False, "beginner", "warmup"),
    _ex("jumping-jacks", "Jumping Jacks", ["quads", "shoulders"], ["bodyweight"], True, "beginner", "warmup"),
    _ex("high-knees", "High Knees", ["quads", "abs"], ["bodyweight"], True, "beginner", "warmup"),
)

EXERCISES_BY_ID: dict[str, ExerciseDefinition] = {e.id: e for e in EXERCISE_LIBRARY}

WORKOUT_TYPE_MUSCLES: dict[str, tuple[str, ...]] = {
    "push": ("chest", "shoulders", "triceps"),
    "pull": ("back", "lats", "biceps", "traps"),
    "legs": ("quads", "hamstrings", "glutes", "calves"),
    "upper": ("chest", "back", "shoulders", "biceps", "triceps", "lats", "traps"),
    "lower": ("quads", "hamstrings", "glutes", "calves"),
    "full_body": ("chest", "back", "shoulders", "biceps", "triceps", "quads", "hamstrings", "glutes"),
}


def find_exercise(id_or_name: str) -> ExerciseDefinition | None:
    if id_or_name in EXERCISES_BY_ID:
        return EXERCISES_BY_ID[id_or_name]
    wanted = id_or_name.strip().lower()
    return next((e for e in EXERCISE_LIBRARY if e.name.lower() == wanted), None)


def get_exercises_for_equipment(available: Iterable[str]) -> list[ExerciseDefinition]:
    """Exercises whose every piece of equipment is available."""
    have = set(available)
    return [e for e in EXERCISE_LIBRARY if all(eq in have for eq in e.equipment)]


def get_exercises_for_muscle_groups(targets: Iterable[str]) -> list[ExerciseDefinition]:
    wanted = set(targets)
    return [e for e in EXERCISE_LIBRARY if wanted.intersection(e.muscle_groups)]


def get_exercises_by_category(category: str) -> list[ExerciseDefinition]:
    return [e for e in EXERCISE_LIBRARY if e.category == category]


def slugify(name: str) -> str:
    return "-".join("".join(c if c.isalnum() else " " for c in name.lower()).split())


def resolve_exercise(id_or_name: str, category: str = "strength") -> ExerciseDefinition:
    """Library entry when one matches, else a bare definition named after the input."""
    found = find_exercise(id_or_name)
    if found is not None:
        return found
    return ExerciseDefinition(id=slugify(id_or_name), name=id_or_name.strip(), category=category)
