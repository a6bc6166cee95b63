"""
Workout insights and workout generation with Anthropic's Messages API.

Prompts are built from locally computed summaries; the model is asked to
answer with JSON only, and the first balanced JSON value in its reply is
parsed. Anything unparseable raises ``AIResponseError`` after logging the
raw text.
"""
from __future__ import annotations

import json
import logging
import time
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional, Sequence

import anthropic
from pydantic import ValidationError

from gymapp.fitness.exercises import (
    EXERCISES_BY_ID,
    WORKOUT_TYPE_MUSCLES,
    ExerciseDefinition,
    get_exercises_for_equipment,
)
from gymapp.schemas.ai import GeneratedWorkout, GenerateWorkoutRequest, Insight
from gymapp.settings import get_settings

log = logging.getLogger(__name__)

WEEKDAYS = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

GOAL_GUIDANCE = {
    "strength": "3-5 sets of 3-6 reps, 3-5 minutes rest between sets. Focus on compound movements.",
    "hypertrophy": "3-4 sets of 8-12 reps, 60-90 seconds rest between sets. Mix compound and isolation.",
    "endurance": "2-3 sets of 15-20 reps, 30-60 seconds rest between sets. Higher volume, lower weight.",
    "general": "3 sets of 8-12 reps, 60-90 seconds rest. Balanced approach.",
}

MIN_CANDIDATE_EXERCISES = 3


class AINotConfigured(Exception):
    pass


class AIResponseError(Exception):
    """The model answered, but not with the JSON we asked for."""


class NotEnoughExercises(ValueError):
    pass


# ---- response parsing ----------------------------------------------------

def extract_json_block(text: str, opener: str = "{"):
    """
    Parse the first balanced JSON object (``opener="{"``) or array
    (``opener="["``) in ``text``. Brackets inside string literals are
    ignored, so prose around the JSON and braces in values are both fine.
    """
    closer = {"{": "}", "[": "]"}[opener]
    start = text.find(opener)
    while start != -1:
        depth = 0
        in_string = escaped = False
        for i in range(start, len(text)):
            ch = text[i]
            if in_string:
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == '"':
                    in_string = False
                continue
            if ch == '"':
                in_string = True
            elif ch == opener:
                depth += 1
            elif ch == closer:
                depth -= 1
                if depth == 0:
                    try:
                        return json.loads(text[start:i + 1])
                    except json.JSONDecodeError:
                        break
        start = text.find(opener, start + 1)
    raise AIResponseError(f"no JSON {'object' if opener == '{' else 'array'} found in response")


# ---- prompt inputs ---------------------------------------------------------

def prepare_workout_summary(workouts: Sequence, now: Optional[datetime] = None) -> str:
    """Plain-text digest of the last 30 days of history for the insights prompt."""
    now = now or datetime.now(timezone.utc)
    cutoff = now - timedelta(days=30)
    recent = sorted((w for w in workouts if w.date >= cutoff), key=lambda w: w.date, reverse=True)

    total = len(recent)
    total_volume = sum(w.volume or 0 for w in recent)
    avg_minutes = round(sum(w.duration or 0 for w in recent) / total / 60) if total else 0

    per_exercise: dict[str, dict] = {}
    for w in recent:
        for ex in w.exercises:
            data = per_exercise.setdefault(ex.name, {"count": 0, "max_weight": 0, "volume": 0})
            data["count"] += 1
            for s in ex.sets:
                if s.completed and s.weight and s.reps:
                    data["max_weight"] = max(data["max_weight"], s.weight)
                    data["volume"] += s.weight * s.reps

    by_day = Counter(WEEKDAYS[(w.date.astimezone().weekday() + 1) % 7] for w in recent)

    lines = [
        "WORKOUT SUMMARY (Last 30 Days):",
        f"- Total workouts: {total}",
        f"- Total volume: {total_volume / 1000:.1f}k kg",
        f"- Average duration: {avg_minutes} minutes",
        "",
        "EXERCISE BREAKDOWN:",
    ]
    top = sorted(per_exercise.items(), key=lambda kv: kv[1]["volume"], reverse=True)[:10]
    for name, data in top:
        lines.append(
            f"- {name}: {data['count']} sessions, max weight {data['max_weight']:g}kg, "
            f"volume {data['volume'] / 1000:.1f}k kg"
        )
    lines += ["", "WORKOUT FREQUENCY BY DAY:"]
    lines += [f"- {day}: {by_day.get(day, 0)} workouts" for day in WEEKDAYS]
    lines += ["", "RECENT WORKOUTS:"]
    for w in recent[:5]:
        names = ", ".join(e.name for e in w.exercises)
        lines.append(f"- {w.date.astimezone().date().isoformat()}: {w.name} ({round((w.duration or 0) / 60)}min) - {names}")
    return "\n".join(lines)


def target_muscles(request: GenerateWorkoutRequest) -> tuple[str, ...]:
    if request.workout_type == "custom" and request.custom_muscle_groups:
        return tuple(request.custom_muscle_groups)
    return WORKOUT_TYPE_MUSCLES.get(request.workout_type, ())


def _allowed_for(level: str, difficulty: str) -> bool:
    if level == "beginner":
        return difficulty == "beginner"
    if level == "intermediate":
        return difficulty != "advanced"
    return True


def candidate_exercises(request: GenerateWorkoutRequest) -> list[ExerciseDefinition]:
    muscles = set(target_muscles(request))
    return [
        e for e in get_exercises_for_equipment(request.equipment)
        if muscles.intersection(e.muscle_groups) and _allowed_for(request.experience_level, e.difficulty)
    ]


def _exercise_counts(duration: int) -> str:
    if duration <= 30:
        return "2 warmup, 4-5 main exercises"
    if duration == 45:
        return "2-3 warmup, 5-6 main exercises"
    if duration == 60:
        return "3 warmup, 6-7 main exercises"
    return "3 warmup, 7-8 main exercises"


def build_workout_prompt(request: GenerateWorkoutRequest, candidates: Iterable[ExerciseDefinition]) -> str:
    library = json.dumps(
        [
            {"id": e.id, "name": e.name, "category": e.category,
             "muscleGroups": list(e.muscle_groups), "isCompound": e.is_compound}
            for e in candidates
        ],
        indent=2,
    )
    if request.recent_workouts:
        recent = "\n".join(f"- {w.name}: {', '.join(w.exercises)}" for w in request.recent_workouts)
    else:
        recent = "No recent workouts provided"
    return f"""You are an expert personal trainer creating a workout plan. Generate a structured workout based on the following:

USER PREFERENCES:
- Workout Type: {request.workout_type}
- Target Muscles: {', '.join(target_muscles(request))}
- Duration: {request.duration} minutes
- Available Equipment: {', '.join(request.equipment)}
- Experience Level: {request.experience_level}
- Goal: {request.goal}

PROGRAMMING GUIDANCE FOR {request.goal.upper()}:
{GOAL_GUIDANCE[request.goal]}

RECENT WORKOUTS (vary exercises from these):
{recent}

AVAILABLE EXERCISES (ONLY use exercises from this list):
{library}

REQUIREMENTS:
1. ONLY use exercises from the provided library - use the exact "id" and "name" values
2. For a {request.duration} minute workout: {_exercise_counts(request.duration)}
3. Start with compound movements, finish with isolation
4. Include appropriate warmup exercises
5. Vary exercises from recent workouts when possible
6. Provide intensity as RPE (Rate of Perceived Exertion) 1-10 or % of 1RM

Generate a creative but appropriate workout name based on the type and goal.

Respond ONLY with valid JSON matching this exact structure:
{{
  "name": "string - creative workout name",
  "estimatedDuration": number,
  "targetMuscleGroups": ["array of muscle groups"],
  "warmup": [
    {{
      "exerciseId": "from library",
      "name": "from library",
      "sets": number,
      "reps": "string like '10-12' or '30 sec'",
      "restSeconds": number,
      "notes": "optional form cues",
      "intensity": "optional like 'RPE 5' or 'Light'"
    }}
  ],
  "mainWorkout": [same structure as warmup]
}}"""


def build_insights_prompt(summary: str) -> str:
    return f"""You are a knowledgeable fitness coach analyzing a user's workout history. Based on the following workout data, provide 3-5 personalized insights.

Each insight should be one of these types:
- "celebration": Celebrating achievements, PRs, or milestones
- "recommendation": Suggesting improvements or new approaches
- "analysis": Observing patterns or trends in the data
- "warning": Alerting about potential issues like overtraining or imbalances

Respond with a JSON array of insights. Each insight should have:
- type: one of the types above
- title: a short, engaging title (max 50 chars)
- content: detailed explanation (2-3 sentences)

Here is the workout data:

{summary}

Respond ONLY with a valid JSON array, no other text."""


# ---- model calls -----------------------------------------------------------

def _client() -> anthropic.Anthropic:
    key = get_settings().ANTHROPIC_API_KEY
    if not key:
        raise AINotConfigured("Anthropic API key not configured")
    return anthropic.Anthropic(api_key=key)


def complete(prompt: str, *, max_tokens: int) -> str:
    """Single-turn completion; returns the first text block."""
    message = _client().messages.create(
        model=get_settings().ANTHROPIC_MODEL,
        max_tokens=max_tokens,
        messages=[{"role": "user", "content": prompt}],
    )
    text = next((block.text for block in message.content if block.type == "text"), None)
    if text is None:
        raise AIResponseError("no text content in response")
    return text


def generate_insights(workouts: Sequence, now: Optional[datetime] = None) -> list[Insight]:
    if not workouts:
        return []
    now = now or datetime.now(timezone.utc)
    text = complete(build_insights_prompt(prepare_workout_summary(workouts, now=now)), max_tokens=1024)
    try:
        raw = extract_json_block(text, "[")
        stamp = int(time.time() * 1000)
        return [
            Insight(
                id=f"ai-{stamp}-{i}",
                type=item["type"],
                title=item["title"],
                content=item["content"],
                created_at=now,
            )
            for i, item in enumerate(raw)
        ]
    except (AIResponseError, KeyError, TypeError, ValidationError) as e:
        log.error("unparseable insights response: %r", text)
        raise AIResponseError("Invalid insights format from AI") from e


def generate_workout(request: GenerateWorkoutRequest) -> GeneratedWorkout:
    candidates = candidate_exercises(request)
    if len(candidates) < MIN_CANDIDATE_EXERCISES:
        raise NotEnoughExercises(
            "Not enough exercises available for the selected options. Try selecting more equipment."
        )
    text = complete(build_workout_prompt(request, candidates), max_tokens=2048)
    try:
        workout = GeneratedWorkout.model_validate(extract_json_block(text, "{"))
    except (AIResponseError, ValidationError) as e:
        log.error("unparseable workout response: %r", text)
        raise AIResponseError("Invalid workout format from AI") from e

    for ex in [*workout.warmup, *workout.main_workout]:
        if ex.exercise_id not in EXERCISES_BY_ID:
            # tolerated: the model sometimes drifts from the library ids
            log.warning("exercise not in library: %s (%s)", ex.exercise_id, ex.name)
    return workout
