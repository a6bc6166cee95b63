import logging
from datetime import datetime, timedelta, timezone

import pytest

from gymapp.fitness.active_workout import ActiveWorkout, ActiveWorkoutRegistry
from gymapp.fitness.exercises import EXERCISES_BY_ID

BENCH = EXERCISES_BY_ID["bench-press"]
TREADMILL = EXERCISES_BY_ID["treadmill-run"]


class FakeClock:
    def __init__(self):
        self.now = datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def workout(clock):
    w = ActiveWorkout(clock=clock)
    w.start("Push Day")
    return w


def test_start_sets_fresh_state(workout, clock):
    assert workout.is_active and not workout.is_paused
    assert workout.session.status == "in_progress"
    assert workout.started_at == clock.now
    assert workout.elapsed_seconds == 0
    assert workout.exercise_logs == []

def test_idle_workout_reads_zero(clock):
    w = ActiveWorkout(clock=clock)
    assert not w.is_active
    assert w.elapsed_seconds == 0
    assert w.rest_timer_remaining == 0
    assert w.current_exercise is None

def test_elapsed_excludes_paused_time(workout, clock):
    clock.advance(65)
    assert workout.elapsed_seconds == 65
    assert workout.pause()
    clock.advance(30)
    assert workout.elapsed_seconds == 65  # frozen while paused
    assert workout.resume()
    assert workout.total_paused_ms == 30_000
    clock.advance(10)
    assert workout.elapsed_seconds == 75

def test_elapsed_across_several_pauses(workout, clock):
    for run, paused in ((10, 30), (5, 0), (7, 12)):
        clock.advance(run)
        assert workout.pause()
        clock.advance(paused)
        assert workout.resume()
    clock.advance(3)
    assert workout.elapsed_seconds == 25
    assert workout.total_paused_ms == 42_000

def test_zero_length_pause_changes_nothing(workout, clock):
    clock.advance(20)
    assert workout.pause()
    assert workout.resume()
    assert workout.total_paused_ms == 0
    assert workout.elapsed_seconds == 20

def test_elapsed_floors_partial_seconds(workout, clock):
    clock.advance(1.9)
    assert workout.elapsed_seconds == 1

def test_pause_resume_preconditions(clock, workout):
    assert not workout.resume()  # not paused
    assert workout.pause()
    assert not workout.pause()  # already paused
    idle = ActiveWorkout(clock=clock)
    assert not idle.pause()
    assert not idle.resume()

def test_sets_carry_forward_and_count_when_completed(workout):
    entry = workout.add_exercise(BENCH)
    assert entry.order_index == 0 and entry.cardio_log is None
    first = workout.add_set(0)
    assert first.set_number == 1 and first.reps is None
    assert workout.update_set(0, 0, reps=5, weight_kg=100)
    second = workout.add_set(0)
    assert (second.set_number, second.reps, second.weight_kg) == (2, 5, 100)

    assert workout.total_sets == 0 and workout.total_volume == 0
    assert workout.complete_set(0, 1, rpe=8)
    assert workout.total_sets == 1
    assert workout.total_volume == 500
    assert workout.exercise_logs[0].sets[1].rpe == 8

    assert workout.uncomplete_set(0, 1)
    assert workout.total_volume == 0

def test_remove_set_renumbers(workout):
    workout.add_exercise(BENCH)
    for _ in range(3):
        workout.add_set(0)
    assert workout.remove_set(0, 0)
    assert [s.set_number for s in workout.exercise_logs[0].sets] == [1, 2]

def test_out_of_range_indices_are_noops(workout):
    workout.add_exercise(BENCH)
    assert workout.add_set(3) is None
    assert not workout.update_set(0, 0, reps=1)
    assert not workout.complete_set(0, 5)
    assert not workout.uncomplete_set(-1, 0)
    assert not workout.remove_set(0, 0)
    assert not workout.remove_exercise(4)

def test_remove_exercise_reindexes(workout):
    workout.add_exercise(BENCH)
    workout.add_exercise(TREADMILL)
    assert workout.current_exercise.exercise is TREADMILL
    assert workout.remove_exercise(0)
    assert workout.exercise_logs[0].order_index == 0

def test_set_field_validation(workout):
    workout.add_exercise(BENCH)
    workout.add_set(0)
    with pytest.raises(ValueError):
        workout.update_set(0, 0, set_type="superset")
    with pytest.raises(TypeError):
        workout.update_set(0, 0, tempo="3-1-1")

def test_cardio_log_only_on_cardio(workout):
    workout.add_exercise(BENCH)
    entry = workout.add_exercise(TREADMILL)
    assert entry.cardio_log == {}
    assert workout.update_cardio_log(1, distance_km=5.2, duration_sec=1800)
    assert entry.cardio_log == {"distance_km": 5.2, "duration_sec": 1800}
    assert not workout.update_cardio_log(0, distance_km=1)
    with pytest.raises(TypeError):
        workout.update_cardio_log(1, cadence=170)

def test_rest_timer(workout, clock):
    workout.start_rest_timer(90)
    clock.advance(30.5)
    assert workout.rest_timer_remaining == 59
    clock.advance(120)
    assert workout.rest_timer_remaining == 0
    workout.start_rest_timer(60)
    workout.cancel_rest_timer()
    assert workout.rest_timer_end_at is None

def test_end_returns_detached_snapshot(workout, clock):
    workout.add_exercise(BENCH)
    workout.add_set(0)
    workout.complete_set(0, 0, reps=5, weight_kg=100)
    clock.advance(600)
    workout.pause()
    clock.advance(60)

    finished = workout.end(rating=4, notes="felt strong")
    assert finished.session.status == "completed"
    assert finished.session.duration_sec == 600
    assert finished.session.completed_at == clock.now
    assert finished.session.rating == 4
    assert finished.total_volume == 500

    assert not workout.is_active and workout.session is None
    assert workout.exercise_logs == []
    assert workout.end() is None

def test_end_rejects_unknown_summary_fields(workout):
    with pytest.raises(TypeError):
        workout.end(mood="great")

def test_cancel_discards_everything(workout):
    workout.add_exercise(BENCH)
    workout.cancel()
    assert not workout.is_active
    assert workout.exercise_logs == []

def test_cancel_twice_is_harmless(workout):
    workout.cancel()
    workout.cancel()
    assert not workout.is_active
    assert workout.session is None
    assert workout.end() is None

def test_start_replaces_active_workout(workout, caplog):
    old_id = workout.session.id
    workout.add_exercise(BENCH)
    with caplog.at_level(logging.WARNING, logger="gymapp.fitness.active_workout"):
        workout.start("Leg Day")
    assert workout.session.id != old_id
    assert workout.session.name == "Leg Day"
    assert workout.exercise_logs == []
    assert "replacing active workout" in caplog.text

def test_registry_keeps_one_workout_per_user(clock):
    registry = ActiveWorkoutRegistry(clock=clock)
    a = registry.get(1)
    assert registry.get(1) is a
    assert registry.get(2) is not a
    assert len(registry) == 2
    registry.discard(1)
    assert registry.get(1) is not a
