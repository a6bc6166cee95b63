from datetime import date, datetime

from gymapp.fitness.active_workout import ActiveExerciseLog, ActiveSet
from gymapp.fitness.exercises import EXERCISES_BY_ID
from gymapp.fitness.records import (
    PersonalRecord, calculate_all_prs, calculate_day_streak, calculate_longest_streak,
    calculate_workout_stats, flag_new_prs, get_exercise_pr, get_prs_this_month,
)
from gymapp.schemas.history import SavedExercise, SavedSet, SavedWorkout


def local(y, m, d, hour=12):
    return datetime(y, m, d, hour).astimezone()

def workout(id, when, sets, exercise="Bench Press", volume=0):
    return SavedWorkout(
        id=id, name="W", date=when, duration=3600, volume=volume,
        exercises=[SavedExercise(name=exercise, sets=[SavedSet(weight=w, reps=r, completed=c) for w, r, c in sets])],
    )


def test_best_set_wins_and_ties_go_to_heavier():
    history = [
        workout("w3", local(2024, 1, 3), [(125, 4, True)]),   # 500, heavier
        workout("w2", local(2024, 1, 2), [(110, 4, True)]),   # 440
        workout("w1", local(2024, 1, 1), [(100, 5, True)]),   # 500
    ]
    pr = calculate_all_prs(history)["Bench Press"]
    assert (pr.weight, pr.reps, pr.workout_id) == (125, 4, "w3")
    assert pr.score == 500
    assert pr.estimated_1rm == 142

def test_equal_set_keeps_first_date():
    history = [
        workout("late", local(2024, 1, 5), [(100, 5, True)]),
        workout("early", local(2024, 1, 1), [(100, 5, True)]),
    ]
    assert calculate_all_prs(history)["Bench Press"].workout_id == "early"

def test_incomplete_and_empty_sets_never_count():
    history = [workout("w1", local(2024, 1, 1), [(200, 10, False), (0, 10, True), (100, None, True), (60, 5, True)])]
    pr = calculate_all_prs(history)["Bench Press"]
    assert (pr.weight, pr.reps) == (60, 5)
    assert calculate_all_prs([workout("w", local(2024, 1, 1), [(100, 5, False)])]) == {}

def test_prs_this_month_and_lookup():
    history = [
        workout("feb", local(2024, 2, 20), [(100, 5, True)]),
        workout("mar", local(2024, 3, 2), [(80, 5, True)], exercise="Squat"),
    ]
    month = get_prs_this_month(history, now=local(2024, 3, 15))
    assert [pr.exercise_name for pr in month] == ["Squat"]
    assert get_exercise_pr(history, "Bench Press").workout_id == "feb"
    assert get_exercise_pr(history, "Deadlift") is None

def test_day_streak_counts_back_from_latest():
    today = date(2024, 3, 10)
    history = [
        workout("a", local(2024, 3, 10, 7), []),
        workout("b", local(2024, 3, 10, 19), []),  # same day counts once
        workout("c", local(2024, 3, 9), []),
        workout("d", local(2024, 3, 8), []),
        workout("e", local(2024, 3, 5), []),
    ]
    assert calculate_day_streak(history, today=today) == 3

def test_streak_survives_until_end_of_next_day():
    history = [workout("a", local(2024, 3, 9), []), workout("b", local(2024, 3, 8), [])]
    assert calculate_day_streak(history, today=date(2024, 3, 10)) == 2
    assert calculate_day_streak(history, today=date(2024, 3, 11)) == 0

def test_streak_uses_calendar_days_not_24h_windows():
    # 46 hours apart, consecutive calendar days
    history = [workout("a", local(2024, 3, 9, 1), []), workout("b", local(2024, 3, 10, 23), [])]
    assert calculate_day_streak(history, today=date(2024, 3, 10)) == 2
    # 26 hours apart, but the 10th was skipped
    history = [workout("a", local(2024, 3, 9, 23), []), workout("b", local(2024, 3, 11, 1), [])]
    assert calculate_day_streak(history, today=date(2024, 3, 11)) == 1

def test_empty_history():
    assert calculate_all_prs([]) == {}
    assert calculate_day_streak([]) == 0
    assert calculate_longest_streak([]) == 0

def test_longest_streak():
    days = [(2024, 3, 1), (2024, 3, 2), (2024, 3, 3), (2024, 3, 7), (2024, 3, 8)]
    history = [workout(str(i), local(*d), []) for i, d in enumerate(days)]
    assert calculate_longest_streak(history) == 3

def test_workout_stats_week_starts_monday():
    now = local(2024, 3, 13, 18)  # Wednesday
    history = [
        workout("mon", local(2024, 3, 11), [], volume=1000),
        workout("wed", local(2024, 3, 13), [], volume=2000),
        workout("sun", local(2024, 3, 10), [], volume=500),
        workout("feb", local(2024, 2, 28), [], volume=100),
    ]
    stats = calculate_workout_stats(history, now=now)
    assert stats.total_workouts == 4
    assert stats.total_volume == 3600
    assert stats.total_duration == 4 * 3600
    assert stats.workouts_this_week == 2
    assert stats.workouts_this_month == 3
    assert stats.current_streak == 1
    assert stats.longest_streak == 2

def test_flag_new_prs_against_prior_best():
    entry = ActiveExerciseLog(id="x", exercise=EXERCISES_BY_ID["bench-press"], order_index=0)
    when = local(2024, 3, 1)
    entry.sets = [
        ActiveSet(1, reps=5, weight_kg=100, completed_at=when),   # ties the record
        ActiveSet(2, reps=5, weight_kg=105, completed_at=when),   # new best
        ActiveSet(3, reps=5, weight_kg=102, completed_at=when),   # below the new best
        ActiveSet(4, reps=10, weight_kg=150),                     # never completed
    ]
    name = entry.exercise.name
    prior = {name: PersonalRecord(name, 100, 5, local(2024, 1, 1))}
    assert flag_new_prs([entry], prior, when) == 1
    assert [s.is_pr for s in entry.sets] == [False, True, False, False]

def test_flag_new_prs_first_time_exercise():
    entry = ActiveExerciseLog(id="x", exercise=EXERCISES_BY_ID["barbell-squat"], order_index=0)
    entry.sets = [ActiveSet(1, reps=5, weight_kg=60, completed_at=local(2024, 3, 1))]
    assert flag_new_prs([entry], {}, local(2024, 3, 1)) == 1
