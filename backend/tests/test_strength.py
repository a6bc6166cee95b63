import pytest
from gymapp.fitness.strength import (
    IMPERIAL_PLATES_IN_KG, PlateInfo, TRAINING_PERCENTAGES,
    calculate_1rm, calculate_actual_weight, calculate_percentage_weight,
    calculate_plates_needed, round_to_nearest_plate,
)

@pytest.mark.parametrize("weight,reps,expected", [
    (100, 5, 117),
    (100, 1, 100),
    (60, 10, 80),
    (0, 5, 0),
    (100, 0, 0),
    (-20, 5, 0),
])
def test_epley_one_rep_max(weight, reps, expected):
    assert calculate_1rm(weight, reps) == expected

def test_percentage_weight_rounds_half_up():
    assert calculate_percentage_weight(117, 85) == 99
    assert calculate_percentage_weight(150, 75) == 113  # 112.5

def test_round_to_nearest_plate():
    assert round_to_nearest_plate(101) == 100
    assert round_to_nearest_plate(102) == 102.5
    assert round_to_nearest_plate(103, nearest=5) == 105

def test_training_table_runs_100_to_60():
    assert [row["percent"] for row in TRAINING_PERCENTAGES] == [100, 95, 90, 85, 80, 75, 70, 65, 60]

def test_plates_per_side():
    plates = calculate_plates_needed(100, 20)
    assert plates == [PlateInfo(25, 1, "red"), PlateInfo(15, 1, "yellow")]
    assert calculate_actual_weight(plates, 20) == 100

def test_multiple_of_same_plate():
    plates = calculate_plates_needed(140, 20)
    assert plates == [PlateInfo(25, 2, "red"), PlateInfo(10, 1, "green")]

def test_target_at_or_below_bar_needs_nothing():
    assert calculate_plates_needed(20, 20) == []
    assert calculate_plates_needed(15, 20) == []

def test_unloadable_remainder_is_dropped():
    plates = calculate_plates_needed(61, 20)
    assert plates == [PlateInfo(20, 1, "blue")]
    assert calculate_actual_weight(plates, 20) == 60

def test_imperial_plates():
    # 225 lb on a 45 lb bar: two 45s per side
    plates = calculate_plates_needed(102.06, 20.41, IMPERIAL_PLATES_IN_KG)
    assert plates[0].weight == 20.41 and plates[0].count == 2
