"""
Strength formulas and barbell plate math.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from gymapp.fitness.units import round_half_up

METRIC_PLATES: tuple[float, ...] = (25, 20, 15, 10, 5, 2.5, 1.25)

# 45lb, 25lb, 15lb, 10lb, 5lb, 2.5lb expressed in kg
IMPERIAL_PLATES_IN_KG: tuple[float, ...] = (20.41, 11.34, 6.80, 4.54, 2.27, 1.13)

# Olympic colour coding; imperial plates borrow the nearest metric colour
PLATE_COLORS: dict[float, str] = {
    25: "red",
    20: "blue",
    15: "yellow",
    10: "green",
    5: "white",
    2.5: "light-red",
    1.25: "grey",
    20.41: "blue",
    11.34: "green",
    6.80: "yellow",
    4.54: "white",
    2.27: "grey",
    1.13: "light-grey",
}
DEFAULT_PLATE_COLOR = "dark-grey"

TRAINING_PERCENTAGES: tuple[dict, ...] = (
    {"percent": 100, "description": "1RM (max single)"},
    {"percent": 95, "description": "~2 reps"},
    {"percent": 90, "description": "~3-4 reps"},
    {"percent": 85, "description": "~5-6 reps"},
    {"percent": 80, "description": "~7-8 reps"},
    {"percent": 75, "description": "~10 reps"},
    {"percent": 70, "description": "~12 reps"},
    {"percent": 65, "description": "~15 reps"},
    {"percent": 60, "description": "~20 reps"},
)


@dataclass(frozen=True, slots=True)
class PlateInfo:
    weight: float
    count: int
    color: str


def calculate_1rm(weight: float, reps: int) -> float:
    """Estimated one-rep max (Epley): weight * (1 + reps/30), rounded."""
    if weight <= 0 or reps <= 0:
        return 0
    if reps == 1:
        return weight
    return round_half_up(weight * (1 + reps / 30))


def calculate_percentage_weight(one_rm: float, percent: float) -> float:
    return round_half_up(one_rm * percent / 100)


def round_to_nearest_plate(value: float, nearest: float = 2.5) -> float:
    return round_half_up(value / nearest) * nearest


def calculate_plates_needed(
    target_weight: float,
    bar_weight: float,
    plates: Sequence[float] = METRIC_PLATES,
) -> list[PlateInfo]:
    """
    Plates to load on EACH side of the bar to reach ``target_weight``.

    Greedy, largest plate first. ``plates`` must be sorted descending. The
    greedy pass never backtracks, so for unusual denomination sets it can
    leave a remainder that a different combination would have covered; that
    remainder is simply not loaded (see ``calculate_actual_weight``).
    """
    if target_weight <= bar_weight:
        return []

    remaining = (target_weight - bar_weight) / 2
    result: list[PlateInfo] = []
    for plate in plates:
        count = math.floor(remaining / plate)
        if count > 0:
            result.append(PlateInfo(
                weight=plate,
                count=count,
                color=PLATE_COLORS.get(plate, DEFAULT_PLATE_COLOR),
            ))
            remaining -= count * plate
    return result


def calculate_actual_weight(plates: Sequence[PlateInfo], bar_weight: float) -> float:
    """Total on the bar for a per-side plate list (may undershoot the target)."""
    plates_weight = sum(p.weight * p.count * 2 for p in plates)
    return round(bar_weight + plates_weight, 2)
