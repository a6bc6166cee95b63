"""
Unit conversion between stored metric quantities and the user's display system.

Everything is stored metric (kg, cm, km). Display conversions round to one
decimal (weight, length) or two (distance); conversions back to storage round
to two decimals. ``None`` passes through untouched.
"""
from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Literal, Optional

UnitSystem = Literal["metric", "imperial"]

KG_TO_LBS = 2.20462
CM_TO_INCHES = 0.393701
KM_TO_MILES = 0.621371

EMPTY_DISPLAY = "—"


def round_half_up(value: float, places: int = 0) -> float:
    """Round like a calculator does (2.5 -> 3), not banker's rounding."""
    q = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(q, rounding=ROUND_HALF_UP))


def _trim(value: float) -> float | int:
    # 100.0 renders as "100", 20.5 stays "20.5"
    return int(value) if float(value).is_integer() else value


class UnitConverter:
    def __init__(self, unit_system: Optional[str] = "metric"):
        self.unit_system: UnitSystem = "imperial" if unit_system == "imperial" else "metric"

    @property
    def is_imperial(self) -> bool:
        return self.unit_system == "imperial"

    @property
    def weight_unit(self) -> str:
        return "lbs" if self.is_imperial else "kg"

    @property
    def length_unit(self) -> str:
        return "in" if self.is_imperial else "cm"

    @property
    def distance_unit(self) -> str:
        return "mi" if self.is_imperial else "km"

    # metric -> display
    def convert_weight(self, kg: Optional[float]) -> Optional[float]:
        if kg is None:
            return None
        return round_half_up(kg * KG_TO_LBS, 1) if self.is_imperial else kg

    def convert_length(self, cm: Optional[float]) -> Optional[float]:
        if cm is None:
            return None
        return round_half_up(cm * CM_TO_INCHES, 1) if self.is_imperial else cm

    def convert_distance(self, km: Optional[float]) -> Optional[float]:
        if km is None:
            return None
        return round_half_up(km * KM_TO_MILES, 2) if self.is_imperial else km

    # display -> metric (storage)
    def to_metric_weight(self, value: Optional[float]) -> Optional[float]:
        if value is None:
            return None
        return round_half_up(value / KG_TO_LBS, 2) if self.is_imperial else value

    def to_metric_length(self, value: Optional[float]) -> Optional[float]:
        if value is None:
            return None
        return round_half_up(value / CM_TO_INCHES, 2) if self.is_imperial else value

    def to_metric_distance(self, value: Optional[float]) -> Optional[float]:
        if value is None:
            return None
        return round_half_up(value / KM_TO_MILES, 2) if self.is_imperial else value

    # formatting; zero and None both render as the empty marker
    def format_weight(self, kg: Optional[float]) -> str:
        if not kg:
            return EMPTY_DISPLAY
        return f"{_trim(self.convert_weight(kg))}{self.weight_unit}"

    def format_length(self, cm: Optional[float]) -> str:
        if not cm:
            return EMPTY_DISPLAY
        return f"{_trim(self.convert_length(cm))}{self.length_unit}"

    def format_distance(self, km: Optional[float]) -> str:
        if not km:
            return EMPTY_DISPLAY
        return f"{_trim(self.convert_distance(km))}{self.distance_unit}"

    def format_volume(self, kg: float) -> str:
        converted = self.convert_weight(kg) or 0
        if converted >= 1000:
            return f"{converted / 1000:.1f}k {self.weight_unit}"
        return f"{_trim(converted)} {self.weight_unit}"
