from typing import Literal
from fastapi import APIRouter, HTTPException, Query
from gymapp.fitness.strength import (
    IMPERIAL_PLATES_IN_KG, METRIC_PLATES, TRAINING_PERCENTAGES,
    calculate_1rm, calculate_actual_weight, calculate_percentage_weight, calculate_plates_needed,
)
from gymapp.schemas.stats import OneRepMaxRead, PlatesRead

router = APIRouter(prefix="/tools", tags=["tools"])

@router.get("/one-rep-max", response_model=OneRepMaxRead)
def one_rep_max(weight: float = Query(..., gt=0), reps: int = Query(..., ge=1, le=30)):
    one_rm = calculate_1rm(weight, reps)
    return {
        "weight": weight,
        "reps": reps,
        "one_rep_max": one_rm,
        "percentages": [
            {**row, "weight": calculate_percentage_weight(one_rm, row["percent"])}
            for row in TRAINING_PERCENTAGES
        ],
    }

@router.get("/plates", response_model=PlatesRead)
def plates(
    target: float = Query(..., gt=0),
    bar: float = Query(20, ge=0),
    plate_set: Literal["metric", "imperial"] = "metric",
):
    available = IMPERIAL_PLATES_IN_KG if plate_set == "imperial" else METRIC_PLATES
    if target < bar:
        raise HTTPException(status_code=400, detail="target is lighter than the bar")
    per_side = calculate_plates_needed(target, bar, available)
    return {
        "target": target,
        "bar": bar,
        "per_side": per_side,
        "actual": calculate_actual_weight(per_side, bar),
    }
