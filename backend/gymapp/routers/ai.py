import logging
from fastapi import APIRouter, Depends, HTTPException
import anthropic

from gymapp.deps.auth import require_premium
from gymapp.local_store import history_for
from gymapp.models import User
from gymapp.schemas.ai import GenerateWorkoutRequest, GenerateWorkoutResponse, InsightsRequest, InsightsResponse
from gymapp.services import ai

log = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["ai"])

@router.post("/insights", response_model=InsightsResponse)
def insights(payload: InsightsRequest | None = None, current: User = Depends(require_premium)):
    workouts = payload.workouts if payload and payload.workouts is not None else history_for(current.id).all()
    try:
        return {"insights": ai.generate_insights(workouts)}
    except ai.AINotConfigured as e:
        raise HTTPException(status_code=500, detail=str(e))
    except ai.AIResponseError:
        raise HTTPException(status_code=502, detail="Failed to generate insights")
    except anthropic.APIError:
        log.exception("insights request failed for user %s", current.id)
        raise HTTPException(status_code=502, detail="Failed to generate insights")

@router.post("/generate-workout", response_model=GenerateWorkoutResponse)
def generate_workout(payload: GenerateWorkoutRequest, current: User = Depends(require_premium)):
    try:
        return {"workout": ai.generate_workout(payload)}
    except ai.NotEnoughExercises as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ai.AINotConfigured as e:
        raise HTTPException(status_code=500, detail=str(e))
    except ai.AIResponseError:
        raise HTTPException(status_code=502, detail="Failed to generate workout")
    except anthropic.APIError:
        log.exception("workout generation failed for user %s", current.id)
        raise HTTPException(status_code=502, detail="Failed to generate workout")
