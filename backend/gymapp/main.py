# gymapp/main.py
import os
import time
import logging
import uuid
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from gymapp.fitness.active_workout import ActiveWorkoutRegistry
from gymapp.routers.auth import router as auth_router
from gymapp.routers.profile import router as profile_router
from gymapp.routers.active_workout import router as active_workout_router
from gymapp.routers.history import router as history_router
from gymapp.routers.templates import router as templates_router
from gymapp.routers.stats import router as stats_router
from gymapp.routers.tools import router as tools_router
from gymapp.routers.goals import router as goals_router
from gymapp.routers.measurements import router as measurements_router
from gymapp.routers.exercises import router as exercises_router
from gymapp.routers.achievements import router as achievements_router
from gymapp.routers.subscription import router as subscription_router, webhook_router
from gymapp.routers.ai import router as ai_router
from gymapp.db import SessionLocal  # for healthz DB check
from gymapp.settings import get_settings

log = logging.getLogger("uvicorn")

app = FastAPI(
    title="Gym Tracker API",
    openapi_tags=[
        {"name": "auth", "description": "Registration & login"},
        {"name": "profile", "description": "Profile and unit preferences"},
        {"name": "active workout", "description": "The workout in progress"},
        {"name": "history", "description": "Finished workouts"},
        {"name": "templates", "description": "Saved workout templates"},
        {"name": "stats", "description": "Personal records and streaks"},
        {"name": "tools", "description": "1RM and plate calculators"},
        {"name": "goals", "description": "Training goals"},
        {"name": "measurements", "description": "Body measurements"},
        {"name": "exercises", "description": "Exercise library and custom exercises"},
        {"name": "achievements", "description": "Achievements and points"},
        {"name": "subscription", "description": "Premium billing"},
        {"name": "webhooks", "description": "Payment provider callbacks"},
        {"name": "ai", "description": "AI coaching (premium)"},
    ],
)

# one in-progress workout per user, in process memory
app.state.workouts = ActiveWorkoutRegistry()

# CORS (relax for local dev; tighten origins in prod via env)
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().ALLOW_ORIGINS.split(","),
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def add_request_id_and_log(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Request-ID"] = req_id
    log.info("rid=%s %s %s -> %s in %.1fms",
             req_id, request.method, request.url.path, response.status_code, duration_ms)
    return response

@app.get("/")
def root():
    return {"ok": True, "name": "Gym Tracker API"}

@app.get("/ping")
def ping():
    return {"pong": True}

@app.get("/healthz")
def healthz():
    # Quick DB sanity check
    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        return {"status": "ok"}
    except Exception as e:
        log.warning("healthz db check failed: %s", e)
        return {"status": "degraded", "error": str(e)}

@app.get("/version")
def version():
    return {"version": os.getenv("API_VERSION", "dev")}

# Routers
app.include_router(auth_router)
app.include_router(profile_router)
app.include_router(active_workout_router)
app.include_router(history_router)
app.include_router(templates_router)
app.include_router(stats_router)
app.include_router(tools_router)
app.include_router(goals_router)
app.include_router(measurements_router)
app.include_router(exercises_router)
app.include_router(achievements_router)
app.include_router(subscription_router)
app.include_router(webhook_router)
app.include_router(ai_router)
