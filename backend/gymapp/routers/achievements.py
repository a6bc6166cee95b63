from datetime import date
from fastapi import APIRouter, Depends
from pydantic import ValidationError
from sqlalchemy.orm import Session
import logging

from gymapp.db import get_db
from gymapp.deps.auth import get_current_user
from gymapp.fitness.achievements import parse_criteria, progress_percent
from gymapp.local_store import history_for
from gymapp.models import Achievement, User, UserAchievement
from gymapp.repositories.achievement_repo import AchievementRepository
from gymapp.schemas.achievement import AchievementList, AchievementRead, EvaluationResult

log = logging.getLogger(__name__)

router = APIRouter(prefix="/achievements", tags=["achievements"])

def _view(a: Achievement, ua: UserAchievement | None) -> AchievementRead:
    return AchievementRead(
        id=a.id,
        name=a.name,
        description=a.description,
        icon=a.icon,
        category=a.category,
        points=a.points,
        criteria=a.criteria,
        unlocked=bool(ua and ua.unlocked_at),
        progress=ua.progress if ua else 0,
        unlocked_at=ua.unlocked_at if ua else None,
    )

def _total_points(views: list[AchievementRead]) -> int:
    return sum(v.points for v in views if v.unlocked)

@router.get("", response_model=AchievementList)
def list_achievements(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    repo = AchievementRepository(db)
    progress = repo.for_user(current.id)
    views = [_view(a, progress.get(a.id)) for a in repo.catalogue()]
    return {"achievements": views, "total_points": _total_points(views)}

@router.post("/evaluate", response_model=EvaluationResult)
def evaluate(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    """Recompute progress from workout history and unlock whatever is now satisfied."""
    repo = AchievementRepository(db)
    history = history_for(current.id).all()
    progress = repo.for_user(current.id)
    today = date.today()
    newly_unlocked, views = [], []
    for a in repo.catalogue():
        ua = progress.get(a.id)
        try:
            criteria = parse_criteria(a.criteria)
        except ValidationError:
            log.warning("achievement %s has unreadable criteria %r", a.id, a.criteria)
            views.append(_view(a, ua))
            continue
        was_unlocked = bool(ua and ua.unlocked_at)
        # unlocked achievements stay unlocked even if history is later deleted
        pct = 100 if was_unlocked else progress_percent(criteria, history, today=today)
        ua = repo.record_progress(current.id, a.id, pct, existing=ua)
        view = _view(a, ua)
        if view.unlocked and not was_unlocked:
            newly_unlocked.append(view)
        views.append(view)
    repo.commit()
    return {"newly_unlocked": newly_unlocked, "total_points": _total_points(views)}
