from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from gymapp.db import get_db
from gymapp.deps.auth import get_current_user
from gymapp.models import User, UserGoal
from gymapp.repositories.goal_repo import GoalRepository, goal_progress
from gymapp.schemas.goal import GoalCreate, GoalProgress, GoalRead, GoalUpdate

router = APIRouter(prefix="/goals", tags=["goals"])

def _read(goal: UserGoal) -> GoalRead:
    view = GoalRead.model_validate(goal)
    view.progress = goal_progress(goal)
    return view

def _owned(repo: GoalRepository, goal_id: int, user: User) -> UserGoal:
    goal = repo.get(goal_id, user.id)
    if goal is None:
        raise HTTPException(status_code=404, detail="Goal not found")
    return goal

@router.get("", response_model=list[GoalRead])
def list_goals(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return [_read(g) for g in GoalRepository(db).list_by_user(current.id)]

@router.post("", response_model=GoalRead, status_code=status.HTTP_201_CREATED)
def create_goal(payload: GoalCreate, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    repo = GoalRepository(db)
    goal = repo.create(current.id, **payload.model_dump())
    # a goal can be born complete
    return _read(repo.update_progress(goal, goal.current_value))

@router.patch("/{goal_id}", response_model=GoalRead)
def update_goal(goal_id: int, payload: GoalUpdate, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    repo = GoalRepository(db)
    goal = repo.update(_owned(repo, goal_id, current), **payload.model_dump(exclude_unset=True, exclude_none=True))
    return _read(repo.update_progress(goal, goal.current_value))

@router.put("/{goal_id}/progress", response_model=GoalRead)
def update_progress(goal_id: int, payload: GoalProgress, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    repo = GoalRepository(db)
    return _read(repo.update_progress(_owned(repo, goal_id, current), payload.current_value))

@router.delete("/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_goal(goal_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    if not GoalRepository(db).delete(goal_id, current.id):
        raise HTTPException(status_code=404, detail="Goal not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
