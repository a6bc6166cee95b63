from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from gymapp.db import get_db
from gymapp.deps.auth import get_current_user
from gymapp.models import User
from gymapp.repositories.user_repo import UserRepository
from gymapp.schemas.user import ProfileRead, ProfileUpdate

router = APIRouter(prefix="/profile", tags=["profile"])

@router.get("", response_model=ProfileRead)
def get_profile(current: User = Depends(get_current_user)):
    return current

@router.patch("", response_model=ProfileRead)
def update_profile(payload: ProfileUpdate, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    fields = payload.model_dump(exclude_unset=True)
    for required in ("username", "unit_system"):
        if fields.get(required) is None:
            fields.pop(required, None)
    return UserRepository(db).update_profile(current, **fields)
