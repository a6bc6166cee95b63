from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from gymapp.db import get_db
from gymapp.models import User
from gymapp.schemas.user import TokenRead, UserRegister, UserLogin, UserRead
from gymapp.security import hash_password, verify_password, create_access_token, token_lifetime
from gymapp.deps.auth import get_current_user
from gymapp.repositories.user_repo import UserRepository

router = APIRouter(prefix="/auth", tags=["auth"])

EMAIL_TAKEN = "email already registered"

@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(payload: UserRegister, db: Session = Depends(get_db)):
    """Create the account and its profile (metric units, free plan)."""
    repo = UserRepository(db)
    if repo.get_by_email(payload.email):
        raise HTTPException(status_code=400, detail=EMAIL_TAKEN)
    try:
        return repo.create(
            email=payload.email,
            username=payload.username,
            password_hash=hash_password(payload.password),
        )
    except ValueError as e:
        if str(e) == "email_already_exists":
            raise HTTPException(status_code=400, detail=EMAIL_TAKEN)
        raise

@router.post("/login", response_model=TokenRead)
def login(payload: UserLogin, db: Session = Depends(get_db)):
    user = UserRepository(db).get_by_email(payload.email)
    if not user or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=401, detail="invalid credentials")
    return {
        "access_token": create_access_token(user.id, username=user.username),
        "expires_in": int(token_lifetime().total_seconds()),
    }

@router.get("/me", response_model=UserRead)
def me(current_user: User = Depends(get_current_user)):
    return current_user
