# gymapp/deps/auth.py
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from jose.exceptions import ExpiredSignatureError, JWTError

from gymapp.db import get_db
from gymapp.fitness.active_workout import ActiveWorkout
from gymapp.models import User
from gymapp.security import user_id_from_token
from gymapp.services.billing import get_subscription_info

# Exposes Bearer auth in Swagger; login endpoint issues the token
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")

def _unauthorized(detail: str = "Not authenticated") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )

def get_current_user(
    db: Session = Depends(get_db),
    token: str = Depends(oauth2_scheme),
) -> User:
    try:
        user = db.get(User, user_id_from_token(token))
    except ExpiredSignatureError:
        raise _unauthorized("Token expired")
    except (JWTError, ValueError):
        raise _unauthorized()
    if user is None:
        raise _unauthorized()
    return user

def require_premium(current_user: User = Depends(get_current_user)) -> User:
    """
    Usage: current = Depends(require_premium)
    """
    if not get_subscription_info(current_user).is_premium:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"message": "Premium subscription required", "requires_upgrade": True},
        )
    return current_user

def get_active_workout(request: Request, current_user: User = Depends(get_current_user)) -> ActiveWorkout:
    """The caller's in-progress workout, held by the app-wide registry."""
    return request.app.state.workouts.get(current_user.id)
