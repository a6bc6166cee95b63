"""Password hashing and bearer tokens."""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from passlib.context import CryptContext
from jose import jwt
from jose.exceptions import JWTError
from gymapp.settings import get_settings

pwd_ctx = CryptContext(schemes=["bcrypt"], deprecated="auto")

def hash_password(p: str) -> str:
    return pwd_ctx.hash(p)

def verify_password(plain: str, hashed: Optional[str]) -> bool:
    return bool(hashed) and pwd_ctx.verify(plain, hashed)

def token_lifetime(expires_minutes: Optional[int] = None) -> timedelta:
    minutes = get_settings().ACCESS_TOKEN_EXPIRE_MINUTES if expires_minutes is None else expires_minutes
    return timedelta(minutes=minutes)

def create_access_token(
    user_id: int | str,
    *,
    username: Optional[str] = None,
    expires_minutes: Optional[int] = None,
) -> str:
    s = get_settings()
    now = datetime.now(timezone.utc)
    payload: Dict[str, Any] = {
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": int((now + token_lifetime(expires_minutes)).timestamp()),
    }
    if username:
        payload["username"] = username
    return jwt.encode(payload, s.SECRET_KEY, algorithm=s.ALGORITHM)

def decode_token(token: str) -> Dict[str, Any]:
    """
    Verify signature and expiration. Raise if token is expired/invalid.
    """
    s = get_settings()
    payload = jwt.decode(token, s.SECRET_KEY, algorithms=[s.ALGORITHM])
    if "exp" not in payload:
        raise JWTError("Missing exp")
    return payload

def user_id_from_token(token: str) -> int:
    """
    The user id a token was issued for. Raises ``JWTError`` for bad or
    expired tokens and ``ValueError`` for a subject that is not an id.
    """
    sub = decode_token(token).get("sub")
    if sub is None:
        raise JWTError("Missing sub")
    return int(sub)
