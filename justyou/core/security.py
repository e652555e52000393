# justyou/core/security.py
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import jwt, JWTError
from pydantic import BaseModel

from justyou.core.config import settings


class TokenData(BaseModel):
    sub: Optional[str] = None
    email: Optional[str] = None


class CurrentUser(BaseModel):
    id: str
    email: Optional[str] = None


def create_access_token(subject: str, email: Optional[str] = None, expires_delta: Optional[timedelta] = None) -> str:
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode = {"sub": subject, "iat": now, "exp": expire}
    if email:
        to_encode["email"] = email
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> TokenData:
    """Raises JWTError on a bad signature, expired token or garbage input."""
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    return TokenData(sub=payload.get("sub"), email=payload.get("email"))


def is_admin(user: CurrentUser) -> bool:
    if not settings.ADMIN_EMAIL or not user.email:
        return False
    return user.email.strip().lower() == settings.ADMIN_EMAIL.strip().lower()


__all__ = ["TokenData", "CurrentUser", "JWTError", "create_access_token", "decode_access_token", "is_admin"]
