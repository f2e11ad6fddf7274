from passlib.context import CryptContext
import jwt
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any

from config import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def utcnow() -> datetime:
    """Naive UTC at millisecond precision, the form MongoDB hands back."""
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token"""
    to_encode = data.copy()

    if expires_delta:
        expire = utcnow() + expires_delta
    else:
        expire = utcnow() + timedelta(minutes=settings.access_token_expire_minutes)

    to_encode.update({"exp": expire, "iat": utcnow()})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def serialize_user(user) -> dict:
    return {
        "id": user["_id"],
        "username": user.get("username"),
        "email": user.get("email"),
        "created_at": user.get("created_at"),
    }


def serialize_object(obj) -> dict:
    return {
        "id": obj["_id"],
        "name": obj.get("name"),
        "description": obj.get("description"),
        "owner_id": obj.get("owner_id"),
        "created_at": obj.get("created_at"),
    }
