from datetime import datetime, timedelta, timezone

from jose import jwt
from passlib.context import CryptContext

from fitgoals.core.config import settings

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_minutes: int | None = None) -> str:
    to_encode = dict(data)
    minutes = expires_minutes if expires_minutes is not None else settings.access_token_expire_minutes
    to_encode["exp"] = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> dict:
    """Raises jose.JWTError on bad signature or expiry."""
    return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
