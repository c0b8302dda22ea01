import uuid
from datetime import datetime, timedelta, timezone

from jose import jwt
from passlib.context import CryptContext

from workout_api.config import settings

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Stored digest is not a recognised hash.
        return False


def create_access_token(
    user_id: uuid.UUID,
    admin: bool = False,
    expires_delta: timedelta | None = None,
) -> str:
    """Sign a token carrying the user's id and admin flag.

    ``expires_delta`` overrides ``ACCESS_TOKEN_EXPIRE_MINUTES``; when neither
    yields a positive lifetime the token has no ``exp`` claim.
    """
    now = datetime.now(timezone.utc)
    to_encode: dict = {"_id": str(user_id), "admin": bool(admin), "iat": now}
    if expires_delta is None and settings.ACCESS_TOKEN_EXPIRE_MINUTES > 0:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    if expires_delta is not None:
        to_encode["exp"] = now + expires_delta
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Verify signature and expiry; raises ``jose.JWTError`` on failure."""
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
