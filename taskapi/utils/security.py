import uuid
from datetime import datetime, timedelta, timezone

from jose import jwt
from passlib.context import CryptContext

from taskapi.config import settings

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def new_token_id() -> str:
    return uuid.uuid4().hex


def create_access_token(
    data: dict,
    expires_delta: timedelta,
    secret_key: str = settings.SECRET_KEY,
    algorithm: str = settings.ALGORITHM,
) -> tuple[str, datetime]:
    """Sign ``data`` as a JWT. Returns the encoded token and its expiry (UTC)."""
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode = dict(data, exp=expire)
    return jwt.encode(to_encode, secret_key, algorithm=algorithm), expire


def decode_access_token(
    token: str,
    secret_key: str = settings.SECRET_KEY,
    algorithm: str = settings.ALGORITHM,
) -> dict:
    """Verify signature and expiry. Raises ``jose.JWTError`` on any failure."""
    return jwt.decode(token, secret_key, algorithms=[algorithm])
