"""Bearer token registry.

Tokens are signed JWTs carrying ``sub`` (user id), ``jti`` and ``exp``. A token
is only accepted while its ``jti`` has a row in ``access_tokens`` that is
neither expired nor revoked, so logout takes effect immediately even though the
signature would still verify.
"""

import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from taskapi.config import settings
from taskapi.exceptions import Unauthenticated
from taskapi.models.token import AccessToken
from taskapi.schemas.user import Token, TokenData
from taskapi.utils.security import create_access_token, decode_access_token, new_token_id

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class TokenRegistry:
    def __init__(self, secret_key: str, algorithm: str, expire_minutes: int):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = timedelta(minutes=expire_minutes)

    @property
    def expires_in(self) -> int:
        return int(self.expires_delta.total_seconds())

    async def issue(self, db: AsyncSession, user_id: int) -> Token:
        jti = new_token_id()
        access_token, expire = create_access_token(
            data={"sub": str(user_id), "jti": jti},
            expires_delta=self.expires_delta,
            secret_key=self.secret_key,
            algorithm=self.algorithm,
        )
        db.add(AccessToken(id=jti, user_id=user_id, expires_at=expire))
        await db.commit()
        return Token(access_token=access_token, token_type="bearer", expires_in=self.expires_in)

    async def resolve(self, db: AsyncSession, token: str | None) -> TokenData:
        if not token:
            raise Unauthenticated()
        try:
            payload = decode_access_token(token, self.secret_key, self.algorithm)
            jti = payload.get("jti")
            sub = payload.get("sub")
            if jti is None or sub is None:
                raise Unauthenticated()
            user_id = int(sub)
        except (JWTError, ValueError):
            raise Unauthenticated()

        record = await db.get(AccessToken, jti)
        if record is None or record.user_id != user_id:
            raise Unauthenticated()
        if record.revoked_at is not None:
            raise Unauthenticated()
        if _as_utc(record.expires_at) <= datetime.now(timezone.utc):
            raise Unauthenticated()
        return TokenData(user_id=user_id, jti=jti)

    async def revoke(self, db: AsyncSession, jti: str) -> None:
        await db.execute(
            update(AccessToken)
            .where(AccessToken.id == jti, AccessToken.revoked_at.is_(None))
            .values(revoked_at=datetime.now(timezone.utc))
        )

    async def revoke_all(self, db: AsyncSession, user_id: int) -> None:
        await db.execute(
            update(AccessToken)
            .where(AccessToken.user_id == user_id, AccessToken.revoked_at.is_(None))
            .values(revoked_at=datetime.now(timezone.utc))
        )


token_registry = TokenRegistry(
    secret_key=settings.SECRET_KEY,
    algorithm=settings.ALGORITHM,
    expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
)
