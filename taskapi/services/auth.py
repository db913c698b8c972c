import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from taskapi.exceptions import ConflictError, Unauthorized
from taskapi.models.user import User
from taskapi.schemas.user import LoginRequest, Token, TokenData, UserCreate
from taskapi.services.tokens import TokenRegistry
from taskapi.utils.security import get_password_hash, verify_password

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "The email has already been taken."


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).filter(User.email == email))
    return result.scalars().first()


async def register(db: AsyncSession, user_data: UserCreate) -> User:
    if await get_user_by_email(db, user_data.email) is not None:
        raise ConflictError(EMAIL_TAKEN)

    new_user = User(
        name=user_data.name,
        email=user_data.email,
        password_hash=get_password_hash(user_data.password),
    )
    db.add(new_user)
    try:
        await db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        await db.rollback()
        raise ConflictError(EMAIL_TAKEN)
    await db.refresh(new_user)
    logger.info("Registered user id=%s", new_user.id)
    return new_user


async def login(db: AsyncSession, registry: TokenRegistry, credentials: LoginRequest) -> Token:
    user = await get_user_by_email(db, credentials.email)
    if not user or not verify_password(credentials.password, user.password_hash):
        logger.warning("Failed login attempt")
        raise Unauthorized()

    token = await registry.issue(db, user.id)
    logger.info("User id=%s logged in", user.id)
    return token


async def logout(db: AsyncSession, registry: TokenRegistry, identity: TokenData) -> None:
    await registry.revoke(db, identity.jti)
    await db.commit()
    logger.info("User id=%s logged out", identity.user_id)
