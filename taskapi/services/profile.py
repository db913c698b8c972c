import logging

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from taskapi.exceptions import ConflictError, NotFound
from taskapi.models.tasks import Task
from taskapi.models.user import User
from taskapi.schemas.user import UserUpdate
from taskapi.services.auth import EMAIL_TAKEN
from taskapi.services.tokens import TokenRegistry

logger = logging.getLogger(__name__)


async def get_profile(db: AsyncSession, *, user_id: int) -> User:
    # The token can outlive its user, so a miss here is a real case
    user = await db.get(User, user_id)
    if user is None:
        raise NotFound("User not found")
    return user


async def update_profile(db: AsyncSession, update_data: UserUpdate, *, user_id: int) -> User:
    user = await get_profile(db, user_id=user_id)

    result = await db.execute(
        select(User.id).filter(User.email == update_data.email, User.id != user_id)
    )
    if result.scalars().first() is not None:
        raise ConflictError(EMAIL_TAKEN)

    user.name = update_data.name
    user.email = update_data.email
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError(EMAIL_TAKEN)
    await db.refresh(user)
    return user


async def delete_profile(db: AsyncSession, registry: TokenRegistry, *, user_id: int) -> None:
    """Delete the user together with every task they own, and revoke their tokens."""
    user = await get_profile(db, user_id=user_id)

    result = await db.execute(delete(Task).where(Task.user_id == user_id))
    await registry.revoke_all(db, user_id)
    await db.delete(user)
    await db.commit()
    logger.info("Deleted user id=%s and %s task(s)", user_id, result.rowcount)
