"""Ownership-scoped task store.

Every function takes the caller's id as the keyword-only ``owner_id`` and
filters on it. A task owned by someone else is reported exactly like a task
that does not exist.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from taskapi.exceptions import NotFound
from taskapi.models.tasks import MAX_ID, Task
from taskapi.models.user import User
from taskapi.schemas.task import TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)

TASK_NOT_FOUND = "Task not found"


async def list_tasks(db: AsyncSession, *, owner_id: int) -> list[Task]:
    result = await db.execute(
        select(Task)
        .filter(Task.user_id == owner_id)
        .order_by(Task.created_at, Task.id)
    )
    return list(result.scalars().all())


async def get_task(db: AsyncSession, task_id: int, *, owner_id: int) -> Task:
    # Ids outside the column's range match nothing
    if not 1 <= task_id <= MAX_ID:
        raise NotFound(TASK_NOT_FOUND)
    result = await db.execute(
        select(Task).filter(Task.id == task_id, Task.user_id == owner_id)
    )
    task = result.scalars().first()
    if not task:
        raise NotFound(TASK_NOT_FOUND)
    return task


async def create_task(db: AsyncSession, task_data: TaskCreate, *, owner_id: int) -> Task:
    # Stale token: refuse rather than write a row pointing at nobody
    if await db.get(User, owner_id) is None:
        raise NotFound("User not found")

    new_task = Task(
        title=task_data.title,
        description=task_data.description,
        user_id=owner_id,
    )
    db.add(new_task)
    await db.commit()
    await db.refresh(new_task)
    logger.info("User id=%s created task id=%s", owner_id, new_task.id)
    return new_task


async def update_task(db: AsyncSession, task_id: int, update_data: TaskUpdate, *, owner_id: int) -> Task:
    task = await get_task(db, task_id, owner_id=owner_id)

    # Allow-list: title and description only
    task.title = update_data.title
    task.description = update_data.description

    await db.commit()
    await db.refresh(task)
    logger.info("User id=%s updated task id=%s", owner_id, task_id)
    return task


async def delete_task(db: AsyncSession, task_id: int, *, owner_id: int) -> None:
    task = await get_task(db, task_id, owner_id=owner_id)
    await db.delete(task)
    await db.commit()
    logger.info("User id=%s deleted task id=%s", owner_id, task_id)
