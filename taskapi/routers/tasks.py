from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskapi.dependencies import get_db, get_current_identity
from taskapi.schemas.task import TaskCreate, TaskEnvelope, TaskList, TaskUpdate
from taskapi.schemas.user import MessageResponse, TokenData
from taskapi.services import tasks as task_service

router = APIRouter(prefix="/tasks", tags=["Tasks"])

@router.get("", response_model=TaskList)
async def list_tasks(
    db: AsyncSession = Depends(get_db),
    identity: TokenData = Depends(get_current_identity),
):
    tasks = await task_service.list_tasks(db, owner_id=identity.user_id)
    return {"tasks": tasks}

@router.post("", response_model=TaskEnvelope, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_data: TaskCreate,
    db: AsyncSession = Depends(get_db),
    identity: TokenData = Depends(get_current_identity),
):
    task = await task_service.create_task(db, task_data, owner_id=identity.user_id)
    return {"task": task}

@router.get("/{task_id}", response_model=TaskEnvelope)
async def get_task(
    task_id: int,
    db: AsyncSession = Depends(get_db),
    identity: TokenData = Depends(get_current_identity),
):
    task = await task_service.get_task(db, task_id, owner_id=identity.user_id)
    return {"task": task}

@router.put("/{task_id}", response_model=TaskEnvelope)
async def update_task(
    task_id: int,
    update_data: TaskUpdate,
    db: AsyncSession = Depends(get_db),
    identity: TokenData = Depends(get_current_identity),
):
    task = await task_service.update_task(db, task_id, update_data, owner_id=identity.user_id)
    return {"task": task}

@router.delete("/{task_id}", response_model=MessageResponse)
async def delete_task(
    task_id: int,
    db: AsyncSession = Depends(get_db),
    identity: TokenData = Depends(get_current_identity),
):
    await task_service.delete_task(db, task_id, owner_id=identity.user_id)
    return {"message": "Task deleted"}
