from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from taskapi.dependencies import get_db, get_current_identity, get_token_registry
from taskapi.schemas.user import MessageResponse, TokenData, UserEnvelope, UserUpdate
from taskapi.services import profile as profile_service
from taskapi.services.tokens import TokenRegistry

router = APIRouter(prefix="/profile", tags=["User Profile"])

@router.get("", response_model=UserEnvelope)
async def show_profile(
    db: AsyncSession = Depends(get_db),
    identity: TokenData = Depends(get_current_identity),
):
    user = await profile_service.get_profile(db, user_id=identity.user_id)
    return {"user": user}

@router.put("", response_model=UserEnvelope)
async def update_profile(
    update_data: UserUpdate,
    db: AsyncSession = Depends(get_db),
    identity: TokenData = Depends(get_current_identity),
):
    user = await profile_service.update_profile(db, update_data, user_id=identity.user_id)
    return {"user": user}

@router.delete("", response_model=MessageResponse)
async def delete_profile(
    db: AsyncSession = Depends(get_db),
    registry: TokenRegistry = Depends(get_token_registry),
    identity: TokenData = Depends(get_current_identity),
):
    await profile_service.delete_profile(db, registry, user_id=identity.user_id)
    return {"message": "User deleted"}
