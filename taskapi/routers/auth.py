from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from taskapi.dependencies import get_db, get_current_identity, get_token_registry
from taskapi.schemas.user import (
    LoginRequest, MessageResponse, Token, TokenData, UserCreate, UserEnvelope,
)
from taskapi.services import auth as auth_service
from taskapi.services.tokens import TokenRegistry

router = APIRouter(tags=["Authentication"])

@router.post("/register", response_model=UserEnvelope, status_code=status.HTTP_201_CREATED)
async def register(user: UserCreate, db: AsyncSession = Depends(get_db)):
    new_user = await auth_service.register(db, user)
    return {"user": new_user}

@router.post("/login", response_model=Token)
async def login(
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db),
    registry: TokenRegistry = Depends(get_token_registry),
):
    return await auth_service.login(db, registry, credentials)

@router.post("/logout", response_model=MessageResponse)
async def logout(
    db: AsyncSession = Depends(get_db),
    registry: TokenRegistry = Depends(get_token_registry),
    identity: TokenData = Depends(get_current_identity),
):
    await auth_service.logout(db, registry, identity)
    return {"message": "Successfully logged out"}
