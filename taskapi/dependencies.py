from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession
from taskapi.database import get_db as db_session
from taskapi.schemas.user import TokenData
from taskapi.services.tokens import TokenRegistry, token_registry

# auto_error=False so a missing header reaches get_current_identity and gets our 401 body
bearer_scheme = HTTPBearer(auto_error=False)

def get_db(db: AsyncSession = Depends(db_session)):
    return db

def get_token_registry() -> TokenRegistry:
    return token_registry

async def get_current_identity(
    db: AsyncSession = Depends(get_db),
    registry: TokenRegistry = Depends(get_token_registry),
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> TokenData:
    token = credentials.credentials if credentials else None
    return await registry.resolve(db, token)
