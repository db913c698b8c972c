from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from taskapi.database import Base


class AccessToken(Base):
    """Registry of issued bearer tokens, keyed by the JWT ``jti`` claim.

    No foreign key into ``users``: a user's rows are revoked explicitly when
    the user is deleted.
    """
    __tablename__ = "access_tokens"

    id = Column(String(64), primary_key=True)
    user_id = Column(Integer, nullable=False, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    revoked_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
