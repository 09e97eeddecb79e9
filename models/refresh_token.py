"""
RefreshToken model: one row per refresh token handed out at login.
Fields:
- token (the signed token string, unique) - a token belongs to at most one user
- user_id (String(36)) - FK to users.id
- expires_at - copied from the token's exp claim, used by the prune command
"""
from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from models.base_model import BaseModel, Base


class RefreshToken(BaseModel, Base):
    __tablename__ = "refresh_tokens"

    token = Column(Text, nullable=False, unique=True, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=True)

    user = relationship("User", back_populates="refresh_tokens")

    def __repr__(self):
        # never render the token itself
        return f"<RefreshToken id={self.id} user_id={self.user_id}>"
