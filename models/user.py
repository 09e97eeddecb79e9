from models.base_model import Base, BaseModel
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship


class User(BaseModel, Base):
    __tablename__ = "users"
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)

    refresh_tokens = relationship(
        "RefreshToken",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def refresh_token_set(self) -> set[str]:
        """Currently active refresh token strings issued to this user."""
        return {rt.token for rt in self.refresh_tokens}

    def __repr__(self):
        return f"<User username={self.username}>"
