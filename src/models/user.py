"""User model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin

DEFAULT_STATUS = "I am new!"


class User(Base, TimestampMixin):
    """User model for authentication and post ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    status = Column(String(500), nullable=False, default=DEFAULT_STATUS)

    # Relationships
    posts = relationship(
        "Post",
        back_populates="creator",
        cascade="all, delete-orphan",
        order_by="Post.created_at",
    )
