"""User profile service."""

import logging

from sqlalchemy.orm import Session

from src.errors import NotFoundError
from src.models.user import User

logger = logging.getLogger(__name__)


class UserService:
    """Service for reading and updating the signed-in user's profile."""

    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found.")
        return user

    def update_status(self, user_id: int, status: str) -> User:
        """Replace the user's free-text status."""
        user = self.get_user(user_id)
        user.status = status
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"User {user_id} updated status")
        return user
