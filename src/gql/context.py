"""Per-request GraphQL context."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session
from strawberry.fastapi import BaseContext

from src.api.dependencies import get_app_settings, get_auth_state
from src.config import Settings
from src.database import get_db
from src.errors import UnauthenticatedError
from src.services.auth import AuthState
from src.services.post_service import PostService
from src.services.user_service import UserService


class GraphQLContext(BaseContext):
    """Database session, settings and auth state for one GraphQL request."""

    def __init__(self, db: Session, settings: Settings, auth: AuthState):
        super().__init__()
        self.db = db
        self.settings = settings
        self.auth = auth

    def require_user_id(self) -> int:
        """User id of the caller, or raise if the request is unauthenticated."""
        if not self.auth.is_auth or self.auth.user_id is None:
            raise UnauthenticatedError()
        return self.auth.user_id

    @property
    def posts(self) -> PostService:
        return PostService(self.db, self.settings.upload_dir)

    @property
    def users(self) -> UserService:
        return UserService(self.db)


async def get_context(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    auth: Annotated[AuthState, Depends(get_auth_state)],
) -> GraphQLContext:
    return GraphQLContext(db, settings, auth)
