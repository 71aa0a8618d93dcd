"""FastAPI dependencies for authentication and settings."""

from typing import Annotated

from fastapi import Depends, Request

from src.config import Settings
from src.errors import UnauthenticatedError
from src.services.auth import AuthState


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings


def get_auth_state(request: Request) -> AuthState:
    """Auth state attached by ``AuthMiddleware``; unauthenticated if missing."""
    return getattr(request.state, "auth", AuthState())


def require_auth(auth: Annotated[AuthState, Depends(get_auth_state)]) -> AuthState:
    """Reject the request unless the middleware authenticated it."""
    if not auth.is_auth:
        raise UnauthenticatedError()
    return auth
