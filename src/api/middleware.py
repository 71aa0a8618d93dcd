"""Request middleware."""

import logging

from starlette.types import ASGIApp, Receive, Scope, Send

from src.config import Settings
from src.services.auth import resolve_auth_header

logger = logging.getLogger(__name__)


class AuthMiddleware:
    """Attach an ``AuthState`` to every HTTP request as ``request.state.auth``.

    Requests are never rejected here. Routes and resolvers decide whether
    an unauthenticated caller may proceed.
    """

    def __init__(self, app: ASGIApp, settings: Settings):
        self.app = app
        self.settings = settings

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            authorization = None
            for name, value in scope.get("headers", []):
                if name == b"authorization":
                    authorization = value.decode("latin-1")
                    break

            auth = resolve_auth_header(authorization, self.settings)
            if authorization and not auth.is_auth:
                logger.debug(f"Ignoring invalid credentials on {scope.get('path')}")
            scope.setdefault("state", {})["auth"] = auth

        await self.app(scope, receive, send)
