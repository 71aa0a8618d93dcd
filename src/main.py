"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api import images
from src.api.middleware import AuthMiddleware
from src.config import Settings, get_settings
from src.database import Database
from src.errors import APIError
from src.gql import create_graphql_router
from src.services.image_service import IMAGE_URL_PREFIX

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    settings: Settings = app.state.settings
    settings.upload_dir.mkdir(parents=True, exist_ok=True)
    database = Database(settings.database_url)
    database.create_all()
    app.state.database = database
    logger.info(f"Database ready ({settings.environment})")
    yield
    database.dispose()
    logger.info("Database connections closed")


def error_body(message: str, data=None) -> dict:
    return {"message": message, "data": data}


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as ``{message, data}``."""

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.data))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        data = [
            {"message": err.get("msg", ""), "loc": [str(part) for part in err.get("loc", ())]}
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=422,
            content=error_body("Invalid input.", data),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body("An error occurred."),
        )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application for the given settings."""
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title="Blog API",
        description="GraphQL backend for a blog with image uploads",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Added last so it runs first: preflight requests short-circuit before auth
    app.add_middleware(AuthMiddleware, settings=settings)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["OPTIONS", "GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # Directory is created at startup
    app.mount(
        f"/{IMAGE_URL_PREFIX}",
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name=IMAGE_URL_PREFIX,
    )

    # Register routers
    app.include_router(images.router)
    app.include_router(create_graphql_router(settings), prefix="/graphql")

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "environment": settings.environment}

    @app.options("/{full_path:path}", include_in_schema=False)
    async def options_ok(full_path: str):
        """Answer any OPTIONS request, preflight or not, with 200."""
        return Response(status_code=status.HTTP_200_OK)

    register_exception_handlers(app)
    return app


app = create_app()
