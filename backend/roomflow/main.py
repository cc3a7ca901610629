"""
Roomflow - Main Application Entry Point

Room phase tracking for interior design projects.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from roomflow.core.config import get_settings
from roomflow.core.exceptions import (
    AuthenticationError,
    DuplicateError,
    NotFoundError,
    RoomflowError,
)
from roomflow.core.logger import setup_logger

logger = setup_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup
    settings = get_settings()
    logger.info("Starting Roomflow in %s mode...", settings.ENVIRONMENT)

    if settings.is_local:
        from roomflow.infrastructure.local.database import init_db

        await init_db()

    yield

    # Shutdown
    logger.info("Shutting down Roomflow...")


def _status_for(exc: RoomflowError) -> int:
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, DuplicateError):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, AuthenticationError):
        return status.HTTP_401_UNAUTHORIZED
    return status.HTTP_400_BAD_REQUEST


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Roomflow",
        description="Room phase tracking for interior design projects",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RoomflowError)
    async def roomflow_error_handler(request: Request, exc: RoomflowError):
        status_code = _status_for(exc)
        if status_code == status.HTTP_400_BAD_REQUEST:
            logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = first.get("msg", "Invalid request")
        return JSONResponse(
            status_code=422,
            content={"error": f"{location}: {message}" if location else message},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    # Include routers
    from roomflow.api import notifications, rooms, stages, team

    app.include_router(rooms.router, prefix="/api/rooms", tags=["rooms"])
    app.include_router(stages.router, prefix="/api/stages", tags=["stages"])
    app.include_router(team.router, prefix="/api/team", tags=["team"])
    app.include_router(notifications.router, prefix="/api/notifications", tags=["notifications"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "environment": settings.ENVIRONMENT,
            "version": "0.1.0"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "roomflow.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
