"""Main FastAPI application."""

from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from api.routes import router
from config.settings import settings
from models.database import Database
from models.repository import ExerciseStore, MongoExerciseStore
from services.errors import ExerciseTrackerError
from utils.logger import setup_logger

logger = setup_logger(__name__)


def error_body(message: str) -> dict:
    """Shape shared by every error response."""
    return {"error": message}


def first_validation_message(exc: RequestValidationError) -> str:
    """Report only the first validation problem, phrased for people."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    error = errors[0]
    field = str(error.get("loc", ["request"])[-1])
    if error.get("type") == "missing":
        return f"{field} is required"
    message = str(error.get("msg", "Invalid value"))
    return message.removeprefix("Value error, ")


async def exercise_tracker_error_handler(request: Request, exc: ExerciseTrackerError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc)
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))


async def validation_error_handler(request: Request, exc: RequestValidationError):
    message = first_validation_message(exc)
    logger.info(f"{request.method} {request.url.path} invalid: {message}")
    return JSONResponse(status_code=400, content=error_body(message))


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content=error_body(str(exc.detail)))


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content=error_body("Internal Server Error"))


def create_app(store: Optional[ExerciseStore] = None) -> FastAPI:
    """Build the application.

    Args:
        store: Storage to serve from. When omitted, a MongoDB connection is
            opened at startup and closed at shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for startup/shutdown events."""
        # Startup
        logger.info("Starting application...")
        database = None
        if store is None:
            database = await Database(settings.mongodb_url).connect()
            app.state.store = MongoExerciseStore(database)
        else:
            app.state.store = store
        logger.info("Application started successfully")

        try:
            yield
        finally:
            # Shutdown
            logger.info("Shutting down application...")
            if database is not None:
                await database.close()
            logger.info("Application shut down")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Register users, log exercises and query exercise history",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ExerciseTrackerError, exercise_tracker_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "service": settings.app_name
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
