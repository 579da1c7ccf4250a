"""
Primary FastAPI application entry point
"""
import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from movie_portal.api.api import api_router
from movie_portal.api.deps import close_store, initialize_store
from movie_portal.core.config import settings
from movie_portal.models.common import ErrorResponse

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)

LIVENESS_MESSAGE = "Movie Portal Server is running"

# Define application lifespan
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup is unguarded: a store that cannot connect stops the server
    logger.info("Application startup: Initializing store...")
    app.state.store = await initialize_store()
    yield
    logger.info("Application shutdown: Closing store...")
    close_store(app.state.store)
    app.state.store = None


def register_exception_handlers(app: FastAPI) -> None:
    """Renders every error as {"success": false, "message": ...}."""

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(message=str(exc.detail)).model_dump(),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        logger.warning(f"Request validation failed for {request.url.path}: {errors}")
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"Invalid request: {location} {first.get('msg', '')}".strip()
        return JSONResponse(
            status_code=422,
            content=ErrorResponse(message=message).model_dump(),
        )


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router)

    # Root endpoint
    @app.get("/", response_class=PlainTextResponse, status_code=status.HTTP_200_OK)
    async def root():
        """Root endpoint to confirm the API is running."""
        return LIVENESS_MESSAGE

    return app


app = create_app()


def main() -> None:
    import uvicorn

    logger.info(f"{LIVENESS_MESSAGE} on port: {settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


# For local development
if __name__ == "__main__":
    main()
