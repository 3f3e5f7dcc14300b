"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from freshkeep.api import ingredients, products
from freshkeep.config import get_settings
from freshkeep.database import init_db
from freshkeep.services.errors import FreshnessError, InvalidOperation, NotFound, ValidationError

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    # Startup: make sure the tables exist
    init_db()
    yield


app = FastAPI(
    title="Freshkeep API",
    description="Kitchen ingredient tracking with expiration and ripeness rules",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://localhost:8081",
            "http://localhost:19006",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

ERROR_STATUS_CODES: dict[type[FreshnessError], int] = {
    ValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    InvalidOperation: status.HTTP_409_CONFLICT,
    NotFound: status.HTTP_404_NOT_FOUND,
}


@app.exception_handler(FreshnessError)
async def freshness_error_handler(request: Request, exc: FreshnessError):
    """Turn ingredient errors into JSON responses the client can show to the user."""
    status_code = ERROR_STATUS_CODES.get(type(exc), status.HTTP_400_BAD_REQUEST)
    logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


# Register routers
app.include_router(ingredients.router)
app.include_router(products.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
