"""FastAPI application entry point."""

import uuid
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

import mealplanner.models  # noqa: F401  registers tables on Base.metadata
from mealplanner.config import get_settings
from mealplanner.database import Base, async_engine
from mealplanner.logging_config import LoggingContext, configure_logging, get_logger
from mealplanner.routers import (
    grocery_lists_router,
    ingredients_router,
    meal_plans_router,
    recipes_router,
)

settings = get_settings()

# Configure logging on module load
configure_logging(settings.log_level, json_format=settings.json_logs)
logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info("Starting Mealplanner API")

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialized")

    yield

    logger.info("Shutting down Mealplanner API")
    await async_engine.dispose()


app = FastAPI(
    title="Mealplanner API",
    description="Household recipes, weekly meal plans and grocery lists",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Tag every log record of a request with its id and echo the id back."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    with LoggingContext(request_id=request_id):
        response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


app.include_router(recipes_router)
app.include_router(meal_plans_router)
app.include_router(grocery_lists_router)
app.include_router(ingredients_router)


@app.get("/health")
async def health_check() -> dict:
    """Basic health check endpoint."""
    return {"status": "ok", "service": "mealplanner-api"}


@app.get("/")
async def root() -> dict:
    """Root endpoint with API information."""
    return {
        "name": "Mealplanner API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
    }
