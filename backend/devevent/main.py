"""
DevEvent API - Main Application Entry Point

Persistence layer for events and bookings:
- Write interceptors validate and normalize every record before storage
- Slug uniqueness enforced by a unique index in the document store
- Application-side referential integrity for bookings
- Structured logging with request correlation
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from devevent.core.config import get_settings
from devevent.core.logging import setup_logging, get_logger
from devevent.core.metrics import metrics_endpoint
from devevent.api.errors import register_exception_handlers
from devevent.api.router import api_router
from devevent.api.middleware import RequestLoggingMiddleware
from devevent.services.store_factory import close_store, ensure_indexes, get_store

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup and shutdown hooks."""
    setup_logging()
    logger = get_logger(__name__)

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        store=settings.STORE_BACKEND,
    )

    await ensure_indexes(get_store())
    logger.info("store_ready")

    yield

    await close_store()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Event and booking persistence with write-time validation",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)
app.include_router(api_router)


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for Docker and load balancers."""
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "store": settings.STORE_BACKEND,
    }


@app.get("/metrics", tags=["Health"])
def metrics():
    return metrics_endpoint()
