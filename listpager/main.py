"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from listpager.api.handlers import list_pager_exception_handler
from listpager.api.router import api_router
from listpager.config import get_settings
from listpager.core.logger import setup_logging
from listpager.database import engine
from listpager.exceptions import ListPagerError

settings = get_settings()

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    logger.info(f"Starting {settings.app_name} in {settings.environment} mode")
    yield
    logger.info(f"Shutting down {settings.app_name}")
    engine.dispose()


app = FastAPI(
    title=settings.app_name,
    description="Paged, filtered list endpoints backed by bounded range queries",
    version="0.1.0",
    debug=settings.debug,
    lifespan=lifespan,
    docs_url="/api/docs" if not settings.is_production else None,
    redoc_url="/api/redoc" if not settings.is_production else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(ListPagerError, list_pager_exception_handler)

app.include_router(api_router, prefix="/api")


@app.get("/health")
async def health_check():
    """Health check endpoint for load balancers."""
    return {"status": "healthy", "environment": settings.environment}
