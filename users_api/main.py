"""
FastAPI application and entry point.

This module creates and configures the FastAPI application:
  1. Lifespan manager — handles startup/shutdown (DB table creation, cleanup)
  2. CORS middleware — allows browser clients to make cross-origin requests
  3. Exception handlers — maps domain errors to HTTP responses
  4. Router registration — mounts the /users endpoints

Running locally:
    python -m users_api
or, with auto-reload during development:
    uvicorn users_api.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from users_api import models  # noqa: F401  (registers tables on Base.metadata)
from users_api.config import settings
from users_api.database import engine, Base
from users_api.exceptions import register_exception_handlers
from users_api.logging_config import setup_logging
from users_api.routers import users

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
      Creates all database tables if they don't exist.

    Shutdown:
      Disposes of the database engine, closing all connections cleanly.
    """
    # --- Startup ---
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("%s %s started", settings.APP_NAME, settings.APP_VERSION)
    yield
    # --- Shutdown ---
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="User account management: create, list, fetch, update and remove users",
    lifespan=lifespan,
)

# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

register_exception_handlers(app)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

app.include_router(users.router, prefix="/users", tags=["Users"])


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------

@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for load balancers and orchestrators."""
    return {"status": "ok", "version": settings.APP_VERSION}


def run() -> None:
    """Serve the app with uvicorn on HOST:PORT."""
    setup_logging(settings)
    logger.info("Server is listening on port %s", settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)
