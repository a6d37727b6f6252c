"""
User Service API Application Entry Point

FastAPI application setup with routers, middleware, and lifecycle management.

Application Architecture:
=========================
    Middleware:    CORS, exception handlers
    Routers:       Health, Users
    Dependencies:  Database session, services, Keycloak adapter

Lifecycle:
==========
1. Application starts → lifespan startup
2. Database connection verified, Keycloak adapter created
3. Application serves requests
4. Application stops → lifespan shutdown
5. Keycloak client and database connections closed

Usage:
======
    # Run with uvicorn
    uvicorn src.api.main:app --host 0.0.0.0 --port 8081 --reload
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.config.settings import settings
from src.shared.adapters.keycloak_adapter import KeycloakAdapter
from src.shared.db import init_db, close_db
from src.shared.core.logging import logger
from src.api.middleware import setup_exception_handlers
from src.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Startup:
    - Verify the database connection
    - Create the Keycloak adapter shared by all requests

    Shutdown:
    - Close the Keycloak HTTP client
    - Close database connections
    """
    logger.info(
        "Starting user service",
        app_name=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
    )

    await init_db()
    keycloak = KeycloakAdapter()
    app.state.identity_provider = keycloak

    logger.info("User service started successfully")

    yield

    logger.info("Shutting down user service")

    await keycloak.close()
    await close_db()

    logger.info("User service shutdown complete")


def create_application() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description="User accounts and follower/following relationships",
        version=settings.APP_VERSION,
        # Only show docs in development
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    register_routes(app)

    return app


# Create the application instance
app = create_application()
