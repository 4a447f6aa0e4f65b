"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.exceptions import InForceError
from .models.errors import ErrorResponse
from .routes import health
from modules.auth.routes import router as auth_router, admin_router
from modules.billing.routes import router as subscription_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    if not settings.jwt_secret:
        logger.warning("JWT_SECRET is not set; sign-in and sessions will fail")
    logger.info(f"Starting SEOInForce API on {settings.host}:{settings.port}")
    yield
    # Shutdown
    logger.info("Shutting down SEOInForce API")


async def handle_app_error(request: Request, exc: InForceError) -> JSONResponse:
    """Expected failures become structured responses with their own status."""
    if exc.status_code >= 500:
        logger.warning(f"{request.method} {request.url.path} failed: {exc.code}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = ErrorResponse(
        error="Invalid request",
        code="validation_error",
        details={"errors": [e.get("msg", "") for e in exc.errors()]},
    )
    return JSONResponse(status_code=400, content=error.model_dump())


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Log everything, tell the client nothing."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    error = ErrorResponse(error="An unexpected error occurred", code="internal_error")
    return JSONResponse(status_code=500, content=error.model_dump())


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title="SEOInForce API",
        description="Identity, session and subscription API for SEOInForce",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Error handling
    app.add_exception_handler(InForceError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(subscription_router, prefix="/api/subscription", tags=["subscription"])
    app.include_router(admin_router, prefix="/api/admin", tags=["admin"])

    return app


# Application instance for uvicorn
app = create_app()
