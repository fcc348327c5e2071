# 📄 File: care_scheduler/main.py
#
# 🧭 Purpose (Layman Explanation):
# The control center that starts the care scheduler: it connects to the
# database, plugs in the web endpoints and makes sure errors come back as
# clear messages.
#
# 🧪 Purpose (Technical Summary):
# FastAPI application factory and entry point with logging setup, database
# lifespan management, middleware stack, router registration and the
# PlantCareException handler.
#
# 🔗 Dependencies:
# - FastAPI framework, uvicorn
# - care_scheduler.shared.config.settings
# - care_scheduler.shared.infrastructure.database.session
# - care_scheduler.api (routers and middleware)
#
# 🔄 Connected Modules / Calls From:
# - uvicorn server startup (care_scheduler.main:app)
# - Docker container entry point
# - API tests (create_application)

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from care_scheduler.api.middleware.error_handling import ErrorHandlingMiddleware, error_body
from care_scheduler.api.middleware.logging import RequestLoggingMiddleware
from care_scheduler.api.v1.router import api_v1_router
from care_scheduler.shared.config.settings import get_settings
from care_scheduler.shared.core.exceptions import PlantCareException
from care_scheduler.shared.infrastructure.database.session import close_database, initialize_database
from care_scheduler.shared.utils.logging import log_shutdown_event, log_startup_event, setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Opens the database on startup and closes it on shutdown.
    """
    settings = get_settings()
    setup_logging()
    log_startup_event(settings.APP_NAME, settings.APP_VERSION, extra={'environment': settings.ENVIRONMENT})

    try:
        await initialize_database(create_tables=settings.DB_CREATE_TABLES)
        logger.info("✅ Database connection initialized")
    except Exception as e:
        logger.error(f"❌ Startup failed: {e}")
        raise

    try:
        yield
    finally:
        log_shutdown_event(settings.APP_NAME)
        try:
            await close_database()
            logger.info("✅ Database connections closed")
        except Exception as e:
            logger.error(f"❌ Shutdown error: {e}")


def create_application() -> FastAPI:
    """
    Application factory function.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan,
        debug=settings.DEBUG,
    )

    # =========================================================================
    # MIDDLEWARE CONFIGURATION
    # =========================================================================

    # Added last runs first: error handling wraps everything
    if not settings.is_testing:
        app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    app.add_middleware(ErrorHandlingMiddleware)

    # =========================================================================
    # ROUTER REGISTRATION
    # =========================================================================

    app.include_router(api_v1_router, prefix="/api/v1")

    # =========================================================================
    # EXCEPTION HANDLERS
    # =========================================================================

    @app.exception_handler(PlantCareException)
    async def plant_care_exception_handler(request: Request, exc: PlantCareException) -> JSONResponse:
        """Handle custom care scheduler exceptions."""
        if exc.status_code >= 500:
            logger.error(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(
                exc.error_code,
                exc.message,
                exc.details,
                getattr(request.state, "request_id", None),
            ),
        )

    # =========================================================================
    # ROOT ENDPOINTS
    # =========================================================================

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "description": settings.APP_DESCRIPTION,
            "docs_url": "/docs" if settings.DEBUG else None,
            "health_check": "/api/v1/health",
            "api_base": "/api/v1",
        }

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        return Response(status_code=204)

    return app


app = create_application()


def main():
    """Run the application with uvicorn (development entry point)."""
    settings = get_settings()
    uvicorn.run(
        "care_scheduler.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD and settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
