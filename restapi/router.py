"""Application configuration and router setup."""

import time
from contextlib import asynccontextmanager

import fastapi
from fastapi.middleware import cors
from fastapi.openapi.utils import get_openapi

from components.core import init_db
from components.core.config import get_settings
from components.core.logging import get_logger, setup_logging
from restapi.endpoints import health_check, investment, operation

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: fastapi.FastAPI):
    """Prepare the database on startup and release it on shutdown."""
    settings = get_settings()
    if settings.DB_CREATE_TABLES:
        await init_db.init_db()
    logger.info("%s started", settings.SERVICE_NAME)
    yield
    await init_db.close_db()


def create_app() -> fastapi.FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)

    app = fastapi.FastAPI(
        title=settings.SERVICE_NAME,
        description="Private lending ledger with simple interest accrual",
        version="1.0.0",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        cors.CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: fastapi.Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s %s %.1fms",
            request.method, request.url.path, response.status_code, elapsed_ms,
        )
        return response

    # Include routers
    app.include_router(health_check.router, prefix="/api")
    app.include_router(investment.router, prefix="/api")
    app.include_router(operation.router, prefix="/api")

    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema
        openapi_schema = get_openapi(
            title=settings.SERVICE_NAME,
            version="1.0.0",
            description="Private lending ledger with simple interest accrual",
            routes=app.routes,
        )
        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi

    return app
