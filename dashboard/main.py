# SmartStay Dashboard - API Server
# Copyright (c) 2026 SmartStay. All Rights Reserved.

"""
SmartStay Dashboard API - Main Application

FastAPI application entry point that provides:
- Hotel branding, link directory, activities and account endpoints
- Bearer token authentication (auth provider access tokens)
- Request logging and per-user write rate limiting
- OpenAPI documentation at /api/docs

Usage:
    # Development
    uvicorn dashboard.main:app --reload --port 8000

    # Production
    uvicorn dashboard.main:app --host 0.0.0.0 --port 8000
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text

from dashboard.config import get_api_settings, load_yaml_config
from dashboard.database import engine, init_db
from dashboard.dependencies import reset_dependencies
from dashboard.exceptions import AuthRequiredError, DashboardError
from dashboard.middleware import RequestLoggingMiddleware
from dashboard.middleware.rate_limit import limiter, rate_limit_exceeded_handler
from dashboard.routers import (
    account_router,
    activities_router,
    hotel_router,
    links_router,
    overview_router,
)
from dashboard.schemas.forms import collect_field_errors
from dashboard.schemas.responses import ErrorResponse, HealthResponse
from dashboard.utils import setup_logger

# Load settings
settings = get_api_settings()

# Package logger; dashboard.* module loggers propagate here
logger = setup_logger("dashboard", level=settings.log_level, log_to_file=settings.log_to_file)


def _check_pending_migrations():
    """
    Check for pending Alembic migrations on startup.

    Logs a warning if the database schema is not up to date.
    Does not block startup - just warns the administrator.
    """
    try:
        from alembic.config import Config
        from alembic.runtime.migration import MigrationContext
        from alembic.script import ScriptDirectory

        alembic_cfg = Config("alembic.ini")
        script = ScriptDirectory.from_config(alembic_cfg)

        with engine.connect() as conn:
            context = MigrationContext.configure(conn)
            current_rev = context.get_current_revision()

        head_rev = script.get_current_head()

        if current_rev is None:
            logger.warning(
                "Database is not tracked by Alembic. Stamp an existing database with "
                "'alembic stamp head' or create a new one with 'alembic upgrade head'"
            )
        elif current_rev != head_rev:
            logger.warning(
                f"Pending database migrations (current: {current_rev}, latest: {head_rev}). "
                "Run 'alembic upgrade head'"
            )
        else:
            logger.info(f"Database schema is up to date (revision: {current_rev})")

    except Exception as e:
        # Don't fail startup on migration check errors
        logger.warning(f"Could not check migrations: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager

    Handles startup and shutdown events:
    - Startup: Load config, create tables, check migrations
    - Shutdown: Drop editor sessions
    """
    logger.info(f"Starting {settings.api_title} v{settings.api_version}")

    app.state.yaml_config = load_yaml_config()

    init_db()
    app.state.app_db_connected = True

    _check_pending_migrations()

    yield

    logger.info("Shutting down SmartStay Dashboard API...")
    reset_dependencies()


# Create FastAPI application
app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    description="""
## SmartStay Dashboard API

Administration API behind the hotel guest portal.

### Features
- **Branding**: Hotel name, colors, logo and contact details
- **Links**: Ordered guest-portal link directory with drag-and-drop reordering
- **Activities**: Weather-based recommendations
- **Account**: Profile settings

### Authentication
All endpoints require the access token from the sign-in provider.

```
Authorization: Bearer <access token>
```
    """,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

# Add rate limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add request logging middleware
app.add_middleware(RequestLoggingMiddleware)


@app.exception_handler(DashboardError)
async def dashboard_error_handler(request: Request, exc: DashboardError) -> JSONResponse:
    """Render any reported dashboard failure as an ErrorResponse"""
    redirect_to = exc.redirect_to if isinstance(exc, AuthRequiredError) else None
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthRequiredError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=exc.message,
            code=exc.code,
            details=exc.details(),
            request_id=getattr(request.state, "request_id", None),
            redirect_to=redirect_to,
        ).model_dump(),
        headers=headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request body/query validation failures with field-level details"""
    details = [{**error, "code": "validation_error"} for error in collect_field_errors(exc.errors())]
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=ErrorResponse(
            error="Validation failed",
            code="validation_error",
            details=details,
            request_id=getattr(request.state, "request_id", None),
        ).model_dump(),
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions"""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error="Internal server error",
            details=[{"message": str(exc)}] if settings.debug else None,
            request_id=getattr(request.state, "request_id", None),
        ).model_dump(),
    )


# Health check endpoint
@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["System"],
    summary="Health check",
    description="Check API health and app database connectivity",
)
async def health_check() -> HealthResponse:
    """
    Health check endpoint

    Returns the API version and whether the app database answers a query.
    """
    app_db_connected = False
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        app_db_connected = True
    except Exception as e:
        logger.warning(f"Health check could not reach the database: {e}")

    return HealthResponse(
        status="healthy" if app_db_connected else "degraded",
        version=settings.api_version,
        app_db_connected=app_db_connected,
    )


# Root endpoint
@app.get("/", tags=["System"], summary="API Info")
async def root():
    """API root - returns basic API information"""
    return {
        "name": settings.api_title,
        "version": settings.api_version,
        "docs": "/api/docs",
        "health": "/health",
    }


# Include routers
app.include_router(overview_router, prefix=f"{settings.api_prefix}/dashboard", tags=["Overview"])
app.include_router(hotel_router, prefix=f"{settings.api_prefix}/hotel", tags=["Branding"])
app.include_router(links_router, prefix=f"{settings.api_prefix}/links", tags=["Links"])
app.include_router(activities_router, prefix=f"{settings.api_prefix}/activities", tags=["Activities"])
app.include_router(account_router, prefix=f"{settings.api_prefix}/account", tags=["Account"])


def run() -> None:
    """Console entry point (smartstay-dashboard)"""
    import uvicorn

    uvicorn.run(
        "dashboard.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


# Entry point for running directly
if __name__ == "__main__":
    run()
