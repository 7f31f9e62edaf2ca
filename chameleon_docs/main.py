"""Main FastAPI application."""

import logging
import re
import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .api import (
    analytics_router,
    auth_router,
    pages_router,
    preferences_router,
    projects_router,
    reimagine_router,
    views_router,
)
from .core.config import ConfigurationError, Environment, INSECURE_DEFAULT_SECRET, settings
from .core.logging_config import setup_logging
from .database import DATABASE_URL, SessionLocal, engine, get_db, init_db
from .exceptions import ChameleonException
from .middleware.exception_handler import chameleon_exception_handler
from .middleware.request_context import RequestContextMiddleware
from .middleware.route_guard import RouteGuardMiddleware
from .services import AnalyticsService

VERSION = "1.0.0"

setup_logging(log_level=settings.log_level, log_format=settings.log_format)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Startup validation: fail fast with an actionable message when the database
# cannot be reached.
# ---------------------------------------------------------------------------

def _mask_url(url: str) -> str:
    """Mask the password in a database URL for logging."""
    return re.sub(r'://([^:]+):([^@]+)@', r'://\1:***@', url)


def _validate_database_connection() -> None:
    masked = _mask_url(DATABASE_URL)
    logger.info(f"Connecting to database: {masked}")

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connection verified")
    except SQLAlchemyError as e:
        error_str = str(e)
        if DATABASE_URL.startswith("postgresql"):
            if "could not connect" in error_str or "Connection refused" in error_str:
                hint = "Verify PostgreSQL is running and DATABASE_URL points at it"
            elif "authentication failed" in error_str or "password" in error_str.lower():
                hint = "Check username and password in DATABASE_URL"
            elif "does not exist" in error_str:
                hint = "Create the database: createdb <database_name>"
            else:
                hint = "Check DATABASE_URL in .env or environment variables"
        elif DATABASE_URL.startswith("sqlite"):
            hint = "Check that the directory exists and is writable"
        else:
            hint = "Check DATABASE_URL in .env or environment variables"

        logger.critical(
            "Database connection failed.\n"
            f"  DATABASE_URL: {masked}\n"
            f"  Fix: {hint}\n"
            f"  Error: {error_str}"
        )
        raise SystemExit(1) from e


_validate_database_connection()
init_db()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle."""
    logger.info(f"Environment: {settings.environment.value}")
    try:
        settings.validate_production_config()
    except ConfigurationError as e:
        logger.critical(f"STARTUP BLOCKED: {e}")
        raise SystemExit(1) from e

    if settings.environment == Environment.DEVELOPMENT:
        if settings.jwt_secret_key == INSECURE_DEFAULT_SECRET:
            logger.warning(
                "SECURITY: JWT_SECRET_KEY is the default. "
                "Anyone can forge session tokens. Generate a key: openssl rand -hex 32"
            )
        if not settings.reimagine_api_key:
            logger.warning("REIMAGINE_API_KEY is empty; rewrites rely on provider env vars")

    # Expired page views are also excluded from every query; this just
    # keeps the table small.
    db = SessionLocal()
    try:
        purged = AnalyticsService(db).cleanup_expired()
        if purged > 0:
            logger.info(f"Purged {purged} expired page views")
    except SQLAlchemyError as e:
        logger.warning(f"Page view purge failed (non-fatal): {e}")
    finally:
        db.close()

    yield


app = FastAPI(
    title="Chameleon Docs API",
    description=(
        "Documentation hosting: projects, markdown pages organised into sections, "
        "draft/published state, view analytics and AI rewrites at five reading levels.\n\n"
        "**Authentication:** sign in through `/api/auth/login`. The session token is set "
        "as the `chameleon_session` HTTP-only cookie and may also be sent as a `Bearer` "
        "token in the `Authorization` header."
    ),
    version=VERSION,
    lifespan=lifespan,
)

# Starlette runs the last added middleware first: request context wraps the
# route guard, which wraps CORS.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)
app.add_middleware(RouteGuardMiddleware)
app.add_middleware(RequestContextMiddleware)

app.add_exception_handler(ChameleonException, chameleon_exception_handler)

logger.info(
    "Chameleon Docs API started | env=%s | db=%s | reimagine=%s | cors=%s",
    settings.environment.value,
    "PostgreSQL" if DATABASE_URL.startswith("postgresql") else "SQLite",
    settings.reimagine_model or "disabled",
    ",".join(settings.get_cors_origins()),
)

app.include_router(auth_router)
app.include_router(preferences_router)
app.include_router(projects_router)
app.include_router(pages_router)
app.include_router(analytics_router)
app.include_router(reimagine_router)
app.include_router(views_router)


@app.get("/")
def root():
    return {
        "name": "Chameleon Docs API",
        "version": VERSION,
        "status": "running",
    }


_startup_time = time.monotonic()


@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    """Database status, uptime and page count.

    Never raises: a database failure reports ``degraded`` so load balancers
    can still probe without receiving 5xx.
    """
    db_status = "ok"
    page_count = 0
    try:
        db.execute(text("SELECT 1"))
        page_count = db.execute(text("SELECT COUNT(*) FROM pages")).scalar() or 0
    except SQLAlchemyError:
        db_status = "error"

    return {
        "status": "healthy" if db_status == "ok" else "degraded",
        "db": db_status,
        "uptime_seconds": round(time.monotonic() - _startup_time),
        "version": VERSION,
        "page_count": page_count,
    }
