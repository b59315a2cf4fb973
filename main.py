"""Movie Search service: FastAPI app serving the search page and its session API."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request

from catalog.router import router as catalog_router
from config.settings import Settings, get_settings
from core.dependencies import (
    close_catalog_service,
    flush_posthog,
    reset_search_session,
    shutdown_posthog,
)
from core.logging import setup_logging
from core.sentry import init_sentry
from routers.health import router as health_router
from search.router import page_router
from search.router import router as search_router
from ui.templates import API_PREFIX

load_dotenv()

LOG_FILE_NAME = "movie-search.log"


def _log_file(settings: Settings) -> Path | None:
    """Console-only in DEBUG; otherwise also write to /app/logs (containers) or ./logs."""
    if settings.log_level.upper() == "DEBUG":
        return None
    log_dir = Path("/app/logs") if Path("/app/logs").exists() else Path("logs")
    return log_dir / LOG_FILE_NAME


def configure_observability(settings: Settings) -> None:
    init_sentry(
        dsn=settings.sentry_dsn,
        environment="development" if settings.log_level.upper() == "DEBUG" else "production",
        release=settings.app_version,
    )
    setup_logging(level=settings.log_level, log_file=_log_file(settings))


settings = get_settings()
configure_observability(settings)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log the catalog configuration on startup; release the session and clients on shutdown."""
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    if settings.omdb_api_key:
        logger.info(
            f"OMDb catalog at {settings.omdb_base_url} "
            f"({settings.catalog_rate_limit} req/min, {settings.catalog_max_concurrent} concurrent)"
        )
    else:
        logger.warning("OMDB_API_KEY not set; search endpoints will answer 503")

    yield

    logger.info("Shutting down application")
    # Closing the session's overlay releases its key listener
    reset_search_session()
    shutdown_posthog()
    await close_catalog_service()
    logger.info("All services shut down")


app = FastAPI(
    title=settings.app_name,
    description="Movie search with concurrently enriched OMDb results",
    version=settings.app_version,
    lifespan=lifespan,
)


@app.middleware("http")
async def posthog_flush_middleware(request: Request, call_next):
    """Flush PostHog events after each request to prevent data loss."""
    response = await call_next(request)
    flush_posthog()
    return response


app.include_router(health_router, tags=["health"])
app.include_router(page_router, tags=["page"])
app.include_router(search_router, prefix=API_PREFIX, tags=["search"])
app.include_router(catalog_router, prefix=API_PREFIX, tags=["catalog"])

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
