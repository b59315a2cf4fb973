"""Health check router with a real catalog connectivity probe."""

import asyncio
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from catalog.service import CatalogService
from config.settings import Settings, get_settings
from core.dependencies import get_catalog_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

CHECK_TIMEOUT = 3.0


async def _check_catalog_api(catalog: CatalogService | None) -> str:
    """Ping the OMDb API via the service's own client."""
    if catalog is None:
        return "unavailable"
    return "ok" if await catalog.check_api() else "error"


async def _run_check(coro) -> str:
    """Run a single health check with a timeout."""
    try:
        return await asyncio.wait_for(coro, timeout=CHECK_TIMEOUT)
    except TimeoutError:
        return "timeout"


@router.get(
    "/health",
    summary="Health check",
    responses={
        200: {"description": "Catalog reachable"},
        503: {"description": "Catalog unreachable or not configured"},
    },
)
async def health_check(
    settings: Settings = Depends(get_settings),
    catalog: CatalogService | None = Depends(get_catalog_service),
):
    """Health check with a connectivity probe for the catalog."""
    services = {"catalog_api": await _run_check(_check_catalog_api(catalog))}

    status = "healthy" if services["catalog_api"] == "ok" else "unhealthy"
    if status != "healthy":
        logger.warning(f"Health check failed: {services}")

    body = {
        "status": status,
        "version": settings.app_version,
        "services": services,
    }
    return JSONResponse(content=body, status_code=200 if status == "healthy" else 503)
