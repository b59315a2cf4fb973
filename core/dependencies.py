"""FastAPI dependency injection providers."""

import logging

from fastapi import Depends, HTTPException
from posthog import Posthog

from catalog.service import CatalogService
from config.settings import Settings, get_settings
from search.session import SearchSession

logger = logging.getLogger(__name__)

# Module-level instances for lifecycle management
_catalog_service: CatalogService | None = None
_search_session: SearchSession | None = None
_posthog_client: Posthog | None = None


def get_catalog_service(settings: Settings = Depends(get_settings)) -> CatalogService | None:
    """Get the OMDb catalog client.

    Args:
        settings: Application settings

    Returns:
        Optional[CatalogService]: Catalog client if an API key is configured, None otherwise
    """
    global _catalog_service

    if not settings.omdb_api_key:
        logger.debug("OMDB_API_KEY not set - catalog service disabled")
        return None

    if _catalog_service is None:
        _catalog_service = CatalogService(
            settings.omdb_api_key,
            base_url=settings.omdb_base_url,
            timeout=settings.omdb_timeout,
        )
        logger.info(f"Catalog service initialized ({settings.omdb_base_url})")

    return _catalog_service


async def close_catalog_service() -> None:
    """Close the catalog client's HTTP connection pool."""
    global _catalog_service
    if _catalog_service:
        await _catalog_service.close()
        _catalog_service = None


def get_posthog_client(settings: Settings = Depends(get_settings)) -> Posthog | None:
    """Get PostHog client instance.

    Args:
        settings: Application settings

    Returns:
        Optional[Posthog]: PostHog client if configured and enabled, None otherwise
    """
    global _posthog_client

    if not settings.enable_telemetry:
        logger.debug("Telemetry disabled")
        return None

    if not settings.posthog_api_key:
        logger.debug("POSTHOG_API_KEY not set - telemetry disabled")
        return None

    if _posthog_client is None:
        _posthog_client = Posthog(
            project_api_key=settings.posthog_api_key,
            host=settings.posthog_host,
        )
        logger.info(f"PostHog client initialized (host: {settings.posthog_host})")

    return _posthog_client


def get_search_session(
    settings: Settings = Depends(get_settings),
    catalog: CatalogService | None = Depends(get_catalog_service),
    posthog_client: Posthog | None = Depends(get_posthog_client),
) -> SearchSession:
    """Get the process-wide search session.

    Raises:
        HTTPException: 503 when no catalog is configured
    """
    global _search_session

    if _search_session is None:
        if catalog is None:
            raise HTTPException(
                status_code=503,
                detail="Catalog service is not configured. Set OMDB_API_KEY environment variable.",
            )
        _search_session = SearchSession.from_settings(catalog, settings, posthog_client)
        logger.info("Search session created")

    return _search_session


def reset_search_session() -> None:
    """Drop the search session; the next request starts a fresh one."""
    global _search_session
    if _search_session is not None:
        _search_session.overlay.close()
        _search_session = None


def flush_posthog() -> None:
    """Flush any buffered PostHog events."""
    if _posthog_client:
        _posthog_client.flush()


def shutdown_posthog() -> None:
    """Shutdown PostHog client gracefully."""
    global _posthog_client
    if _posthog_client:
        _posthog_client.shutdown()
        _posthog_client = None
        logger.info("PostHog client shutdown")
