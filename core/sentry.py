"""Sentry error tracking integration."""

import logging
from typing import Any

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration

from core.exceptions import CatalogError, MovieSearchError

logger = logging.getLogger(__name__)


def init_sentry(
    dsn: str | None,
    environment: str = "production",
    release: str | None = None,
) -> bool:
    """Initialize Sentry SDK with FastAPI integration.

    Args:
        dsn: Sentry DSN. Nothing is initialized when it is empty.
        environment: Deployment environment (e.g., "production", "development")
        release: Optional release version string

    Returns:
        True if Sentry was initialized
    """
    if not dsn:
        logger.info("Sentry DSN not configured, skipping initialization")
        return False

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        release=release,
        integrations=[FastApiIntegration()],
        traces_sample_rate=1.0,
        sample_rate=1.0,
    )
    logger.info(f"Sentry initialized (environment: {environment})")
    return True


def add_catalog_breadcrumb(
    operation: str,
    data: dict[str, Any] | None = None,
    level: str = "info",
) -> None:
    """Record a catalog call so it shows up in the trail of any later error."""
    sentry_sdk.add_breadcrumb(
        category="catalog",
        message=operation,
        data=data or {},
        level=level,
    )


def capture_exception(
    error: Exception,
    context: dict[str, Any] | None = None,
) -> None:
    """Send an exception to Sentry.

    Catalog errors are tagged with their kind, and the ``details`` of any
    MovieSearchError are merged into the "catalog" context.

    Args:
        error: The exception to capture
        context: Optional contextual data (query, imdb_id, token, ...)
    """
    if isinstance(error, CatalogError):
        sentry_sdk.set_tag("catalog.error_kind", str(error.kind))

    merged = dict(context or {})
    if isinstance(error, MovieSearchError) and error.details:
        merged.update(error.details)
    if merged:
        sentry_sdk.set_context("catalog", merged)

    sentry_sdk.capture_exception(error)
