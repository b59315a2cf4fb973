"""Rate limiting utilities for OMDb API requests.

Implements:
- Semaphore bounding how many catalog requests are in flight at once
- Token bucket rate limiter for requests per minute
- Reset function for testing

Both primitives are bound to an event loop, so one of each is kept per loop.
"""

import asyncio
import logging

from aiolimiter import AsyncLimiter

from config.settings import get_settings

logger = logging.getLogger(__name__)

_rate_limiters: dict[asyncio.AbstractEventLoop, AsyncLimiter] = {}
_semaphores: dict[asyncio.AbstractEventLoop, asyncio.Semaphore] = {}


def _running_loop() -> asyncio.AbstractEventLoop | None:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


def get_rate_limiter() -> AsyncLimiter:
    """Get or create the requests-per-minute limiter for the current event loop."""
    loop = _running_loop()
    settings = get_settings()
    if loop is None:
        return AsyncLimiter(settings.catalog_rate_limit, 60)

    if loop not in _rate_limiters:
        _rate_limiters[loop] = AsyncLimiter(settings.catalog_rate_limit, 60)
        logger.debug(f"Created rate limiter: {settings.catalog_rate_limit} req/min")
    return _rate_limiters[loop]


def get_semaphore() -> asyncio.Semaphore:
    """Get or create the concurrency semaphore for the current event loop."""
    loop = _running_loop()
    settings = get_settings()
    if loop is None:
        return asyncio.Semaphore(settings.catalog_max_concurrent)

    if loop not in _semaphores:
        _semaphores[loop] = asyncio.Semaphore(settings.catalog_max_concurrent)
        logger.debug(f"Created semaphore: {settings.catalog_max_concurrent} concurrent")
    return _semaphores[loop]


def reset_rate_limiting() -> None:
    """Reset rate limiting state for testing."""
    _rate_limiters.clear()
    _semaphores.clear()
    logger.debug("Reset rate limiting state")
