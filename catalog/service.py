"""OMDb catalog client with rate limiting.

Every public lookup returns a CatalogResult; transport, parse and remote
failures are converted into a CatalogError on the result instead of raised.
"""

import asyncio
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from catalog.models import (
    CatalogResult,
    DetailEnvelope,
    DetailRecord,
    MatchSummary,
    SearchEnvelope,
)
from catalog.ratelimit import get_rate_limiter, get_semaphore
from config.settings import get_settings
from core.exceptions import CatalogError, CatalogErrorKind
from core.sentry import add_catalog_breadcrumb, capture_exception

logger = logging.getLogger(__name__)

OMDB_API_BASE = "https://www.omdbapi.com"

# A title every OMDb key can resolve; used only by the health probe
PROBE_IMDB_ID = "tt0111161"


# Searches OMDb answers without rows: "Movie not found!", "Series not found!",
# and "Too many results." for keywords too short to narrow down
NOT_FOUND_REASONS = ("not found", "too many results")


def is_not_found_reason(reason: str) -> bool:
    """Whether an OMDb error reason means the search simply matched nothing usable."""
    reason = reason.lower()
    return any(marker in reason for marker in NOT_FOUND_REASONS)


class CatalogService:
    """Client for the OMDb search and lookup-by-id endpoints."""

    def __init__(self, api_key: str, base_url: str = OMDB_API_BASE, timeout: float = 10.0):
        """Initialize the client.

        Args:
            api_key: OMDb API key
            base_url: OMDb base URL
            timeout: Per-request timeout in seconds
        """
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={"User-Agent": "MovieSearchService/1.0"},
                timeout=self.timeout,
            )
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def check_api(self) -> bool:
        """Check OMDb API connectivity and that the key is accepted.

        Goes through the shared rate limiter and semaphore but never retries.
        """
        try:
            resp = await self._request_with_retry({"i": PROBE_IMDB_ID}, max_retries=0)
        except CatalogError as e:
            logger.warning(f"OMDb health check failed: {e}")
            return False
        return bool(resp.status_code == 200)

    async def _request_with_retry(
        self,
        params: dict[str, Any],
        max_retries: int | None = None,
    ) -> httpx.Response:
        """GET the OMDb root with rate limiting and retry on 429.

        Raises:
            CatalogError: TRANSPORT on network errors or exhausted retries
        """
        if max_retries is None:
            max_retries = get_settings().catalog_max_retries

        client = await self._get_client()
        semaphore = get_semaphore()
        rate_limiter = get_rate_limiter()

        async with semaphore:
            for attempt in range(max_retries + 1):
                await rate_limiter.acquire()

                try:
                    response = await client.get("/", params={"apikey": self.api_key, **params})
                except httpx.RequestError as e:
                    raise CatalogError(
                        CatalogErrorKind.TRANSPORT,
                        f"OMDb request failed: {e}",
                        details={"error_type": type(e).__name__},
                    ) from e

                if response.status_code == 429:
                    if attempt < max_retries:
                        # Exponential backoff: 1s, 2s, 4s...
                        delay = 2**attempt
                        logger.warning(
                            f"OMDb rate limit hit, retrying in {delay}s "
                            f"(attempt {attempt + 1}/{max_retries + 1})"
                        )
                        await asyncio.sleep(delay)
                        continue
                    break

                return response

        raise CatalogError(
            CatalogErrorKind.TRANSPORT,
            "OMDb rate limit hit, max retries exhausted",
            details={"status_code": 429},
        )

    async def _get_json(self, params: dict[str, Any]) -> dict[str, Any]:
        """Fetch and decode one OMDb response body.

        Raises:
            CatalogError: TRANSPORT for HTTP errors, PARSE for undecodable bodies
        """
        response = await self._request_with_retry(params)

        # OMDb answers a bad key with 401 and a JSON error body; treat any
        # non-2xx as a transport problem rather than parsing it.
        if response.is_error:
            raise CatalogError(
                CatalogErrorKind.TRANSPORT,
                f"OMDb returned HTTP {response.status_code}",
                details={"status_code": response.status_code},
            )

        try:
            data = response.json()
        except ValueError as e:
            raise CatalogError(CatalogErrorKind.PARSE, "OMDb returned malformed JSON") from e

        if not isinstance(data, dict):
            raise CatalogError(
                CatalogErrorKind.PARSE,
                f"OMDb returned {type(data).__name__}, expected an object",
            )
        return data

    def _fail(self, operation: str, error: CatalogError, **context: Any) -> CatalogResult:
        """Log a failure and wrap it in a CatalogResult."""
        if error.kind == CatalogErrorKind.NOT_FOUND:
            logger.info(f"{operation}: {error.message}")
        elif error.kind == CatalogErrorKind.REJECTED:
            logger.warning(f"{operation} rejected by OMDb: {error.message}")
        else:
            logger.error(f"{operation} failed ({error.kind}): {error.message}")
            capture_exception(error, context={"operation": operation, **context})
        add_catalog_breadcrumb(
            f"{operation}_failed", {"kind": str(error.kind), **context}, level="warning"
        )
        return CatalogResult.failure(error)

    async def search_by_keyword(self, query: str) -> CatalogResult[list[MatchSummary]]:
        """Search OMDb titles by keyword.

        Args:
            query: Trimmed, non-empty search text

        Returns:
            CatalogResult with the matches in OMDb order. An empty search is a
            NOT_FOUND error, never an empty success.
        """
        add_catalog_breadcrumb("search_by_keyword", {"query": query})
        logger.info(f"Searching OMDb for '{query}'")

        try:
            data = await self._get_json({"s": query})
            envelope = SearchEnvelope.model_validate(data)
        except CatalogError as e:
            return self._fail("search_by_keyword", e, query=query)
        except ValidationError as e:
            return self._fail(
                "search_by_keyword",
                CatalogError(CatalogErrorKind.PARSE, f"Unexpected search response: {e}"),
                query=query,
            )

        if not envelope.succeeded:
            reason = envelope.error or "Unknown error"
            kind = (
                CatalogErrorKind.NOT_FOUND
                if is_not_found_reason(reason)
                else CatalogErrorKind.REJECTED
            )
            return self._fail("search_by_keyword", CatalogError(kind, reason), query=query)

        if not envelope.results:
            return self._fail(
                "search_by_keyword",
                CatalogError(CatalogErrorKind.NOT_FOUND, "Search returned no rows"),
                query=query,
            )

        logger.info(f"OMDb search for '{query}' returned {len(envelope.results)} matches")
        return CatalogResult.success(envelope.results)

    async def fetch_detail(self, imdb_id: str) -> CatalogResult[DetailRecord]:
        """Fetch the full record for one title.

        Args:
            imdb_id: Identifier taken from a previous search

        Returns:
            CatalogResult with the DetailRecord; a remote error is REJECTED.
        """
        add_catalog_breadcrumb("fetch_detail", {"imdb_id": imdb_id})

        try:
            data = await self._get_json({"i": imdb_id, "plot": "short"})
            envelope = DetailEnvelope.model_validate(data)
            if not envelope.succeeded:
                raise CatalogError(
                    CatalogErrorKind.REJECTED, envelope.error or "Unknown error"
                )
            record = DetailRecord.model_validate(data)
        except CatalogError as e:
            return self._fail("fetch_detail", e, imdb_id=imdb_id)
        except ValidationError as e:
            return self._fail(
                "fetch_detail",
                CatalogError(CatalogErrorKind.PARSE, f"Unexpected title response: {e}"),
                imdb_id=imdb_id,
            )

        logger.debug(f"Fetched details for {imdb_id}: '{record.title}'")
        return CatalogResult.success(record)
