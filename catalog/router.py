"""FastAPI router exposing the raw catalog lookups."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from catalog.models import CatalogResult, CatalogSearchResponse, DetailRecord
from catalog.service import CatalogService
from core.dependencies import get_catalog_service
from core.exceptions import CatalogErrorKind

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/catalog", tags=["catalog"])


def _require_service(service: CatalogService | None) -> CatalogService:
    """Raise 503 if service is not available."""
    if service is None:
        raise HTTPException(
            status_code=503,
            detail="Catalog service is not configured. Set OMDB_API_KEY environment variable.",
        )
    return service


def _raise_for_failure(result: CatalogResult) -> None:
    """Map a failed CatalogResult to an HTTP error; the raw reason is not exposed."""
    if result.error is None:
        return
    if result.error.kind == CatalogErrorKind.NOT_FOUND:
        raise HTTPException(status_code=404, detail="No movies found")
    raise HTTPException(status_code=502, detail="Error fetching movies")


@router.get(
    "/search",
    response_model=CatalogSearchResponse,
    response_model_by_alias=False,
    summary="Search catalog titles by keyword",
    responses={
        200: {"description": "Matching titles returned"},
        404: {"description": "No titles matched"},
        422: {"description": "Missing or blank query"},
        502: {"description": "Catalog request failed"},
        503: {"description": "Catalog service not configured"},
    },
)
async def search_titles(
    q: str = Query(..., min_length=1, description="Search keywords"),
    service: CatalogService | None = Depends(get_catalog_service),
) -> CatalogSearchResponse:
    """Search the catalog without enrichment."""
    svc = _require_service(service)
    query = q.strip()
    if not query:
        raise HTTPException(status_code=422, detail="Query must not be blank")

    result = await svc.search_by_keyword(query)
    _raise_for_failure(result)

    matches = result.value or []
    return CatalogSearchResponse(query=query, results=matches, total=len(matches))


@router.get(
    "/title/{imdb_id}",
    response_model=DetailRecord,
    response_model_by_alias=False,
    summary="Get the full record for one title",
    responses={
        200: {"description": "Title record returned"},
        502: {"description": "Catalog request failed"},
        503: {"description": "Catalog service not configured"},
    },
)
async def get_title(
    imdb_id: str,
    service: CatalogService | None = Depends(get_catalog_service),
) -> DetailRecord:
    """Get the full record for a title by IMDb ID."""
    svc = _require_service(service)
    result = await svc.fetch_detail(imdb_id)
    _raise_for_failure(result)
    assert result.value is not None  # ok result always carries a value
    return result.value
