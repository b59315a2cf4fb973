"""Search session API router: the shell's inbound events."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse

from core.dependencies import get_search_session
from search.models import KeyPressRequest, QueryRequest, SessionSnapshot
from search.session import SearchSession

logger = logging.getLogger(__name__)

router = APIRouter(tags=["search"])

page_router = APIRouter(tags=["page"])


@router.post(
    "/search",
    response_model=SessionSnapshot,
    response_model_by_alias=False,
    summary="Submit a search query",
    description="""
    Runs one search cycle and returns the session afterwards.

    1. Blank queries are ignored and the current state is returned unchanged
    2. The result area switches to "Searching..."
    3. Matches are fetched from OMDb, then every match's details concurrently
    4. The grid is shown, or "No movies found" / "Error fetching movies"

    If a newer query is submitted while this one is in flight, this one's
    outcome is discarded and the response reflects the newer cycle.
    """,
    responses={
        200: {"description": "Cycle finished (or was superseded)"},
        503: {"description": "Catalog service not configured"},
    },
)
async def submit_query(
    request: QueryRequest,
    session: SearchSession = Depends(get_search_session),
) -> SessionSnapshot:
    try:
        await session.on_query_submitted(request.query)
    except Exception as e:
        logger.error(f"Search failed: {e}")
        raise HTTPException(status_code=500, detail="Internal server error") from e
    return session.snapshot()


@router.delete(
    "/search",
    response_model=SessionSnapshot,
    response_model_by_alias=False,
    summary="Clear the search and return to idle",
)
async def clear_query(session: SearchSession = Depends(get_search_session)) -> SessionSnapshot:
    await session.on_query_cleared()
    return session.snapshot()


@router.post(
    "/select/{imdb_id}",
    response_model=SessionSnapshot,
    response_model_by_alias=False,
    summary="Open the detail overlay for a rendered card",
    responses={
        200: {"description": "Overlay opened"},
        404: {"description": "No card with this id is on screen"},
    },
)
async def select_item(
    imdb_id: str,
    session: SearchSession = Depends(get_search_session),
) -> SessionSnapshot:
    if session.on_item_selected(imdb_id) is None:
        raise HTTPException(status_code=404, detail=f"No result card for {imdb_id}")
    return session.snapshot()


@router.post(
    "/keys",
    response_model=SessionSnapshot,
    response_model_by_alias=False,
    summary="Deliver a key press to the registered key listeners",
)
async def press_key(
    request: KeyPressRequest,
    session: SearchSession = Depends(get_search_session),
) -> SessionSnapshot:
    session.on_key_pressed(request.key)
    return session.snapshot()


@router.post(
    "/dismiss",
    response_model=SessionSnapshot,
    response_model_by_alias=False,
    summary="Press the overlay dismissal key",
)
async def dismiss_overlay(session: SearchSession = Depends(get_search_session)) -> SessionSnapshot:
    session.on_dismiss_key_pressed()
    return session.snapshot()


@router.get(
    "/session",
    response_model=SessionSnapshot,
    response_model_by_alias=False,
    summary="Current session state",
)
async def get_session(session: SearchSession = Depends(get_search_session)) -> SessionSnapshot:
    return session.snapshot()


@page_router.get("/", response_class=HTMLResponse, summary="Rendered search page")
async def page(session: SearchSession = Depends(get_search_session)) -> HTMLResponse:
    return HTMLResponse(session.render_page())
