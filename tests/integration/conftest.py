"""Integration test fixtures.

Provides a real CatalogService whose HTTP traffic is answered by an
in-process fake of the OMDb API, seeded with a few representative titles.
"""

import httpx
import pytest
import pytest_asyncio

from catalog.ratelimit import reset_rate_limiting
from catalog.service import CatalogService
from config.settings import Settings
from search.session import SearchSession
from tests.factories import (
    OMDB_NOT_FOUND,
    PLACEHOLDER,
    omdb_search_payload,
    omdb_search_row,
    omdb_title_payload,
)

# ---------------------------------------------------------------------------
# Seed data -- representative OMDb titles
# ---------------------------------------------------------------------------

SEED_TITLES = {
    "tt0078748": omdb_title_payload("tt0078748", "Alien", Year="1979", imdbRating="8.5"),
    "tt0090605": omdb_title_payload("tt0090605", "Aliens", Year="1986", imdbRating="8.4"),
    "tt0103644": omdb_title_payload(
        "tt0103644", "Alien 3", Year="1992", imdbRating="N/A", Poster="N/A"
    ),
    "tt0113277": omdb_title_payload("tt0113277", "Heat", Year="1995", imdbRating="8.3"),
}

SEED_SEARCHES = {
    "alien": ["tt0078748", "tt0090605", "tt0103644"],
    "heat": ["tt0113277"],
}


class FakeOmdb:
    """Answers OMDb ``?s=`` and ``?i=`` requests from the seed data."""

    def __init__(self, titles=None, searches=None):
        self.titles = dict(SEED_TITLES if titles is None else titles)
        self.searches = dict(SEED_SEARCHES if searches is None else searches)
        self.requests: list[httpx.Request] = []
        # imdb ids whose lookups answer with an HTTP 500
        self.broken: set[str] = set()

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        params = request.url.params

        if "s" in params:
            ids = self.searches.get(params["s"].lower())
            if not ids:
                return httpx.Response(200, json=OMDB_NOT_FOUND)
            rows = [
                omdb_search_row(
                    i,
                    self.titles[i]["Title"],
                    year=self.titles[i]["Year"],
                    poster=self.titles[i]["Poster"],
                )
                for i in ids
            ]
            return httpx.Response(200, json=omdb_search_payload(*rows))

        imdb_id = params.get("i")
        if imdb_id in self.broken:
            return httpx.Response(500, text="upstream error")
        if imdb_id in self.titles:
            return httpx.Response(200, json=self.titles[imdb_id])
        return httpx.Response(200, json={"Response": "False", "Error": "Incorrect IMDb ID."})

    def lookups(self) -> list[str]:
        return [r.url.params["i"] for r in self.requests if "i" in r.url.params]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_rate_limiting():
    yield
    reset_rate_limiting()


@pytest.fixture
def fake_omdb():
    return FakeOmdb()


@pytest_asyncio.fixture
async def catalog_service(fake_omdb):
    """Real CatalogService routed to the fake OMDb."""
    service = CatalogService(api_key="test-key", base_url="https://omdb.test")
    service._client = httpx.AsyncClient(
        base_url=service.base_url, transport=httpx.MockTransport(fake_omdb)
    )

    yield service

    await service.close()


@pytest.fixture
def live_session(catalog_service):
    return SearchSession(catalog_service, placeholder_poster=PLACEHOLDER)


@pytest.fixture
def test_settings():
    """Settings with no real tokens, telemetry disabled."""
    return Settings(
        omdb_api_key="test-key",
        sentry_dsn=None,
        posthog_api_key=None,
        enable_telemetry=False,
        placeholder_poster_url=PLACEHOLDER,
    )


@pytest_asyncio.fixture
async def app_client(catalog_service, test_settings):
    """httpx AsyncClient with a real CatalogService and a fresh search session."""
    from httpx import ASGITransport, AsyncClient

    import core.dependencies as deps_module
    from config.settings import get_settings
    from core.dependencies import get_catalog_service, get_posthog_client
    from main import app

    app.dependency_overrides[get_catalog_service] = lambda: catalog_service
    app.dependency_overrides[get_posthog_client] = lambda: None
    app.dependency_overrides[get_settings] = lambda: test_settings

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
    deps_module.reset_search_session()
