"""Unit tests for search/router.py."""

from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from core.dependencies import get_search_session
from tests.unit.conftest import override_deps


@pytest.fixture
def app():
    from main import app

    return app


@pytest_asyncio.fixture
async def client(app, session):
    with override_deps(app, {get_search_session: session}):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
            yield c


class TestSubmitQuery:
    @pytest.mark.asyncio
    async def test_populated(self, client):
        resp = await client.post("/api/v1/search", json={"query": "matrix"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["mode"]["kind"] == "populated"
        items = body["mode"]["results"]["items"]
        assert [i["imdb_id"] for i in items] == ["tt0133093", "tt0234215", "tt0242653"]
        assert body["background_animation"] is False
        assert body["content_html"].count('class="movie-card"') == 3

    @pytest.mark.asyncio
    async def test_blank_query_keeps_state(self, client, matrix_catalog):
        resp = await client.post("/api/v1/search", json={"query": "   "})

        assert resp.status_code == 200
        assert resp.json()["mode"]["kind"] == "idle"
        matrix_catalog.search_by_keyword.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_body_field(self, client):
        resp = await client.post("/api/v1/search", json={})
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_unexpected_error_returns_500(self, app):
        broken = Mock()
        broken.on_query_submitted = AsyncMock(side_effect=RuntimeError("bug"))

        with override_deps(app, {get_search_session: broken}):
            async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
                resp = await c.post("/api/v1/search", json={"query": "matrix"})

        assert resp.status_code == 500

    @pytest.mark.asyncio
    async def test_clear(self, client):
        await client.post("/api/v1/search", json={"query": "matrix"})
        resp = await client.delete("/api/v1/search")

        body = resp.json()
        assert body["mode"]["kind"] == "idle"
        assert body["content_html"] == ""
        assert body["background_animation"] is True


class TestOverlayEndpoints:
    @pytest.mark.asyncio
    async def test_select_and_dismiss(self, client):
        await client.post("/api/v1/search", json={"query": "matrix"})

        resp = await client.post("/api/v1/select/tt0133093")
        assert resp.status_code == 200
        body = resp.json()
        assert body["overlay"]["item"]["title"] == "The Matrix"
        assert body["dismiss_listeners"] == 1

        resp = await client.post("/api/v1/dismiss")
        body = resp.json()
        assert body["overlay"]["item"] is None
        assert body["overlay_html"] is None
        assert body["dismiss_listeners"] == 0

    @pytest.mark.asyncio
    async def test_select_unknown_returns_404(self, client):
        resp = await client.post("/api/v1/select/tt-nope")
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_key_press(self, client):
        await client.post("/api/v1/search", json={"query": "matrix"})
        await client.post("/api/v1/select/tt0133093")

        resp = await client.post("/api/v1/keys", json={"key": "Enter"})
        assert resp.json()["overlay"]["item"] is not None

        resp = await client.post("/api/v1/keys", json={"key": "Escape"})
        assert resp.json()["overlay"]["item"] is None


class TestSessionAndPage:
    @pytest.mark.asyncio
    async def test_initial_session(self, client):
        resp = await client.get("/api/v1/session")
        body = resp.json()
        assert body["mode"]["kind"] == "idle"
        assert body["background_animation"] is True

    @pytest.mark.asyncio
    async def test_page(self, client):
        await client.post("/api/v1/search", json={"query": "matrix"})

        resp = await client.get("/")

        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        assert 'data-mode="populated"' in resp.text
        assert 'id="searchBtn"' in resp.text

    @pytest.mark.asyncio
    async def test_unconfigured_catalog_returns_503(self, app, mock_settings):
        from config.settings import get_settings
        from core.dependencies import get_catalog_service, get_posthog_client

        with override_deps(
            app,
            {get_catalog_service: None, get_posthog_client: None, get_settings: mock_settings},
        ):
            async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
                resp = await c.get("/api/v1/session")

        assert resp.status_code == 503
