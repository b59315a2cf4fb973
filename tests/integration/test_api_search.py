"""Integration tests for the search API against the fake OMDb."""

import pytest


class TestSearchApi:
    @pytest.mark.asyncio
    async def test_search_select_dismiss(self, app_client):
        resp = await app_client.post("/api/v1/search", json={"query": "alien"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["mode"]["kind"] == "populated"
        assert len(body["mode"]["results"]["items"]) == 3

        resp = await app_client.post("/api/v1/select/tt0090605")
        assert resp.json()["overlay"]["item"]["title"] == "Aliens"

        resp = await app_client.post("/api/v1/dismiss")
        body = resp.json()
        assert body["overlay"]["item"] is None
        assert body["dismiss_listeners"] == 0

    @pytest.mark.asyncio
    async def test_not_found(self, app_client):
        resp = await app_client.post("/api/v1/search", json={"query": "zzzz"})
        body = resp.json()
        assert body["mode"]["kind"] == "error"
        assert body["mode"]["message"] == "No movies found"

    @pytest.mark.asyncio
    async def test_page_after_search(self, app_client):
        await app_client.post("/api/v1/search", json={"query": "heat"})

        resp = await app_client.get("/")

        assert resp.status_code == 200
        assert 'data-imdb-id="tt0113277"' in resp.text
        assert 'data-background="off"' in resp.text


class TestCatalogApi:
    @pytest.mark.asyncio
    async def test_search(self, app_client):
        resp = await app_client.get("/api/v1/catalog/search", params={"q": "alien"})
        body = resp.json()
        assert body["total"] == 3
        assert body["results"][2]["poster"] is None

    @pytest.mark.asyncio
    async def test_search_not_found(self, app_client):
        resp = await app_client.get("/api/v1/catalog/search", params={"q": "zzzz"})
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_title(self, app_client):
        resp = await app_client.get("/api/v1/catalog/title/tt0078748")
        body = resp.json()
        assert body["title"] == "Alien"
        assert body["rating"] == 8.5

    @pytest.mark.asyncio
    async def test_unknown_title(self, app_client):
        resp = await app_client.get("/api/v1/catalog/title/tt9999999")
        assert resp.status_code == 502


class TestHealthApi:
    @pytest.mark.asyncio
    async def test_healthy(self, app_client):
        resp = await app_client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["services"]["catalog_api"] == "ok"
