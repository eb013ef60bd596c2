"""
Tests for API endpoints
"""
import pytest
from httpx import ASGITransport, AsyncClient
from app.core.app import create_app
from app.services.http import HttpResponse

ADDON_URL = "https://addon.example.org/manifest.json"


@pytest.fixture
def app(store, fetcher):
    return create_app(store=store, fetcher=fetcher)


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def stream_addon_manifest():
    return {
        "id": "org.example.addon",
        "version": "1.0.0",
        "name": "Example",
        "description": "Streams and a catalog",
        "resources": ["catalog", "stream"],
        "types": ["movie"],
        "catalogs": [{"type": "movie", "id": "top", "name": "Top"}],
    }


@pytest.mark.asyncio
async def test_health_check(client):
    """Test health check endpoint"""
    response = await client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data


@pytest.mark.asyncio
async def test_health_check_with_addons(client):
    response = await client.get("/health", params={"include_addons": "true"})

    assert response.json()["installed_addons"] == 1


@pytest.mark.asyncio
async def test_list_addons_seeds_default(client):
    response = await client.get("/addons")

    assert response.status_code == 200
    assert [a["id"] for a in response.json()["addons"]] == ["com.linvo.cinemeta"]


@pytest.mark.asyncio
async def test_install_addon(client, fetcher, stream_addon_manifest):
    fetcher.routes[ADDON_URL] = stream_addon_manifest

    response = await client.post("/addons", json={"url": "https://addon.example.org"})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["addon"]["url"] == ADDON_URL

    listed = (await client.get("/addons")).json()["addons"]
    assert [a["id"] for a in listed] == ["com.linvo.cinemeta", "org.example.addon"]


@pytest.mark.asyncio
async def test_install_without_url(client):
    response = await client.post("/addons", json={"url": ""})

    assert response.status_code == 400
    assert response.json()["error"] == "InvalidAddonUrl"


@pytest.mark.asyncio
async def test_install_unreachable_addon(client, fetcher):
    fetcher.routes[ADDON_URL] = HttpResponse(status=404)

    response = await client.post("/addons", json={"url": ADDON_URL})

    assert response.status_code == 502
    assert response.json()["error"] == "FetchError"


@pytest.mark.asyncio
async def test_uninstall_addon(client):
    response = await client.delete("/addons/com.linvo.cinemeta")
    assert response.status_code == 200

    response = await client.delete("/addons/not.installed")
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_list_catalogs(client):
    response = await client.get("/catalogs", params={"type": "series"})

    assert response.status_code == 200
    catalogs = response.json()["catalogs"]
    assert len(catalogs) == 1
    assert catalogs[0]["addonId"] == "com.linvo.cinemeta"
    assert catalogs[0]["key"] == "com.linvo.cinemeta_series_top"


@pytest.mark.asyncio
async def test_catalog_content_forwards_extra(client, fetcher):
    url = "https://v3-cinemeta.strem.io/catalog/movie/top.json?genre=Action"
    fetcher.routes[url] = {"metas": [{"id": "tt0133093", "name": "The Matrix", "genres": ["Action", "Sci-Fi"]}]}

    response = await client.get("/catalogs/com.linvo.cinemeta/movie/top", params={"genre": "Action"})

    assert response.status_code == 200
    assert response.json()["metas"] == [{"id": "tt0133093", "title": "The Matrix", "genre": "Action"}]


@pytest.mark.asyncio
async def test_catalog_content_unknown_addon(client):
    response = await client.get("/catalogs/not.installed/movie/top")

    assert response.status_code == 200
    assert response.json()["metas"] == []


@pytest.mark.asyncio
async def test_streams_without_stream_addons(client):
    response = await client.get("/streams/movie/tt0133093")

    assert response.status_code == 404
    assert response.json()["error"] == "NoStreamAddons"


@pytest.mark.asyncio
async def test_streams_with_best(client, fetcher, stream_addon_manifest):
    fetcher.routes[ADDON_URL] = stream_addon_manifest
    fetcher.routes["https://addon.example.org/stream/movie/tt0133093.json"] = {
        "streams": [
            {"name": "4K", "url": "https://cdn.example.org/4k.mkv", "behaviorHints": {"notWebReady": True}},
            {"name": "HD", "url": "https://cdn.example.org/hd.mp4"},
        ]
    }
    await client.post("/addons", json={"url": ADDON_URL})

    response = await client.get("/streams/movie/tt0133093")

    assert response.status_code == 200
    data = response.json()
    assert [s["name"] for s in data["streams"]] == ["4K", "HD"]
    assert data["best"]["name"] == "HD"
    assert data["best"]["addonId"] == "org.example.addon"
