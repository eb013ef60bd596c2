"""
Test configuration and fixtures
"""
import pytest
from fakeredis import aioredis as fakeredis
from app.core.errors import FetchError
from app.models.stremio import AddonManifest
from app.services.registry import AddonRegistry
from app.services.storage import RedisKeyValueStore
from tests.fakes import make_fetcher


@pytest.fixture
async def fake_redis():
    """Provide fake Redis client for testing"""
    redis_client = fakeredis.FakeRedis(decode_responses=True)
    yield redis_client
    await redis_client.flushall()
    await redis_client.aclose()


@pytest.fixture
def store(fake_redis):
    return RedisKeyValueStore(client=fake_redis)


@pytest.fixture
def fetcher():
    return make_fetcher()


@pytest.fixture
def registry(store, fetcher):
    return AddonRegistry(store, fetcher, storage_key="test_addons", guard_seeding=True)


@pytest.fixture
def torrent_manifest():
    """Stream-only addon manifest"""
    return AddonManifest(
        id="org.example.torrents",
        version="1.2.0",
        name="Torrents",
        description="Streams from the swarm",
        resources=["stream"],
        types=["movie", "series"],
        idPrefixes=["tt"],
        url="https://torrents.example.org/manifest.json",
    )


@pytest.fixture
def catalog_manifest():
    """Addon serving one movie catalog and streams"""
    return AddonManifest.model_validate({
        "id": "org.example.public",
        "version": "0.3.1",
        "name": "Public Domain",
        "description": "Old movies",
        "resources": ["catalog", "stream"],
        "types": ["movie"],
        "catalogs": [{"type": "movie", "id": "top", "name": "Top"}],
        "url": "https://public.example.org/manifest.json",
    })


@pytest.fixture
def transport_error():
    return FetchError("connection refused")
