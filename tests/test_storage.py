"""
Tests for the Redis key-value store
"""
import pytest


@pytest.mark.asyncio
async def test_get_missing_key(store):
    assert await store.get("absent") is None


@pytest.mark.asyncio
async def test_set_get_remove(store):
    await store.set("addons", '[{"id": "a"}]')
    assert await store.get("addons") == '[{"id": "a"}]'

    await store.remove("addons")
    assert await store.get("addons") is None


@pytest.mark.asyncio
async def test_set_overwrites_whole_document(store):
    await store.set("addons", "[1]")
    await store.set("addons", "[2]")

    assert await store.get("addons") == "[2]"
