"""
Test doubles for the store and fetcher collaborators
"""
import asyncio
from typing import Dict, Optional
from unittest.mock import AsyncMock
from app.services.http import HttpResponse, JsonFetcher


class SlowStore:
    """In-memory store that yields to the event loop on every call"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})
        self.writes = 0

    async def get(self, key):
        await asyncio.sleep(0)
        return self.data.get(key)

    async def set(self, key, value):
        await asyncio.sleep(0)
        self.writes += 1
        self.data[key] = value

    async def remove(self, key):
        self.data.pop(key, None)


def make_fetcher(routes: Optional[dict] = None) -> AsyncMock:
    """
    Fetcher mock answering from a URL -> response table

    Values may be an HttpResponse, a JSON body (served with 200) or an
    exception instance to raise. Unknown URLs answer 404.
    """
    routes = routes if routes is not None else {}
    fetcher = AsyncMock(spec=JsonFetcher)

    async def fetch(url):
        result = routes.get(url)
        if result is None:
            return HttpResponse(status=404)
        if isinstance(result, Exception):
            raise result
        if isinstance(result, HttpResponse):
            return result
        return HttpResponse(status=200, body=result)

    fetcher.fetch.side_effect = fetch
    fetcher.routes = routes
    return fetcher
