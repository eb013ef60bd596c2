"""
Addon HTTP Client
Generic JSON-over-HTTP fetch used for manifest, catalog and stream endpoints
"""
import aiohttp
import asyncio
import json
import logging
from pydantic import BaseModel
from typing import Any, Optional
from app.core.config import settings
from app.core.errors import FetchError, ParseError

logger = logging.getLogger(__name__)


class HttpResponse(BaseModel):
    """Status plus decoded JSON body (None when the status is not 2xx)"""
    status: int
    body: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class JsonFetcher:
    """Async GET-and-decode client for addon endpoints"""

    def __init__(self, timeout: Optional[int] = None):
        self.timeout = timeout or settings.HTTP_TIMEOUT
        self.session: Optional[aiohttp.ClientSession] = None

    async def get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session"""
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
        return self.session

    async def close(self):
        """Close aiohttp session"""
        if self.session and not self.session.closed:
            await self.session.close()

    async def fetch(self, url: str) -> HttpResponse:
        """
        GET a URL and decode its JSON body

        Args:
            url: Absolute addon endpoint URL

        Returns:
            HttpResponse; body is only decoded for 2xx responses

        Raises:
            FetchError: transport failure or timeout
            ParseError: 2xx response whose body is not valid JSON
        """
        try:
            session = await self.get_session()
            async with session.get(url) as response:
                if not 200 <= response.status < 300:
                    logger.debug(f"GET {url} returned {response.status}")
                    return HttpResponse(status=response.status)
                text = await response.text()
                status = response.status
        except asyncio.TimeoutError as exc:
            raise FetchError(f"Request timed out: {url}", url=url) from exc
        except aiohttp.ClientError as exc:
            raise FetchError(f"Request failed for {url}: {exc}", url=url) from exc

        try:
            body = json.loads(text)
        except ValueError as exc:
            raise ParseError(f"Malformed JSON from {url}: {exc}") from exc
        return HttpResponse(status=status, body=body)
