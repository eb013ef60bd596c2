"""
Stream Resolver
Queries every stream-capable addon for a content id and picks a stream to play
"""
import asyncio
import logging
from typing import List, Optional, Protocol, Sequence
from pydantic import ValidationError
from app.core.config import settings
from app.core.errors import FetchError, NoPlayableStream, NoStreamAddons
from app.models.stremio import AddonManifest, Stream
from app.services.http import JsonFetcher
from app.services.registry import AddonRegistry
from app.utils.helpers import build_stream_url
from app.utils.policies import degrade_to_empty, propagate

logger = logging.getLogger(__name__)


class StreamSelector(Protocol):
    """Strategy that chooses one stream out of the merged candidates"""

    def select(self, streams: Sequence[Stream]) -> Optional[Stream]: ...


class WebReadyFirstSelector:
    """Prefer streams not flagged notWebReady, then take the first one"""

    def select(self, streams: Sequence[Stream]) -> Optional[Stream]:
        if not streams:
            return None
        web_ready = [stream for stream in streams if stream.web_ready]
        usable = web_ready or list(streams)
        return usable[0]


class StreamResolver:
    """Fan-out stream lookup across installed addons"""

    def __init__(
        self,
        registry: AddonRegistry,
        fetcher: JsonFetcher,
        selector: Optional[StreamSelector] = None,
        fetch_timeout: Optional[float] = None,
        concurrent: Optional[bool] = None,
    ):
        self.registry = registry
        self.fetcher = fetcher
        self.selector = selector or WebReadyFirstSelector()
        if fetch_timeout is None:
            fetch_timeout = settings.STREAM_FETCH_TIMEOUT
        self.fetch_timeout = fetch_timeout
        if concurrent is None:
            concurrent = settings.STREAM_FETCH_CONCURRENT
        self.concurrent = concurrent

    @degrade_to_empty("Fetch addon streams")
    async def _fetch_addon_streams(
        self,
        addon: AddonManifest,
        content_id: str,
        content_type: str
    ) -> List[Stream]:
        """Streams from a single addon; any failure yields an empty list"""
        url = build_stream_url(addon.url, content_type, content_id)
        try:
            response = await asyncio.wait_for(self.fetcher.fetch(url), timeout=self.fetch_timeout)
        except asyncio.TimeoutError as e:
            raise FetchError(
                f"Stream fetch from {addon.name} timed out after {self.fetch_timeout}s", url=url
            ) from e
        if not response.ok:
            raise FetchError(f"HTTP {response.status} from {addon.name}", url=url, status=response.status)

        body = response.body if isinstance(response.body, dict) else {}
        raw_streams = body.get("streams")
        if not isinstance(raw_streams, list):
            return []

        streams = []
        for raw in raw_streams:
            if not isinstance(raw, dict):
                continue
            try:
                streams.append(
                    Stream.model_validate({**raw, "addonName": addon.name, "addonId": addon.id})
                )
            except ValidationError as e:
                logger.debug(f"Skipping malformed stream from {addon.name}: {e}")
        logger.debug(f"{addon.name} returned {len(streams)} streams for {content_id}")
        return streams

    @propagate("Get streams")
    async def get_streams(self, content_id: str, content_type: str = "movie") -> List[Stream]:
        """
        Merge streams for a content id from every stream-capable addon

        Args:
            content_id: Addon content id, e.g. "tt0111161"
            content_type: "movie", "series", ...

        Returns:
            Streams in addon order, each addon's own order preserved

        Raises:
            NoStreamAddons: no installed addon declares the stream resource
        """
        addons = await self.registry.list_installed()
        stream_addons = [addon for addon in addons if addon.supports("stream")]
        if not stream_addons:
            raise NoStreamAddons(
                "No stream addons installed. Please install stream addons from the Addons page."
            )

        queryable = [addon for addon in stream_addons if addon.url]
        if self.concurrent:
            results = await asyncio.gather(
                *(self._fetch_addon_streams(addon, content_id, content_type) for addon in queryable)
            )
        else:
            results = []
            for addon in queryable:
                results.append(await self._fetch_addon_streams(addon, content_id, content_type))

        streams = [stream for addon_streams in results for stream in addon_streams]
        logger.info(f"Found {len(streams)} streams for {content_type} {content_id} from {len(queryable)} addons")
        return streams

    def select_best_stream(self, streams: Sequence[Stream]) -> Optional[Stream]:
        """Pick the stream to play, or None when there are no candidates"""
        return self.selector.select(streams)

    async def resolve_playback(self, content_id: str, content_type: str = "movie") -> Stream:
        """
        Find the stream to hand to the player

        Raises:
            NoStreamAddons: no stream-capable addon installed
            NoPlayableStream: nothing found, or the chosen stream has no URL
        """
        streams = await self.get_streams(content_id, content_type)
        if not streams:
            raise NoPlayableStream("No streams found for this content. Try installing more addons.")

        best = self.select_best_stream(streams)
        if best is None or not best.url:
            raise NoPlayableStream("No playable stream found. Try installing more addons.")
        return best
