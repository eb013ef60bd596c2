"""
Addon Registry
Persists installed addon manifests and fetches new ones
"""
import asyncio
import json
import logging
from typing import List, Optional
from pydantic import ValidationError
from app.core.config import settings
from app.core.errors import FetchError, InvalidAddonUrl, ParseError
from app.models.stremio import AddonManifest
from app.services.cinemeta import default_manifest
from app.services.http import JsonFetcher
from app.services.storage import KeyValueStore
from app.utils.helpers import normalize_manifest_url
from app.utils.policies import propagate

logger = logging.getLogger(__name__)


class AddonRegistry:
    """Installed addon set stored as one JSON document in a key-value store"""

    def __init__(
        self,
        store: KeyValueStore,
        fetcher: JsonFetcher,
        storage_key: Optional[str] = None,
        guard_seeding: Optional[bool] = None,
    ):
        self.store = store
        self.fetcher = fetcher
        self.storage_key = storage_key or settings.ADDONS_STORAGE_KEY
        if guard_seeding is None:
            guard_seeding = settings.REGISTRY_SEED_GUARD
        self.guard_seeding = guard_seeding
        self._seed_lock = asyncio.Lock()

    async def _read(self) -> Optional[List[AddonManifest]]:
        """
        Load the persisted addon set

        Returns:
            Manifests in insertion order, or None when the stored document
            cannot be decoded. Store errors propagate.
        """
        raw = await self.store.get(self.storage_key)
        if not raw:
            return []

        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.error(f"Stored addon list under {self.storage_key} is not valid JSON: {e}")
            return None
        if not isinstance(data, list):
            logger.error(f"Stored addon list under {self.storage_key} is not a list")
            return None

        addons = []
        for entry in data:
            try:
                addons.append(AddonManifest.model_validate(entry))
            except ValidationError as e:
                logger.warning(f"Skipping unreadable stored addon entry: {e}")
        return addons

    async def _write(self, addons: List[AddonManifest]):
        payload = json.dumps([addon.to_storage() for addon in addons])
        await self.store.set(self.storage_key, payload)

    async def _seed(self) -> List[AddonManifest]:
        addons = [default_manifest()]
        await self._write(addons)
        logger.info(f"Seeded default addon {addons[0].id}")
        return addons

    @propagate("List installed addons")
    async def list_installed(self) -> List[AddonManifest]:
        """
        Installed addons in insertion order

        The default Cinemeta addon is written on the first call that finds
        nothing persisted. Without the seeding guard this is a plain
        read-then-write, so concurrent first calls may each write it.
        """
        addons = await self._read()
        if addons is None:
            return []
        if addons:
            return addons

        if not self.guard_seeding:
            return await self._seed()

        async with self._seed_lock:
            # Another caller may have seeded while we waited
            addons = await self._read()
            if addons is None:
                return []
            if addons:
                return addons
            return await self._seed()

    async def get_addon(self, addon_id: str) -> Optional[AddonManifest]:
        """Installed addon with the given id, if any"""
        for addon in await self.list_installed():
            if addon.id == addon_id:
                return addon
        return None

    @propagate("Install addon")
    async def install(self, manifest: AddonManifest):
        """Add a manifest, replacing in place any installed addon with the same id"""
        addons = await self.list_installed()

        for index, addon in enumerate(addons):
            if addon.id == manifest.id:
                addons[index] = manifest
                logger.info(f"Updated addon {manifest.id} (version {manifest.version})")
                break
        else:
            addons.append(manifest)
            logger.info(f"Installed addon {manifest.id} (version {manifest.version})")

        await self._write(addons)

    @propagate("Uninstall addon")
    async def uninstall(self, addon_id: str):
        """Remove an addon by id; unknown ids are ignored"""
        addons = await self.list_installed()
        remaining = [addon for addon in addons if addon.id != addon_id]
        if len(remaining) == len(addons):
            logger.debug(f"Uninstall of {addon_id} matched no installed addon")
        await self._write(remaining)

    @propagate("Fetch addon manifest", wrap=FetchError)
    async def fetch_manifest(self, url: str) -> AddonManifest:
        """
        Download an addon manifest

        Args:
            url: Full manifest URL

        Returns:
            Manifest annotated with the URL it came from

        Raises:
            FetchError: transport failure or non-success status
            ParseError: body is not a manifest-shaped JSON object
        """
        response = await self.fetcher.fetch(url)
        if not response.ok:
            raise FetchError(
                f"Failed to fetch addon: HTTP {response.status}",
                url=url,
                status=response.status,
            )

        body = response.body
        if not isinstance(body, dict):
            raise ParseError(f"Manifest from {url} is not a JSON object")

        try:
            return AddonManifest.model_validate({**body, "url": url})
        except ValidationError as e:
            raise ParseError(f"Invalid manifest from {url}: {e}") from e

    async def install_from_url(self, url: str) -> AddonManifest:
        """Normalize a user supplied URL, fetch its manifest and install it"""
        if not url or not url.strip():
            raise InvalidAddonUrl("Please enter a valid addon URL")

        manifest = await self.fetch_manifest(normalize_manifest_url(url))
        await self.install(manifest)
        logger.info(f'Addon "{manifest.name}" installed from {manifest.url}')
        return manifest
