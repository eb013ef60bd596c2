"""
Catalog Aggregator
Merges catalogs declared by installed addons and loads their content
"""
import logging
from typing import Dict, List, Mapping, Optional
from app.core.errors import AddonNotFound, FetchError
from app.models.stremio import AggregatedCatalog, ContentItem
from app.services.http import JsonFetcher
from app.services.registry import AddonRegistry
from app.utils.helpers import build_catalog_url, to_content_items
from app.utils.policies import degrade_to_empty

logger = logging.getLogger(__name__)


class CatalogAggregator:
    """Read-only view over the catalogs of every installed addon"""

    def __init__(self, registry: AddonRegistry, fetcher: JsonFetcher):
        self.registry = registry
        self.fetcher = fetcher

    @degrade_to_empty("List catalogs")
    async def list_catalogs(self, content_type: Optional[str] = None) -> List[AggregatedCatalog]:
        """
        Flatten every installed addon's catalogs

        Args:
            content_type: Only keep catalogs of this type (e.g. "movie")

        Returns:
            Catalogs tagged with their addon, in registry then declaration order
        """
        catalogs = []
        for addon in await self.registry.list_installed():
            for catalog in addon.catalogs or []:
                if content_type and catalog.type != content_type:
                    continue
                catalogs.append(
                    AggregatedCatalog.model_validate({
                        **catalog.model_dump(exclude_none=True),
                        "addonId": addon.id,
                        "addonName": addon.name,
                    })
                )
        return catalogs

    @degrade_to_empty("Fetch catalog content")
    async def fetch_catalog_content(
        self,
        addon_id: str,
        content_type: str,
        catalog_id: str,
        extra: Optional[Mapping[str, str]] = None,
    ) -> List[ContentItem]:
        """
        Load and normalize one catalog listing

        Args:
            addon_id: Owning addon
            content_type: Catalog type ("movie", "series", ...)
            catalog_id: Catalog id within the addon and type
            extra: Query parameters (genre, search, skip, ...)

        Returns:
            Content items; empty when anything goes wrong
        """
        addon = await self.registry.get_addon(addon_id)
        if addon is None or not addon.url:
            raise AddonNotFound(f"Addon {addon_id} not found or has no URL")

        # Required extras are declared but not enforced
        for catalog in addon.catalogs or []:
            if catalog.type == content_type and catalog.id == catalog_id:
                missing = [name for name in catalog.required_extras() if name not in (extra or {})]
                if missing:
                    logger.debug(f"Catalog {addon_id}/{content_type}/{catalog_id} missing required extras {missing}")
                break

        url = build_catalog_url(addon.url, content_type, catalog_id, extra)
        response = await self.fetcher.fetch(url)
        if not response.ok:
            raise FetchError(
                f"Failed to fetch catalog: HTTP {response.status}",
                url=url,
                status=response.status,
            )

        body = response.body if isinstance(response.body, dict) else {}
        items = to_content_items(body.get("metas"))
        logger.debug(f"Catalog {addon_id}/{content_type}/{catalog_id} returned {len(items)} items")
        return items

    async def load_home_rows(
        self,
        extra: Optional[Mapping[str, str]] = None
    ) -> Dict[str, List[ContentItem]]:
        """
        Content of every aggregated catalog keyed by catalog key

        Catalogs with no content are left out.
        """
        rows: Dict[str, List[ContentItem]] = {}
        for catalog in await self.list_catalogs():
            content = await self.fetch_catalog_content(
                catalog.addonId, catalog.type, catalog.id, extra
            )
            if content:
                rows[catalog.key] = content
        logger.info(f"Loaded {len(rows)} catalog rows")
        return rows
