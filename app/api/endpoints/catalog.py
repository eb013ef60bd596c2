"""
Catalog Endpoint
Aggregated catalogs and their content
"""
from typing import Optional
from fastapi import APIRouter, Path, Query, Request
from app.services.catalogs import CatalogAggregator

router = APIRouter(prefix="/catalogs", tags=["catalogs"])


def get_aggregator(request: Request) -> CatalogAggregator:
    return request.app.state.aggregator


@router.get("")
async def list_catalogs(
    request: Request,
    type: Optional[str] = Query(None, description="Only catalogs of this content type")
):
    """Catalogs of every installed addon, tagged with their addon"""
    catalogs = await get_aggregator(request).list_catalogs(content_type=type)
    return {
        "catalogs": [
            {**catalog.model_dump(exclude_none=True), "key": catalog.key}
            for catalog in catalogs
        ]
    }


@router.get("/{addon_id}/{type}/{catalog_id}")
async def get_catalog_content(
    request: Request,
    addon_id: str = Path(..., description="Owning addon id"),
    type: str = Path(..., description="Content type: movie, series, ..."),
    catalog_id: str = Path(..., description="Catalog id"),
):
    """
    Content of one catalog

    Any query parameters (genre, search, skip, ...) are forwarded to the addon.
    """
    extra = dict(request.query_params)
    items = await get_aggregator(request).fetch_catalog_content(
        addon_id, type, catalog_id, extra or None
    )
    return {"metas": [item.model_dump(exclude_none=True) for item in items]}
