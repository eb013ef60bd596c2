"""
Helper Utilities
Addon URL construction and content normalization
"""
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import quote, urlencode
from app.models.stremio import ContentItem

MANIFEST_RESOURCE = "manifest.json"

# output field -> (primary source field, fallback source field)
CONTENT_FIELD_ALIASES = {
    "title": ("name", "title"),
    "description": ("description", "overview"),
    "poster": ("poster", "thumbnail"),
    "backdrop": ("background", "backdrop"),
}

# copied as-is (opaque or already string-like)
CONTENT_PASSTHROUGH_FIELDS = ("id", "logo", "type", "catalogs", "videos")


def normalize_manifest_url(url: str) -> str:
    """
    Make sure an addon URL points at its manifest

    Args:
        url: URL as entered by the user, e.g. "https://v3-cinemeta.strem.io"

    Returns:
        URL referencing manifest.json
    """
    url = url.strip()
    if MANIFEST_RESOURCE in url:
        return url
    if url.endswith("/"):
        return f"{url}{MANIFEST_RESOURCE}"
    return f"{url}/{MANIFEST_RESOURCE}"


def addon_base_url(manifest_url: str) -> str:
    """Base URL (with trailing slash) that addon resource paths hang off"""
    if manifest_url.endswith(MANIFEST_RESOURCE):
        base = manifest_url[: -len(MANIFEST_RESOURCE)]
    else:
        base = manifest_url.replace(MANIFEST_RESOURCE, "", 1)
    if not base.endswith("/"):
        base += "/"
    return base


def _segment(value: str) -> str:
    return quote(str(value), safe=":")


def build_catalog_url(
    manifest_url: str,
    content_type: str,
    catalog_id: str,
    extra: Optional[Mapping[str, str]] = None
) -> str:
    """
    Build the catalog endpoint URL for an addon

    Extra parameters keep the iteration order of the mapping.
    """
    url = (
        f"{addon_base_url(manifest_url)}catalog/"
        f"{_segment(content_type)}/{_segment(catalog_id)}.json"
    )
    if extra:
        query = urlencode(list(extra.items()))
        if query:
            url = f"{url}?{query}"
    return url


def build_stream_url(manifest_url: str, content_type: str, content_id: str) -> str:
    """Build the stream endpoint URL for an addon"""
    return (
        f"{addon_base_url(manifest_url)}stream/"
        f"{_segment(content_type)}/{_segment(content_id)}.json"
    )


def _as_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def to_content_item(item: Dict[str, Any]) -> ContentItem:
    """
    Convert a raw addon meta into a ContentItem

    Missing fields stay None; nothing here raises for an odd shape.
    """
    fields: Dict[str, Any] = {}

    for target, (primary, fallback) in CONTENT_FIELD_ALIASES.items():
        fields[target] = _as_str(item.get(primary) or item.get(fallback))

    for name in CONTENT_PASSTHROUGH_FIELDS:
        fields[name] = item.get(name)
    fields["id"] = _as_str(fields["id"])
    fields["logo"] = _as_str(fields["logo"])
    fields["type"] = _as_str(fields["type"])

    genres = item.get("genres")
    if isinstance(genres, list):
        fields["genre"] = _as_str(genres[0]) if genres else None
    else:
        fields["genre"] = _as_str(item.get("genre"))

    fields["year"] = _as_str(item.get("year"))
    fields["runtime"] = _as_str(item.get("runtime"))

    return ContentItem(**fields)


def to_content_items(metas: Any) -> List[ContentItem]:
    """Map a catalog response's metas list, skipping entries that are not objects"""
    if not isinstance(metas, list):
        return []
    return [to_content_item(item) for item in metas if isinstance(item, dict)]
