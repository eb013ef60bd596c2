"""
Stremio Protocol Models
Pydantic models for addon manifests, catalogs, content items and streams

Addons are third-party and loosely follow the protocol, so only the fields
we act on are typed strictly (ids, catalog type). Everything else accepts
whatever the addon sends and is written back unchanged.
"""
from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, List, Optional


class StremioModel(BaseModel):
    """Base model that keeps addon-supplied fields we do not read"""

    model_config = ConfigDict(extra="allow")


class CatalogExtra(StremioModel):
    """Query parameter a catalog accepts"""
    name: Optional[Any] = None
    options: Optional[List[Any]] = None
    isRequired: Optional[Any] = None
    optionsLimit: Optional[Any] = None


class CatalogDescriptor(StremioModel):
    """Catalog definition in manifest"""
    type: str
    id: str
    name: Optional[Any] = ""
    genres: Optional[List[Any]] = None
    extra: Optional[List[CatalogExtra]] = None
    extraSupported: Optional[List[Any]] = None
    extraRequired: Optional[List[Any]] = None

    def required_extras(self) -> List[Any]:
        """Names of query parameters the catalog declares as mandatory"""
        required = list(self.extraRequired or [])
        for item in self.extra or []:
            if item.isRequired and item.name is not None and item.name not in required:
                required.append(item.name)
        return required


class AddonCatalogRef(StremioModel):
    """Entry of a manifest's addonCatalogs list"""
    type: Optional[Any] = None
    id: Optional[Any] = None
    name: Optional[Any] = None


class AddonManifest(StremioModel):
    """Installed addon manifest plus the URL it was fetched from"""
    id: str
    version: Optional[Any] = None  # informational, never compared
    name: Optional[Any] = None
    description: Optional[Any] = None

    # Plain tags ("stream") or objects ({"name": "stream", "types": [...]})
    resources: Optional[List[Any]] = None
    types: Optional[List[Any]] = None
    idPrefixes: Optional[List[Any]] = None

    catalogs: Optional[List[CatalogDescriptor]] = None
    addonCatalogs: Optional[List[AddonCatalogRef]] = None

    behaviorHints: Optional[Any] = None
    url: Optional[str] = None

    def supports(self, resource: str) -> bool:
        """Whether the manifest declares the given resource"""
        for entry in self.resources or []:
            name = entry.get("name") if isinstance(entry, dict) else entry
            if name == resource:
                return True
        return False

    def to_storage(self) -> Dict[str, Any]:
        """Serializable form used for persistence"""
        return self.model_dump(mode="json", exclude_none=True)


class AggregatedCatalog(CatalogDescriptor):
    """Catalog tagged with the addon that declares it"""
    addonId: str
    addonName: Optional[Any] = None

    @property
    def key(self) -> str:
        # (addonId, type, id) is unique, id alone is not
        return f"{self.addonId}_{self.type}_{self.id}"


class ContentItem(BaseModel):
    """Normalized catalog entry"""
    id: Optional[str] = None
    title: Optional[Any] = None
    description: Optional[str] = None
    poster: Optional[str] = None
    backdrop: Optional[str] = None
    logo: Optional[str] = None
    type: Optional[str] = None
    genre: Optional[str] = None
    year: Optional[str] = None
    runtime: Optional[str] = None
    catalogs: Optional[Any] = None
    videos: Optional[Any] = None


class Stream(StremioModel):
    """Playable stream returned by an addon"""
    name: Optional[Any] = None
    title: Optional[Any] = None
    url: Optional[str] = None
    behaviorHints: Optional[Any] = None

    # Provenance, set by the resolver
    addonName: Optional[Any] = None
    addonId: Optional[str] = None

    @property
    def web_ready(self) -> bool:
        hints = self.behaviorHints if isinstance(self.behaviorHints, dict) else {}
        return not hints.get("notWebReady")
