"""
Cinemeta Default Addon
Bundled manifest seeded into the registry on first run
"""
from app.models.stremio import AddonManifest

CINEMETA_MANIFEST_URL = "https://v3-cinemeta.strem.io/manifest.json"

_MOVIE_GENRES = [
    "Action", "Adventure", "Animation", "Biography", "Comedy", "Crime",
    "Documentary", "Drama", "Family", "Fantasy", "History", "Horror",
    "Mystery", "Romance", "Sci-Fi", "Sport", "Thriller", "War", "Western",
]
_SERIES_GENRES = _MOVIE_GENRES + ["Reality-TV", "Talk-Show", "Game-Show"]


def _top_catalog(content_type: str, genres: list) -> dict:
    return {
        "type": content_type,
        "id": "top",
        "genres": list(genres),
        "extra": [
            {"name": "genre", "options": list(genres)},
            {"name": "search"},
            {"name": "skip"},
        ],
        "extraSupported": ["search", "genre", "skip"],
        "name": "Popular",
    }


def _addon_catalogs() -> list:
    refs = [
        {"type": t, "id": "official", "name": "Official"}
        for t in ("all", "movie", "series", "channel")
    ]
    refs += [
        {"type": t, "id": "community", "name": "Community"}
        for t in ("all", "movie", "series", "channel", "tv", "Podcasts", "other")
    ]
    return refs


DEFAULT_CINEMETA_MANIFEST = {
    "id": "com.linvo.cinemeta",
    "version": "3.0.13",
    "description": "The official addon for movie and series catalogs",
    "name": "Cinemeta",
    "resources": ["catalog", "meta", "addon_catalog"],
    "types": ["movie", "series"],
    "idPrefixes": ["tt"],
    "addonCatalogs": _addon_catalogs(),
    "catalogs": [
        _top_catalog("movie", _MOVIE_GENRES),
        _top_catalog("series", _SERIES_GENRES),
    ],
    "url": CINEMETA_MANIFEST_URL,
    "behaviorHints": {"newEpisodeNotifications": True},
}


def default_manifest() -> AddonManifest:
    """Fresh copy of the bundled Cinemeta manifest"""
    return AddonManifest.model_validate(DEFAULT_CINEMETA_MANIFEST)
