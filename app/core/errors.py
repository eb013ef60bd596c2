"""
Addon Errors
Typed failures surfaced to callers of the registry, aggregator and resolver
"""
from typing import Optional


class AddonError(Exception):
    """Base class for every addon layer failure"""


class FetchError(AddonError):
    """Network transport failure or non-success HTTP status"""

    def __init__(self, message: str, url: str = "", status: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status = status


class ParseError(AddonError):
    """Response body is not the JSON shape we expected"""


class NotFoundOrIOError(AddonError):
    """Persistence is unreachable or could not be read/written"""


class AddonNotFound(AddonError):
    """Addon is not installed or has no URL to query"""


class InvalidAddonUrl(AddonError):
    """No usable addon URL was supplied"""


class NoStreamAddons(AddonError):
    """None of the installed addons declares the stream resource"""


class NoPlayableStream(AddonError):
    """Stream lookup produced nothing that can be played"""
