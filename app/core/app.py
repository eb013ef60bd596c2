"""
FastAPI Application Factory
Creates the app and wires the addon services together
"""
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.api.endpoints import addons, catalog, health, streams
from app.core.config import settings
from app.core.errors import (
    AddonError,
    FetchError,
    InvalidAddonUrl,
    NoPlayableStream,
    NoStreamAddons,
    NotFoundOrIOError,
    ParseError,
)
from app.services.catalogs import CatalogAggregator
from app.services.http import JsonFetcher
from app.services.registry import AddonRegistry
from app.services.storage import KeyValueStore, RedisKeyValueStore
from app.services.streams import StreamResolver
import logging

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    InvalidAddonUrl: 400,
    NoStreamAddons: 404,
    NoPlayableStream: 404,
    FetchError: 502,
    ParseError: 502,
    NotFoundOrIOError: 503,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown"""
    logger.info("Starting Addon Aggregator")
    logger.info(f"Base URL: {settings.BASE_URL}")

    yield

    logger.info("Shutting down Addon Aggregator")
    await app.state.fetcher.close()
    close_store = getattr(app.state.store, "close", None)
    if close_store is not None:
        await close_store()


async def addon_error_handler(request: Request, exc: AddonError) -> JSONResponse:
    """Map typed addon errors to HTTP responses"""
    status_code = 500
    for error_type, code in ERROR_STATUS.items():
        if isinstance(exc, error_type):
            status_code = code
            break
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


def create_app(
    store: Optional[KeyValueStore] = None,
    fetcher: Optional[JsonFetcher] = None,
) -> FastAPI:
    """Create and configure FastAPI application"""

    app = FastAPI(
        title="Addon Aggregator",
        description="Installs Stremio addons and merges their catalogs and streams",
        version="1.0.0",
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Services are built once per app and shared through app.state
    app.state.store = store or RedisKeyValueStore()
    app.state.fetcher = fetcher or JsonFetcher()
    app.state.registry = AddonRegistry(app.state.store, app.state.fetcher)
    app.state.aggregator = CatalogAggregator(app.state.registry, app.state.fetcher)
    app.state.resolver = StreamResolver(app.state.registry, app.state.fetcher)

    app.add_exception_handler(AddonError, addon_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(addons.router)
    app.include_router(catalog.router)
    app.include_router(streams.router)

    return app
