"""
Health Check Endpoint
"""
from fastapi import APIRouter, Query, Request
from app.core.config import settings

router = APIRouter()


@router.get("/health")
async def health_check(
    request: Request,
    include_addons: bool = Query(False, description="Include installed addon count")
):
    """Health check endpoint for monitoring"""
    payload = {
        "status": "healthy",
        "version": "1.0.0",
        "base_url": settings.BASE_URL,
    }

    if include_addons:
        addons = await request.app.state.registry.list_installed()
        payload["installed_addons"] = len(addons)

    return payload
