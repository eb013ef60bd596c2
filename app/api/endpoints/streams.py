"""
Streams Endpoint
Merged streams for a content id plus the one to play
"""
from fastapi import APIRouter, Path, Request
from app.services.streams import StreamResolver

router = APIRouter(prefix="/streams", tags=["streams"])


@router.get("/{type}/{content_id}")
async def get_streams(
    request: Request,
    type: str = Path(..., description="Content type: movie or series"),
    content_id: str = Path(..., description="Content id, e.g. tt0111161"),
):
    """Streams from every stream-capable addon, in addon order"""
    resolver: StreamResolver = request.app.state.resolver
    streams = await resolver.get_streams(content_id, type)
    best = resolver.select_best_stream(streams)
    return {
        "streams": [stream.model_dump(exclude_none=True) for stream in streams],
        "best": best.model_dump(exclude_none=True) if best else None,
    }
