"""
Addons Endpoint
Install, list and uninstall addons
"""
from fastapi import APIRouter, Path, Request
from pydantic import BaseModel, Field
from app.services.registry import AddonRegistry

router = APIRouter(prefix="/addons", tags=["addons"])


class InstallRequest(BaseModel):
    """Addon URL as typed by the user"""
    url: str = Field("", description="Addon base or manifest URL")


def get_registry(request: Request) -> AddonRegistry:
    return request.app.state.registry


@router.get("")
async def list_addons(request: Request):
    """Installed addons in insertion order"""
    addons = await get_registry(request).list_installed()
    return {"addons": [addon.to_storage() for addon in addons]}


@router.post("")
async def install_addon(payload: InstallRequest, request: Request):
    """Fetch a manifest from the given URL and install it"""
    manifest = await get_registry(request).install_from_url(payload.url)
    return {
        "success": True,
        "message": f'Addon "{manifest.name}" installed successfully!',
        "addon": manifest.to_storage(),
    }


@router.delete("/{addon_id}")
async def uninstall_addon(
    request: Request,
    addon_id: str = Path(..., description="Addon manifest id")
):
    """Remove an installed addon (unknown ids are a no-op)"""
    await get_registry(request).uninstall(addon_id)
    return {"success": True}
