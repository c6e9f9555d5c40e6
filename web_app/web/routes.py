"""Redirect and static fallback routes.

Registered after the API router, so this is the last matcher in the chain:
a path is first tried as a short code, then as a static asset.
"""

from fastapi import APIRouter, Request, HTTPException, status
from fastapi.responses import RedirectResponse

from che_shortener.store.exceptions import StorePersistenceError

router = APIRouter()


@router.api_route("/{path:path}", methods=["GET", "HEAD"], include_in_schema=False)
async def redirect_or_static(request: Request, path: str):
    """Redirect a known short code, otherwise serve a static asset."""
    service = request.app.state.service
    
    if path:
        try:
            original_url = await service.get_original_url(path, increment_count=True)
        except StorePersistenceError:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to update URL data",
            )
        
        if original_url:
            return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)
    
    return await serve_static(request)


async def serve_static(request: Request):
    """Serve the asset matching the request path, raising 404 if there is none."""
    static_files = request.app.state.static_files
    
    asset_path = static_files.get_path(request.scope)
    return await static_files.get_response(asset_path, request.scope)
