# notehub/api/routers/storage.py
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from notehub.api.deps import blob_store_dependency
from notehub.services.blob_base import BlobStore, BlobStoreError

router = APIRouter(tags=["storage"])


@router.get("/test-github")
async def test_github(store: BlobStore = Depends(blob_store_dependency)):
    """
    Check that the blob store repository is reachable with the configured token.

    Returns:
        dict: {"success": True, "message": ..., "repository": "owner/repo"}
        or a 500 response with success=False and the error text
    """
    try:
        repository = await store.check()
    except BlobStoreError as e:
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "GitHub connection failed", "error": str(e)},
        )
    return {"success": True, "message": "GitHub connection successful", "repository": repository}
