from notehub.core.quota import QuotaGate, upload_gate
from notehub.services.blob_base import BlobStore
from notehub.services.blob_factory import get_blob_store


async def blob_store_dependency() -> BlobStore:
    """
    FastAPI dependency providing the blob store used for uploads.

    Tests replace it through ``app.dependency_overrides`` with an in-memory
    store so no request leaves the process.

    Usage:
        @router.post("/upload-note")
        async def upload(store: BlobStore = Depends(blob_store_dependency)):
            ...
    """
    return get_blob_store()


async def quota_gate_dependency() -> QuotaGate:
    """FastAPI dependency providing the process-wide upload quota gate."""
    return upload_gate
