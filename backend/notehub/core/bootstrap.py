# notehub/core/bootstrap.py
"""
Bootstrap module for application initialization.
Reports on external collaborators the API depends on when it starts.
"""
import logging

from notehub.services.blob_base import BlobStore

logger = logging.getLogger("uvicorn.error")


def report_blob_store(store: BlobStore) -> bool:
    """
    Log whether the blob store is configured.

    The API still starts without it: every endpoint except uploads keeps
    working, and uploads fail with a storage error until the
    GITHUB_TOKEN / GITHUB_OWNER / GITHUB_REPO variables are set.

    Returns:
        True if the store reports itself available
    """
    if store.is_available():
        logger.info("[bootstrap] blob store ready -> %s", store.name)
        return True
    logger.warning("[bootstrap] %s is not configured -> uploads will fail until credentials are set.",
                   store.name)
    return False
