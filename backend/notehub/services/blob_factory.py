"""
Blob Store Factory

Uses the GitHub contents API for file storage
"""
from .blob_base import BlobStore
from .blob_github import github_blob_store


def get_blob_store() -> BlobStore:
    """
    Get blob store

    Returns:
    - BlobStore: GitHub contents API store instance

    Note:
    - Need to configure GITHUB_TOKEN, GITHUB_OWNER and GITHUB_REPO in .env;
      an unconfigured store is still returned and fails on use
    """
    return github_blob_store
