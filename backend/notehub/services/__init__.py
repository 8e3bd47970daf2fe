"""
Services Module

Workflows behind the HTTP routers and the external blob store:
- Accounts: signup, login, security-password recovery
- Channels: join codes, membership, channel details
- Uploads: store file, credit uploader, attach to channel
- Notes: global note library
- Blob store: GitHub contents API
"""

# Blob store interface
from .blob_base import (
    BlobStore,
    BlobStoreError,
    BlobQuotaExceeded,
)
from .blob_factory import get_blob_store
from .blob_github import GitHubBlobStore, github_blob_store

__all__ = [
    # Blob store
    "BlobStore",
    "BlobStoreError",
    "BlobQuotaExceeded",
    "get_blob_store",
    "GitHubBlobStore",
    "github_blob_store",
]
