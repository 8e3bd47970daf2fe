"""
Blob Store Abstract Interface

Provides a unified interface for the service that holds uploaded file bytes.
The rest of the application only needs three things from it: write a file
under a path, derive the public URL of a path, and check connectivity.
"""
from abc import ABC, abstractmethod


class BlobStoreError(Exception):
    """Any failure reported by the blob store."""


class BlobQuotaExceeded(BlobStoreError):
    """The blob store refused the call because its usage quota is exhausted."""


class BlobStore(ABC):
    """Blob Store Abstract Base Class"""

    @abstractmethod
    async def put(self, path: str, content_b64: str, message: str) -> str:
        """
        Store a file

        Parameters:
        - path: Storage key, e.g. "notes/1700000000000-lecture.pdf"
        - content_b64: File content, base64 encoded
        - message: Human-readable description of the write

        Returns:
        - str: Public URL of the stored file

        Raises:
        - BlobQuotaExceeded: Usage quota exhausted
        - BlobStoreError: Any other failure
        """
        pass

    @abstractmethod
    def public_url(self, path: str) -> str:
        """Deterministic public URL for ``path``"""
        pass

    @abstractmethod
    async def check(self) -> str:
        """Probe connectivity, returning a description of the backing location"""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the store is configured"""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Store name (e.g., "GitHub contents API")"""
        pass
