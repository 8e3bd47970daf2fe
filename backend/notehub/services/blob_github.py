"""
GitHub Contents API Adapter

Stores uploaded notes as files committed to a GitHub repository and serves
them through raw.githubusercontent.com.
"""
import logging
from typing import Optional

import httpx

from .blob_base import BlobStore, BlobStoreError, BlobQuotaExceeded
from ..config import settings

logger = logging.getLogger("uvicorn.error")


def _is_rate_limited(resp: httpx.Response) -> bool:
    """GitHub signals quota exhaustion with 403/429 and a "rate limit" message."""
    if resp.status_code == 429:
        return True
    if resp.status_code != 403:
        return False
    if resp.headers.get("x-ratelimit-remaining") == "0":
        return True
    try:
        message = resp.json().get("message", "")
    except ValueError:
        message = resp.text
    return "rate limit" in (message or "").lower()


class GitHubBlobStore(BlobStore):
    """GitHub contents API blob store"""

    def __init__(
        self,
        token: Optional[str] = None,
        owner: Optional[str] = None,
        repo: Optional[str] = None,
        branch: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.token = token if token is not None else settings.github_token
        self.owner = owner if owner is not None else settings.github_owner
        self.repo = repo if repo is not None else settings.github_repo
        self.branch = branch or settings.github_branch
        self.api_url = settings.github_api_url.rstrip("/")
        self.raw_url = settings.github_raw_url.rstrip("/")
        self.timeout = settings.blob_timeout_seconds
        self._transport = transport  # Injected in tests

    @property
    def name(self) -> str:
        return "GitHub contents API"

    def is_available(self) -> bool:
        """Check if token and target repository are configured"""
        return bool(self.token and self.owner and self.repo)

    def public_url(self, path: str) -> str:
        return f"{self.raw_url}/{self.owner}/{self.repo}/{self.branch}/{path}"

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.api_url, timeout=self.timeout, transport=self._transport)

    async def put(self, path: str, content_b64: str, message: str) -> str:
        if not self.is_available():
            raise BlobStoreError(f"{self.name}: GITHUB_TOKEN/GITHUB_OWNER/GITHUB_REPO not configured")

        payload = {
            "message": message,
            "content": content_b64,
            "branch": self.branch,
        }
        logger.info("[github] PUT %s/%s:%s", self.owner, self.repo, path)
        try:
            async with self._client() as client:
                resp = await client.put(f"/repos/{self.owner}/{self.repo}/contents/{path}",
                                        headers=self._headers(), json=payload)
        except httpx.HTTPError as e:
            raise BlobStoreError(f"{self.name}: request failed: {e!r}") from e

        if _is_rate_limited(resp):
            raise BlobQuotaExceeded(f"{self.name}: rate limit exceeded")
        if resp.status_code not in (200, 201):
            raise BlobStoreError(f"{self.name}: HTTP {resp.status_code}: {resp.text[:200]}")
        return self.public_url(path)

    async def check(self) -> str:
        if not self.is_available():
            raise BlobStoreError(f"{self.name}: GITHUB_TOKEN/GITHUB_OWNER/GITHUB_REPO not configured")
        try:
            async with self._client() as client:
                resp = await client.get(f"/repos/{self.owner}/{self.repo}", headers=self._headers())
        except httpx.HTTPError as e:
            raise BlobStoreError(f"{self.name}: request failed: {e!r}") from e
        if resp.status_code != 200:
            raise BlobStoreError(f"{self.name}: HTTP {resp.status_code}: {resp.text[:200]}")
        return resp.json().get("full_name") or f"{self.owner}/{self.repo}"


# Global singleton
github_blob_store = GitHubBlobStore()
