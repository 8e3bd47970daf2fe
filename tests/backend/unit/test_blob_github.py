"""
Unit tests for the GitHub contents API blob store.
HTTP traffic is served by httpx.MockTransport; nothing leaves the process.
"""
import json

import httpx
import pytest

from notehub.services.blob_base import BlobQuotaExceeded, BlobStoreError
from notehub.services.blob_github import GitHubBlobStore


pytestmark = pytest.mark.asyncio


def make_store(handler, **overrides) -> GitHubBlobStore:
    kwargs = {"token": "ghp_test", "owner": "campus", "repo": "notes-store", "branch": "main"}
    kwargs.update(overrides)
    return GitHubBlobStore(transport=httpx.MockTransport(handler), **kwargs)


async def test_put_commits_file_and_returns_raw_url():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["auth"] = request.headers["authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, json={"content": {"path": "notes/1-a.pdf"}})

    store = make_store(handler)
    url = await store.put("notes/1-a.pdf", "JVBERg==", "Upload note: Entropy")

    assert url == "https://raw.githubusercontent.com/campus/notes-store/main/notes/1-a.pdf"
    assert seen["method"] == "PUT"
    assert seen["path"] == "/repos/campus/notes-store/contents/notes/1-a.pdf"
    assert seen["auth"] == "Bearer ghp_test"
    assert seen["body"] == {"message": "Upload note: Entropy", "content": "JVBERg==", "branch": "main"}


@pytest.mark.parametrize("response", [
    httpx.Response(403, json={"message": "API rate limit exceeded for user"}),
    httpx.Response(403, headers={"x-ratelimit-remaining": "0"}, json={"message": "Forbidden"}),
    httpx.Response(429, json={"message": "secondary limit"}),
])
async def test_put_rate_limited(response):
    store = make_store(lambda request: response)
    with pytest.raises(BlobQuotaExceeded):
        await store.put("notes/1-a.pdf", "AA==", "msg")


async def test_put_other_failures():
    store = make_store(lambda request: httpx.Response(403, json={"message": "Resource not accessible"}))
    with pytest.raises(BlobStoreError) as exc_info:
        await store.put("notes/1-a.pdf", "AA==", "msg")
    assert not isinstance(exc_info.value, BlobQuotaExceeded)

    store = make_store(lambda request: httpx.Response(500, text="boom"))
    with pytest.raises(BlobStoreError, match="HTTP 500"):
        await store.put("notes/1-a.pdf", "AA==", "msg")


async def test_put_network_error():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    store = make_store(handler)
    with pytest.raises(BlobStoreError, match="request failed"):
        await store.put("notes/1-a.pdf", "AA==", "msg")


async def test_unconfigured_store_never_calls_api():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(201)

    store = make_store(handler, token="")
    assert not store.is_available()
    with pytest.raises(BlobStoreError, match="not configured"):
        await store.put("notes/1-a.pdf", "AA==", "msg")
    with pytest.raises(BlobStoreError):
        await store.check()
    assert calls == []


async def test_check_reports_repository():
    def handler(request):
        assert request.url.path == "/repos/campus/notes-store"
        return httpx.Response(200, json={"full_name": "campus/notes-store"})

    assert await make_store(handler).check() == "campus/notes-store"

    store = make_store(lambda request: httpx.Response(401, json={"message": "Bad credentials"}))
    with pytest.raises(BlobStoreError, match="HTTP 401"):
        await store.check()
