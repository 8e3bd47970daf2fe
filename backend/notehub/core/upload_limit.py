# notehub/core/upload_limit.py
"""Transport-level guard that rejects oversized upload bodies before parsing."""
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from notehub.core.errors import FileTooLarge

# Room for multipart boundaries and the descriptive form fields
_MULTIPART_OVERHEAD = 64 * 1024


class UploadSizeLimitMiddleware(BaseHTTPMiddleware):
    """Refuse requests to upload paths whose declared Content-Length is over the ceiling."""

    def __init__(self, app: Any, max_bytes: int, paths: frozenset[str] = frozenset({"/upload-note"})) -> None:
        super().__init__(app)
        self.max_bytes = max_bytes
        self.paths = paths

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method == "POST" and request.url.path in self.paths:
            declared = request.headers.get("content-length")
            if declared and declared.isdigit() and int(declared) > self.max_bytes + _MULTIPART_OVERHEAD:
                err = FileTooLarge()
                return JSONResponse(status_code=err.status_code, content=err.to_dict())
        return await call_next(request)
