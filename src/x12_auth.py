"""API-key gate for the x12json API.

``ApiKeyMiddleware`` wraps the app and guards ``/convert``: requests there
without the right ``X-API-KEY`` header are answered with 401 before any route
handler (and so before the X12 parser) runs. Other paths (health, docs, 404s)
pass through. Apps built without it serve requests openly.
"""

from __future__ import annotations

from typing import Iterable, Optional
import secrets

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.types import ASGIApp

from x12_logging import get_logger

API_KEY_HEADER = "X-API-KEY"
UNAUTHORIZED_MESSAGE = "Unauthorized: Invalid or missing API Key"

logger = get_logger()


def is_valid_api_key(supplied: Optional[str], expected: str) -> bool:
    """Constant-time comparison; a missing header never matches."""
    if supplied is None:
        return False
    return secrets.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))


class ApiKeyMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: ASGIApp,
        api_secret: str,
        header_name: str = API_KEY_HEADER,
        protected_paths: Iterable[str] = ("/convert",),
    ) -> None:
        super().__init__(app)
        self.api_secret = api_secret
        self.header_name = header_name
        self.protected_paths = frozenset(protected_paths)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path not in self.protected_paths:
            return await call_next(request)

        if not is_valid_api_key(request.headers.get(self.header_name), self.api_secret):
            client = request.client.host if request.client else "unknown"
            logger.warning(f"Rejected {request.method} {request.url.path} from {client}: invalid or missing API key")
            return PlainTextResponse(UNAUTHORIZED_MESSAGE, status_code=401)

        return await call_next(request)
