"""Request body limit for the plant collection API."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from app.core.config import get_settings

logger = logging.getLogger(__name__)

BODY_METHODS = {"POST", "PUT", "PATCH"}


def _declared_length(request: Request) -> Optional[int]:
    raw = request.headers.get("content-length")
    if not raw:
        return None
    return int(raw)


class MaxBodySizeMiddleware(BaseHTTPMiddleware):
    """
    Reject plant and preference payloads over MAX_REQUEST_BODY_BYTES.

    Bodies carry identification results and care text only. Requests
    without a Content-Length are read (Starlette caches the body) and
    measured.
    """

    async def dispatch(self, request: Request, call_next: Callable[[Request], Response]) -> Response:
        if request.method not in BODY_METHODS:
            return await call_next(request)

        limit = get_settings().MAX_REQUEST_BODY_BYTES

        try:
            size = _declared_length(request)
        except ValueError:
            return JSONResponse({"detail": "Invalid Content-Length header."}, status_code=400)

        if size is None:
            size = len(await request.body())

        if size > limit:
            logger.warning(f"Rejected {request.method} {request.url.path}: {size} bytes > {limit}")
            return JSONResponse(
                {"detail": f"Payload too large (limit {limit} bytes)."},
                status_code=413,
            )

        return await call_next(request)
