"""Custom ASGI middleware used by the FastAPI app."""

from __future__ import annotations

import time
import uuid

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from storefront.core.config import settings
from storefront.core.logging import admin_ctx_var, request_id_ctx_var

# Probe traffic is logged at DEBUG so it does not drown the access log.
_PROBE_PATHS = frozenset({"/api/healthz", "/api/readyz"})


class RequestContextLogMiddleware(BaseHTTPMiddleware):
    """Binds a request ID to the log context and emits one access log per request."""

    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.state.request_id = request_id
        request_token = request_id_ctx_var.set(request_id)
        admin_token = admin_ctx_var.set("-")
        start = time.perf_counter()
        response: Response | None = None
        try:
            response = await call_next(request)
            return response
        finally:
            path = request.url.path
            entry = logger.bind(
                method=request.method,
                path=path,
                status=response.status_code if response else 500,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
                client=request.client.host if request.client else None,
            )
            if path in _PROBE_PATHS:
                entry.debug("request_completed")
            else:
                entry.info("request_completed")
            if response is not None:
                response.headers.setdefault("X-Request-ID", request_id)
            request_id_ctx_var.reset(request_token)
            admin_ctx_var.reset(admin_token)


class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject requests whose declared body exceeds ``MAX_BODY_BYTES``."""

    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        declared = request.headers.get("content-length")
        if declared is not None and declared.isdigit():
            if int(declared) > settings.MAX_BODY_BYTES:
                return JSONResponse(
                    status_code=413,
                    content={"detail": "Request entity too large"},
                )
        return await call_next(request)
