"""Rate limiting for the admin login endpoint, backed by SlowAPI."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address


def client_key(request: Request) -> str:
    """Key requests by the first forwarded hop when behind a proxy."""

    forwarded = request.headers.get("X-Forwarded-For", "")
    first_hop = forwarded.split(",", 1)[0].strip()
    return first_hop or get_remote_address(request)


limiter = Limiter(key_func=client_key)


def init_rate_limiter(app: FastAPI) -> None:
    """Attach the limiter, its middleware and the 429 handler to the app."""

    app.state.limiter = limiter
    app.add_middleware(SlowAPIMiddleware)

    async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
        return JSONResponse(
            status_code=429,
            content={"detail": f"Too many requests: {exc.detail}"},
            headers={"Retry-After": "60"},
        )

    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
