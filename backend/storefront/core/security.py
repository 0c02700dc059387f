"""Admin password verification and JWT helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict

import anyio
from jose import jwt
from passlib.context import CryptContext

from storefront.core.config import settings

ALGORITHM = "HS256"
ADMIN_SUBJECT = "admin"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
_security_sem = anyio.Semaphore(settings.SECURITY_MAX_CONCURRENCY)


async def run_in_thread_security(func: Callable[..., Any], *args: Any) -> Any:
    """Run a CPU-bound hashing call in a worker thread with bounded concurrency."""

    async with _security_sem:
        return await anyio.to_thread.run_sync(func, *args)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True if the plain password matches the stored hash."""

    return pwd_context.verify(plain_password, hashed_password)


async def verify_admin_password(plain: str) -> bool:
    """Check ``plain`` against the configured admin hash off the event loop."""

    hashed = settings.ADMIN_PASSWORD_HASH
    if not hashed:
        return False
    return await run_in_thread_security(verify_password, plain, hashed)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def create_access_token(data: Dict[str, Any]) -> str:
    now = datetime.now(timezone.utc)
    minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES or 15
    to_encode = data.copy()
    to_encode.update(
        {
            "exp": now + timedelta(minutes=minutes),
            "iat": now,
            "nbf": now,
            "iss": settings.JWT_ISSUER,
            "aud": settings.JWT_AUDIENCE,
            "type": "access",
        }
    )
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """Decode and validate a token; raises ``jose.JWTError`` when invalid."""

    return jwt.decode(
        token,
        settings.SECRET_KEY,
        algorithms=[ALGORITHM],
        audience=settings.JWT_AUDIENCE,
        issuer=settings.JWT_ISSUER,
    )
