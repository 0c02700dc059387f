from fastapi import HTTPException, Request, status
from jose import JWTError

from storefront.core.logging import admin_ctx_var
from storefront.core.security import ADMIN_SUBJECT, decode_access_token
from storefront.services.settings_store import SettingsStore


def get_settings_store(request: Request) -> SettingsStore:
    return request.app.state.settings_store


async def get_current_admin(request: Request) -> str:
    """Require a valid admin bearer token and bind it to the request context."""

    auth = request.headers.get("Authorization")
    if not auth or not auth.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated"
        )
    token = auth.split(" ", 1)[1]
    try:
        payload = decode_access_token(token)
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token"
        )
    if payload.get("type") != "access" or payload.get("sub") != ADMIN_SUBJECT:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token"
        )

    request.state.admin = ADMIN_SUBJECT
    admin_ctx_var.set(ADMIN_SUBJECT)
    return ADMIN_SUBJECT
