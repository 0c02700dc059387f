from fastapi import APIRouter, HTTPException, Request, status
from loguru import logger

from storefront.core.config import settings
from storefront.core.logging import admin_ctx_var
from storefront.core.rate_limit import limiter
from storefront.core.security import (
    ADMIN_SUBJECT,
    create_access_token,
    verify_admin_password,
)
from storefront.schemas.auth import LoginRequest, LoginResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
@limiter.limit(settings.LOGIN_RATE)
async def login(request: Request, payload: LoginRequest) -> LoginResponse:
    """Exchange the admin password for a short-lived bearer token."""

    remote_addr = request.client.host if request.client else None
    if not await verify_admin_password(payload.password):
        logger.bind(remote_addr=remote_addr).warning("admin_login_failed")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials"
        )

    admin_ctx_var.set(ADMIN_SUBJECT)
    logger.bind(remote_addr=remote_addr).info("admin_login")
    return LoginResponse(
        access_token=create_access_token({"sub": ADMIN_SUBJECT}),
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
