"""Translate persistence failures into HTTP errors at the route boundary."""

from __future__ import annotations

from typing import NoReturn

from fastapi import HTTPException, status
from sqlalchemy.exc import OperationalError

from storefront.core.db_retry import LOCK_NOWAIT_ERROR_CODE, extract_error_code
from storefront.core.errors import BackingStoreError


def is_lock_conflict(exc: BaseException | None) -> bool:
    """True when ``exc`` is a NOWAIT row-lock failure."""

    if not isinstance(exc, OperationalError):
        return False
    code, _ = extract_error_code(exc)
    message = str(getattr(exc, "orig", exc)).lower()
    return (
        code == LOCK_NOWAIT_ERROR_CODE
        or "could not obtain lock" in message
        or "could not acquire" in message
    )


def raise_http_for_store_error(exc: BackingStoreError, detail: str) -> NoReturn:
    """Raise 409 for lock conflicts and 500 with ``detail`` for everything else."""

    if is_lock_conflict(exc.__cause__):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Resource is locked by another request. Please retry shortly.",
        ) from exc
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=detail,
    ) from exc
