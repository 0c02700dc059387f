"""Business settings kept on a single ``store_settings`` row.

Reads always take the earliest-created row. Writes are a read-modify-write
inside one transaction: update the row if it exists, otherwise insert it with
the fixed ``singleton_key``. The UNIQUE constraint on that column turns a lost
first-insert race into an ``IntegrityError``, after which the whole write is
re-run and lands as an update.
"""

from __future__ import annotations

from typing import Any, Optional

from loguru import logger
from sqlalchemy import Select, func, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront.core.config import settings
from storefront.core.db_retry import with_db_retry
from storefront.core.errors import (
    SettingsValidationError,
    StoreReadError,
    StoreWriteError,
)
from storefront.models.store_settings import SINGLETON_KEY, StoreSettingsRecord
from storefront.schemas.settings import SettingKey

KNOWN_KEYS: tuple[str, ...] = tuple(key.value for key in SettingKey)


def validate_setting(key: Any, value: Any) -> tuple[SettingKey, str]:
    """Return the enumerated key and the trimmed value, or raise.

    Empty values are rejected, so a setting cannot be cleared once stored.
    """

    if not key or not isinstance(value, str) or not value.strip():
        raise SettingsValidationError("Missing key or empty value")
    try:
        setting_key = SettingKey(key)
    except ValueError:
        raise SettingsValidationError("Invalid setting key") from None
    return setting_key, value.strip()


def _earliest(stmt: Select) -> Select:
    return stmt.order_by(
        StoreSettingsRecord.created_at.asc(), StoreSettingsRecord.id.asc()
    ).limit(1)


class SettingsStore:
    """Get/set access to the singleton settings row."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        write_attempts: Optional[int] = None,
    ) -> None:
        self._session_factory = session_factory
        self._write_attempts = max(1, write_attempts or settings.SETTINGS_WRITE_ATTEMPTS)

    async def read(self) -> dict[str, str]:
        """Map every known key to its stored value, ``""`` when unset or absent."""

        try:
            async with self._session_factory() as session:
                record = await session.scalar(_earliest(select(StoreSettingsRecord)))
        except SQLAlchemyError as exc:
            logger.bind(error=str(exc)).error("settings_read_failed")
            raise StoreReadError("Failed to read store settings") from exc

        if record is None:
            return {key: "" for key in KNOWN_KEYS}
        return {key: getattr(record, key) or "" for key in KNOWN_KEYS}

    async def write(self, key: Any, value: Any) -> None:
        """Store ``value.strip()`` under ``key`` on the singleton row."""

        setting_key, cleaned = validate_setting(key, value)
        column = setting_key.value

        for attempt in range(1, self._write_attempts + 1):
            try:
                async with self._session_factory() as session:

                    async def _write_once() -> bool:
                        async with session.begin():
                            return await self._apply(session, column, cleaned)

                    inserted = await with_db_retry(session, _write_once)
            except IntegrityError as exc:
                if attempt == self._write_attempts:
                    logger.bind(key=column, attempts=attempt).error(
                        "settings_insert_conflict_exhausted"
                    )
                    raise StoreWriteError(f"Failed to update setting {column}") from exc
                logger.bind(key=column, attempt=attempt).warning(
                    "settings_insert_conflict"
                )
                continue
            except SQLAlchemyError as exc:
                logger.bind(key=column, error=str(exc)).error("settings_write_failed")
                raise StoreWriteError(f"Failed to update setting {column}") from exc

            logger.bind(key=column, inserted=inserted).info("settings_updated")
            return

    async def _find_singleton_id(self, session: AsyncSession) -> Optional[int]:
        stmt = _earliest(select(StoreSettingsRecord.id)).with_for_update(
            nowait=settings.DB_NOWAIT_LOCKS
        )
        return await session.scalar(stmt)

    async def _apply(self, session: AsyncSession, column: str, value: str) -> bool:
        """Update or create the row; returns True when a row was inserted."""

        record_id = await self._find_singleton_id(session)
        if record_id is not None:
            await session.execute(
                update(StoreSettingsRecord)
                .where(StoreSettingsRecord.id == record_id)
                .values({column: value, "updated_at": func.now()})
            )
            return False

        await session.execute(
            insert(StoreSettingsRecord).values(
                {"singleton_key": SINGLETON_KEY, column: value}
            )
        )
        return True
