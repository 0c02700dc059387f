from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from storefront.models.base import Base

# Every row written by the settings store carries this value, so the UNIQUE
# constraint below rejects a second concurrent first-insert.
SINGLETON_KEY = "primary"


class StoreSettingsRecord(Base):
    """Single-row table holding the storefront's business settings."""

    __tablename__ = "store_settings"
    __table_args__ = (
        UniqueConstraint("singleton_key", name="uq_store_settings_singleton"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    singleton_key: Mapped[Optional[str]] = mapped_column(String(16))
    whatsapp_number: Mapped[Optional[str]] = mapped_column(Text)
    business_name: Mapped[Optional[str]] = mapped_column(Text)
    business_email: Mapped[Optional[str]] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP")
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime)
