import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Numeric, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.models.base import Base
from storefront.models.brand import Brand


class Product(Base):
    """ORM model for the ``products`` table.

    ``brand`` is loaded eagerly by the catalog loader; it is ``None`` when the
    product has no brand or its brand was deleted.
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2))
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    how_to_use: Mapped[Optional[str]] = mapped_column(Text)
    category: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    brand_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("brands.id", ondelete="SET NULL"), index=True
    )
    image_url: Mapped[Optional[str]] = mapped_column(String(1024))
    slug: Mapped[Optional[str]] = mapped_column(String(255), unique=True)
    whatsapp_message: Mapped[Optional[str]] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP")
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime)

    brand: Mapped[Optional[Brand]] = relationship(lazy="raise")
