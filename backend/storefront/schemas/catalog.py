from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

ALL = "all"


class BrandOut(BaseModel):
    """Read-only brand snapshot."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    name: str
    slug: Optional[str] = None
    logo_url: Optional[str] = None
    description: Optional[str] = None
    website_url: Optional[str] = None


class ProductOut(BaseModel):
    """Read-only product snapshot with its optional joined brand."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    name: str
    description: str = ""
    category: str
    brand_id: Optional[str] = None
    brand: Optional[BrandOut] = None
    price: Optional[Decimal] = None
    how_to_use: Optional[str] = None
    image_url: Optional[str] = None
    slug: Optional[str] = None
    whatsapp_message: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("description", mode="before")
    @classmethod
    def _none_description_is_empty(cls, value):
        return "" if value is None else value


class CatalogSelection(BaseModel):
    """The user's current filter choices; ``"all"`` disables a dimension."""

    model_config = ConfigDict(frozen=True)

    category: str = ALL
    brand: str = ALL
    query: str = ""


class CatalogSnapshot(BaseModel):
    """Point-in-time catalog handed to the filter engine.

    ``error`` is set, and both sequences are empty, when loading failed.
    """

    model_config = ConfigDict(frozen=True)

    products: tuple[ProductOut, ...] = ()
    brands: tuple[BrandOut, ...] = ()
    error: Optional[str] = None


class CatalogOut(BaseModel):
    products: List[ProductOut]
    brands: List[BrandOut]
    categories: List[str]
    error: Optional[str] = None


class CatalogViewOut(BaseModel):
    items: List[ProductOut]
    shown: int
    total: int
    categories: List[str]
    selection: CatalogSelection
    has_active_filters: bool
    summary: str
    error: Optional[str] = None
