"""ORM model exports for convenient imports elsewhere in the app."""

from storefront.models.base import Base
from storefront.models.brand import Brand
from storefront.models.product import Product
from storefront.models.store_settings import SINGLETON_KEY, StoreSettingsRecord

__all__ = [
    "Base",
    "Brand",
    "Product",
    "SINGLETON_KEY",
    "StoreSettingsRecord",
]
