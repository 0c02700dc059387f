"""Load the catalog snapshot consumed by the filter engine."""

from __future__ import annotations

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from storefront.models.brand import Brand
from storefront.models.product import Product
from storefront.schemas.catalog import BrandOut, CatalogSnapshot, ProductOut

LOAD_ERROR = "Failed to load catalog"


async def load_catalog_snapshot(session: AsyncSession) -> CatalogSnapshot:
    """Products newest first with their brand joined, and brands by name.

    A database failure is logged and reported as an empty snapshot carrying
    ``error`` rather than raised.
    """

    try:
        products = (
            await session.scalars(
                select(Product)
                .options(selectinload(Product.brand))
                .order_by(Product.created_at.desc(), Product.id)
            )
        ).all()
        brands = (
            await session.scalars(select(Brand).order_by(Brand.name, Brand.id))
        ).all()
    except SQLAlchemyError as exc:
        logger.bind(error=str(exc)).error("catalog_load_failed")
        return CatalogSnapshot(error=LOAD_ERROR)

    snapshot = CatalogSnapshot(
        products=tuple(ProductOut.model_validate(product) for product in products),
        brands=tuple(BrandOut.model_validate(brand) for brand in brands),
    )
    logger.bind(products=len(snapshot.products), brands=len(snapshot.brands)).debug(
        "catalog_loaded"
    )
    return snapshot
