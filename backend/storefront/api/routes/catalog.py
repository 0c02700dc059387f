from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.db import get_session
from storefront.schemas.catalog import (
    ALL,
    CatalogOut,
    CatalogSelection,
    CatalogViewOut,
)
from storefront.services.catalog_filter import extract_categories
from storefront.services.catalog_loader import load_catalog_snapshot
from storefront.services.catalog_view import CatalogView

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("", response_model=CatalogOut)
async def get_catalog(session: AsyncSession = Depends(get_session)) -> CatalogOut:
    """Full snapshot for clients that filter locally."""

    snapshot = await load_catalog_snapshot(session)
    return CatalogOut(
        products=list(snapshot.products),
        brands=list(snapshot.brands),
        categories=extract_categories(snapshot.products),
        error=snapshot.error,
    )


@router.get("/products", response_model=CatalogViewOut)
async def browse_products(
    category: str = ALL,
    brand: str = ALL,
    q: str = "",
    session: AsyncSession = Depends(get_session),
) -> CatalogViewOut:
    snapshot = await load_catalog_snapshot(session)
    view = CatalogView(
        snapshot, CatalogSelection(category=category, brand=brand, query=q)
    )
    items = view.products
    return CatalogViewOut(
        items=items,
        shown=len(items),
        total=view.total,
        categories=view.categories,
        selection=view.selection,
        has_active_filters=view.has_active_filters,
        summary=view.summary(),
        error=view.error,
    )
