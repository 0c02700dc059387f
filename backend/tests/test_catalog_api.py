from datetime import datetime

import pytest
from sqlalchemy import insert

from storefront.core.db import build_engine, build_session_factory
from storefront.core.config import settings
from storefront.models import Brand, Product
from storefront.services.catalog_loader import LOAD_ERROR, load_catalog_snapshot


@pytest.fixture
async def seeded(session_factory, anyio_backend):
    async with session_factory() as session:
        async with session.begin():
            await session.execute(
                insert(Brand),
                [
                    {"id": "b-luxe", "name": "Luxe", "slug": "luxe"},
                    {"id": "b-glow", "name": "Glow", "slug": "glow"},
                ],
            )
            await session.execute(
                insert(Product),
                [
                    {
                        "id": "p-rose",
                        "name": "Rose Cream",
                        "description": "Hydrating night cream",
                        "category": "Skincare",
                        "brand_id": "b-glow",
                        "created_at": datetime(2024, 1, 1),
                    },
                    {
                        "id": "p-lip",
                        "name": "Matte Lipstick",
                        "description": "Long lasting colour",
                        "category": "Makeup",
                        "brand_id": "b-luxe",
                        "created_at": datetime(2024, 2, 1),
                    },
                    {
                        "id": "p-mask",
                        "name": "Clay Mask",
                        "description": "Purifying glow mask",
                        "category": "Skincare",
                        "brand_id": "b-deleted",
                        "created_at": datetime(2024, 3, 1),
                    },
                ],
            )
    return session_factory


@pytest.mark.anyio
async def test_loader_orders_products_newest_first_and_brands_by_name(seeded):
    async with seeded() as session:
        snapshot = await load_catalog_snapshot(session)

    assert snapshot.error is None
    assert [p.id for p in snapshot.products] == ["p-mask", "p-lip", "p-rose"]
    assert [b.name for b in snapshot.brands] == ["Glow", "Luxe"]
    by_id = {p.id: p for p in snapshot.products}
    assert by_id["p-rose"].brand.name == "Glow"
    assert by_id["p-mask"].brand is None


@pytest.mark.anyio
async def test_loader_failure_returns_empty_snapshot_with_error(anyio_backend):
    engine = build_engine(settings.model_copy(update={"DB_URL": "sqlite+aiosqlite://"}))
    try:
        async with build_session_factory(engine)() as session:
            snapshot = await load_catalog_snapshot(session)
    finally:
        await engine.dispose()

    assert snapshot.products == ()
    assert snapshot.brands == ()
    assert snapshot.error == LOAD_ERROR


@pytest.mark.anyio
async def test_get_catalog(client, seeded):
    resp = await client.get("/api/catalog")

    assert resp.status_code == 200
    body = resp.json()
    assert [p["name"] for p in body["products"]] == ["Clay Mask", "Matte Lipstick", "Rose Cream"]
    assert body["categories"] == ["Skincare", "Makeup"]
    assert [b["name"] for b in body["brands"]] == ["Glow", "Luxe"]
    assert body["error"] is None


@pytest.mark.anyio
async def test_browse_products_applies_selection(client, seeded):
    resp = await client.get("/api/catalog/products", params={"q": "GLOW"})

    assert resp.status_code == 200
    body = resp.json()
    assert [p["id"] for p in body["items"]] == ["p-mask", "p-rose"]
    assert body["shown"] == 2
    assert body["total"] == 3
    assert body["has_active_filters"] is True
    assert body["summary"] == "Showing 2 of 3 products"
    assert body["selection"] == {"category": "all", "brand": "all", "query": "GLOW"}


@pytest.mark.anyio
async def test_browse_products_brand_filter_skips_dangling_brand(client, seeded):
    resp = await client.get(
        "/api/catalog/products", params={"category": "Skincare", "brand": "Glow"}
    )

    body = resp.json()
    assert [p["id"] for p in body["items"]] == ["p-rose"]


@pytest.mark.anyio
async def test_browse_products_defaults_return_everything(client, seeded):
    resp = await client.get("/api/catalog/products")

    body = resp.json()
    assert body["shown"] == body["total"] == 3
    assert body["has_active_filters"] is False
