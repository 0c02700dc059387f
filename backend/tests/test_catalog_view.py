from storefront.schemas.catalog import (
    BrandOut,
    CatalogSelection,
    CatalogSnapshot,
    ProductOut,
)
from storefront.services.catalog_view import CatalogView

GLOW = BrandOut(id="b1", name="Glow")
LUXE = BrandOut(id="b2", name="Luxe")
ROSE = ProductOut(id="p1", name="Rose Cream", category="Skincare", brand=GLOW)
LIPSTICK = ProductOut(id="p2", name="Matte Lipstick", category="Makeup", brand=LUXE)
BALM = ProductOut(id="p3", name="Lip Balm", category="Skincare", brand=LUXE)

SNAPSHOT = CatalogSnapshot(products=(ROSE, LIPSTICK, BALM), brands=(GLOW, LUXE))


def test_empty_view():
    view = CatalogView()

    assert view.products == []
    assert view.categories == []
    assert view.brands == []
    assert view.summary() == "Showing 0 of 0 products"
    assert not view.has_active_filters


def test_each_setter_recomputes_immediately():
    view = CatalogView(SNAPSHOT)
    assert view.products == [ROSE, LIPSTICK, BALM]

    view.set_category("Skincare")
    assert view.products == [ROSE, BALM]

    view.set_brand("Luxe")
    assert view.products == [BALM]

    view.set_query("rose")
    assert view.products == []
    assert view.summary() == "Showing 0 of 3 products"
    assert view.has_active_filters


def test_load_recomputes_against_new_snapshot():
    view = CatalogView(SNAPSHOT, CatalogSelection(category="Makeup"))
    assert view.products == [LIPSTICK]

    view.load(CatalogSnapshot(products=(ROSE,), brands=(GLOW,)))

    assert view.products == []
    assert view.categories == ["Skincare"]
    assert view.selection.category == "Makeup"


def test_select_brand_resets_category_and_query():
    view = CatalogView(SNAPSHOT)
    view.set_category("Makeup")
    view.set_query("matte")

    view.select_brand("Luxe")

    assert view.selection == CatalogSelection(brand="Luxe")
    assert view.products == [LIPSTICK, BALM]

    view.select_brand("all")
    assert view.selection == CatalogSelection()
    assert not view.has_active_filters


def test_clear_filters():
    view = CatalogView(SNAPSHOT, CatalogSelection(category="Skincare", brand="Glow", query="x"))

    view.clear_filters()

    assert view.selection == CatalogSelection()
    assert view.products == [ROSE, LIPSTICK, BALM]
    assert view.summary() == "Showing 3 of 3 products"


def test_categories_and_brands_come_from_snapshot():
    view = CatalogView(SNAPSHOT)

    assert view.categories == ["Skincare", "Makeup"]
    assert view.brands == [GLOW, LUXE]


def test_error_snapshot_is_empty_with_indicator():
    view = CatalogView(CatalogSnapshot(error="Failed to load catalog"))

    assert view.error == "Failed to load catalog"
    assert view.products == []
    assert view.total == 0


def test_returned_lists_are_copies():
    view = CatalogView(SNAPSHOT)

    view.products.clear()
    view.categories.clear()

    assert len(view.products) == 3
    assert view.categories == ["Skincare", "Makeup"]
