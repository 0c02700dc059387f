"""Stateful catalog browsing: a snapshot, a selection and the current result.

Every mutation recomputes the filtered products immediately, so ``products``
always reflects the latest snapshot and selection.
"""

from __future__ import annotations

from typing import Optional

from storefront.schemas.catalog import (
    ALL,
    BrandOut,
    CatalogSelection,
    CatalogSnapshot,
    ProductOut,
)
from storefront.services.catalog_filter import CatalogIndex, extract_categories


class CatalogView:
    def __init__(
        self,
        snapshot: Optional[CatalogSnapshot] = None,
        selection: Optional[CatalogSelection] = None,
    ) -> None:
        self._selection = selection or CatalogSelection()
        self._snapshot = CatalogSnapshot()
        self._index = CatalogIndex(())
        self._categories: list[str] = []
        self._products: list[ProductOut] = []
        self.load(snapshot or CatalogSnapshot())

    @property
    def selection(self) -> CatalogSelection:
        return self._selection

    @property
    def snapshot(self) -> CatalogSnapshot:
        return self._snapshot

    @property
    def error(self) -> Optional[str]:
        return self._snapshot.error

    @property
    def categories(self) -> list[str]:
        return list(self._categories)

    @property
    def brands(self) -> list[BrandOut]:
        return list(self._snapshot.brands)

    @property
    def products(self) -> list[ProductOut]:
        return list(self._products)

    @property
    def total(self) -> int:
        return len(self._snapshot.products)

    @property
    def has_active_filters(self) -> bool:
        selection = self._selection
        return selection.category != ALL or selection.brand != ALL or bool(selection.query)

    def summary(self) -> str:
        return f"Showing {len(self._products)} of {self.total} products"

    def load(self, snapshot: CatalogSnapshot) -> None:
        self._snapshot = snapshot
        self._index = CatalogIndex(snapshot.products)
        self._categories = extract_categories(snapshot.products)
        self._recompute()

    def set_category(self, category: str) -> None:
        self._select(category=category)

    def set_brand(self, brand: str) -> None:
        self._select(brand=brand)

    def set_query(self, query: str) -> None:
        self._select(query=query)

    def select_brand(self, brand: str) -> None:
        """Brand picked from the carousel: show that brand across all categories."""

        self._select(category=ALL, brand=brand or ALL, query="")

    def clear_filters(self) -> None:
        self._select(category=ALL, brand=ALL, query="")

    def _select(self, **changes: str) -> None:
        self._selection = self._selection.model_copy(update=changes)
        self._recompute()

    def _recompute(self) -> None:
        self._products = self._index.filter(self._selection)
