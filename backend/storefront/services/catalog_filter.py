"""In-memory catalog filtering over a product snapshot.

Three independent predicates narrow the result: category (exact), brand
(exact joined brand name) and a case-insensitive free-text query matched
against name, description, brand name and category. ``"all"`` and the empty
query disable their dimension. The input order is preserved and inputs are
never mutated.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from storefront.schemas.catalog import ALL, CatalogSelection, ProductOut


def extract_categories(products: Iterable[ProductOut]) -> list[str]:
    """Distinct categories in first-occurrence order."""

    return list(dict.fromkeys(product.category for product in products))


def matches_category(product: ProductOut, category: str) -> bool:
    return category == ALL or product.category == category


def matches_brand(product: ProductOut, brand_name: str) -> bool:
    if brand_name == ALL:
        return True
    return product.brand is not None and product.brand.name == brand_name


def _search_fields(product: ProductOut) -> tuple[str, ...]:
    fields = [product.name, product.description, product.category]
    if product.brand is not None:
        fields.append(product.brand.name)
    return tuple(field.lower() for field in fields if field)


def matches_query(product: ProductOut, query: str) -> bool:
    if not query:
        return True
    needle = query.lower()
    return any(needle in field for field in _search_fields(product))


def filter_products(
    products: Sequence[ProductOut], selection: CatalogSelection
) -> list[ProductOut]:
    """Products satisfying every predicate of ``selection``, in snapshot order."""

    return [
        product
        for product in products
        if matches_category(product, selection.category)
        and matches_brand(product, selection.brand)
        and matches_query(product, selection.query)
    ]


class CatalogIndex:
    """Snapshot with the search fields lower-cased once up front.

    ``filter`` returns exactly what ``filter_products`` returns for the same
    snapshot; it only avoids re-lowering every field on each query.
    """

    __slots__ = ("_entries",)

    def __init__(self, products: Iterable[ProductOut]) -> None:
        self._entries: tuple[tuple[ProductOut, tuple[str, ...]], ...] = tuple(
            (product, _search_fields(product)) for product in products
        )

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def products(self) -> list[ProductOut]:
        return [product for product, _ in self._entries]

    def filter(self, selection: CatalogSelection) -> list[ProductOut]:
        needle: Optional[str] = selection.query.lower() if selection.query else None
        result = []
        for product, fields in self._entries:
            if not matches_category(product, selection.category):
                continue
            if not matches_brand(product, selection.brand):
                continue
            if needle is not None and not any(needle in field for field in fields):
                continue
            result.append(product)
        return result
