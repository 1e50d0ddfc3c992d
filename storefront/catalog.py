"""
Catalog query engine — filtering, ordering and paging of products.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Optional, TypeVar

from storefront.models import Product

T = TypeVar("T")

ALL_CATEGORIES = "all"
DEFAULT_PAGE_SIZE = 20


@dataclass
class ProductFilters:
    """Catalog query parameters; None means "no constraint"."""

    category: Optional[str] = None
    search: Optional[str] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE


def matches_search(product: Product, term: str) -> bool:
    """Case-insensitive substring match on title, description or any tag."""
    term = term.lower()
    return (
        term in product.title.lower()
        or term in product.description.lower()
        or any(term in tag.lower() for tag in product.tags)
    )


def filter_products(products: Iterable[Product], filters: ProductFilters) -> List[Product]:
    """Apply category, search and price bounds, then sort newest first."""
    result = list(products)

    if filters.category and filters.category != ALL_CATEGORIES:
        result = [p for p in result if p.category == filters.category]

    if filters.search:
        result = [p for p in result if matches_search(p, filters.search)]

    if filters.min_price is not None:
        result = [p for p in result if p.price >= filters.min_price]

    if filters.max_price is not None:
        result = [p for p in result if p.price <= filters.max_price]

    return newest_first(result)


def newest_first(records: Iterable[T]) -> List[T]:
    """Sort by created_at descending.

    `records` must be in insertion order; records sharing a timestamp come
    out most-recently-inserted first.
    """
    return sorted(reversed(list(records)), key=lambda r: r.created_at, reverse=True)
