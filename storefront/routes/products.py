"""
Product routes — public catalog queries and admin CRUD.
"""

from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query

from storefront.auth import require_admin
from storefront.catalog import DEFAULT_PAGE_SIZE, ProductFilters
from storefront.database import MemoryStore, get_store
from storefront.errors import NotFoundError
from storefront.models import User
from storefront.schemas import ProductCreate, ProductOut, ProductUpdate
from storefront.utils.logger import get_logger

_logger = get_logger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])

MAX_PAGE_SIZE = 100


def product_filters(
    q: Optional[str] = Query(None, max_length=200),
    category: Optional[str] = None,
    min_price: Optional[Decimal] = Query(None, alias="min", ge=0),
    max_price: Optional[Decimal] = Query(None, alias="max", ge=0),
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, alias="pageSize", ge=1, le=MAX_PAGE_SIZE),
) -> ProductFilters:
    return ProductFilters(
        category=category,
        search=q.strip() if q else None,
        min_price=min_price,
        max_price=max_price,
        page=page,
        page_size=page_size,
    )


def product_page(store: MemoryStore, filters: ProductFilters) -> dict:
    products, total = store.get_products(filters)
    return {
        "ok": True,
        "products": [ProductOut.model_validate(p).dump() for p in products],
        "total": total,
    }


@router.get("")
async def list_products(filters: ProductFilters = Depends(product_filters),
                        store: MemoryStore = Depends(get_store)):
    """GET /api/products?q&category&min&max&page&pageSize"""
    return product_page(store, filters)


@router.get("/{id_or_slug}")
async def product_detail(id_or_slug: str, store: MemoryStore = Depends(get_store)):
    product = store.get_product(id_or_slug)
    if product is None:
        raise NotFoundError("Product not found")
    return {"ok": True, "product": ProductOut.model_validate(product).dump()}


@router.post("", status_code=201)
async def create_product(payload: ProductCreate, store: MemoryStore = Depends(get_store),
                         admin: User = Depends(require_admin)):
    product = store.create_product(**payload.model_dump())
    _logger.info(f"{admin.username} created product {product.slug}")
    return {"ok": True, "product": ProductOut.model_validate(product).dump()}


@router.put("/{product_id}")
async def update_product(product_id: str, payload: ProductUpdate,
                         store: MemoryStore = Depends(get_store),
                         admin: User = Depends(require_admin)):
    product = store.update_product(product_id, payload.to_patch())
    if product is None:
        raise NotFoundError("Product not found")
    _logger.info(f"{admin.username} updated product {product.slug}")
    return {"ok": True, "product": ProductOut.model_validate(product).dump()}


@router.delete("/{product_id}")
async def delete_product(product_id: str, store: MemoryStore = Depends(get_store),
                         admin: User = Depends(require_admin)):
    if not store.delete_product(product_id):
        raise NotFoundError("Product not found")
    _logger.info(f"{admin.username} deleted product {product_id}")
    return {"ok": True, "message": "Product deleted successfully"}
