"""
Admin routes — login, order review and status updates, product listing.
"""

from fastapi import APIRouter, Depends, Query

from storefront.auth import login_admin, require_admin
from storefront.catalog import DEFAULT_PAGE_SIZE, ProductFilters
from storefront.database import MemoryStore, get_store
from storefront.errors import Unauthorized
from storefront.models import User
from storefront.orders import change_status
from storefront.routes.products import MAX_PAGE_SIZE, product_page
from storefront.schemas import AdminLogin, OrderOut, OrderStatusUpdate
from storefront.utils.logger import get_logger

_logger = get_logger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.post("/login")
async def login(payload: AdminLogin, store: MemoryStore = Depends(get_store)):
    result = login_admin(store, payload.username, payload.password)
    if result is None:
        raise Unauthorized("Invalid credentials")
    token, user = result
    _logger.info(f"Admin '{user.username}' logged in")
    return {"ok": True, "token": token, "user": {"id": user.id, "username": user.username}}


@router.get("/orders")
async def list_orders(page: int = Query(1, ge=1),
                      page_size: int = Query(DEFAULT_PAGE_SIZE, alias="pageSize",
                                             ge=1, le=MAX_PAGE_SIZE),
                      store: MemoryStore = Depends(get_store),
                      admin: User = Depends(require_admin)):
    orders, total = store.get_orders(page, page_size)
    return {
        "ok": True,
        "orders": [OrderOut.model_validate(o).dump() for o in orders],
        "total": total,
    }


@router.patch("/orders/{order_id}/status")
async def update_order_status(order_id: str, payload: OrderStatusUpdate,
                              store: MemoryStore = Depends(get_store),
                              admin: User = Depends(require_admin)):
    order = change_status(store, order_id, payload.status)
    return {"ok": True, "order": OrderOut.model_validate(order).dump()}


@router.get("/products")
async def list_products(page: int = Query(1, ge=1),
                        page_size: int = Query(DEFAULT_PAGE_SIZE, alias="pageSize",
                                               ge=1, le=MAX_PAGE_SIZE),
                        store: MemoryStore = Depends(get_store),
                        admin: User = Depends(require_admin)):
    return product_page(store, ProductFilters(page=page, page_size=page_size))
