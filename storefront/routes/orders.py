"""
Order routes — checkout, tracking lookups and receipts.
"""

from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends
from fastapi.responses import PlainTextResponse

from storefront.database import MemoryStore, get_store
from storefront.errors import NotFoundError, ValidationError
from storefront.notifications import notify_order
from storefront.orders import LineRequest, place_order, render_receipt
from storefront.schemas import OrderCreate, OrderOut

router = APIRouter(prefix="/api", tags=["orders"])


@router.post("/orders", status_code=201)
async def create_order(payload: OrderCreate, background: BackgroundTasks,
                       store: MemoryStore = Depends(get_store)):
    """
    POST /api/orders
    items: [{"productId": "...", "qty": 2}, ...]
    """
    order = place_order(
        store,
        [LineRequest(product_id=i.product_id, qty=i.qty) for i in payload.items],
        customer_name=payload.customer_name,
        customer_email=str(payload.customer_email),
        customer_phone=payload.customer_phone,
        customer_address=payload.customer_address,
        delivery_zone=payload.delivery_zone,
        payment_method=payload.payment_method,
        notes=payload.notes,
        subtotal=payload.subtotal,
        delivery_fee=payload.delivery_fee,
        grand_total=payload.grand_total,
    )
    background.add_task(notify_order, order)
    return {
        "ok": True,
        "order": {
            "id": order.id,
            "ref": order.ref,
            "grandTotal": str(order.grand_total),
            "createdAt": order.created_at.isoformat(),
        },
    }


# Registered before /orders/{ref} so "lookup" is not taken for a reference.
@router.get("/orders/lookup")
async def lookup_order(email: Optional[str] = None, phone: Optional[str] = None,
                       store: MemoryStore = Depends(get_store)):
    """GET /api/orders/lookup?email&phone — most recent matching order."""
    email = (email or "").strip() or None
    phone = (phone or "").strip() or None
    if not email and not phone:
        raise ValidationError("Email or phone required")
    orders = store.get_orders_by_customer(email, phone)
    if not orders:
        raise NotFoundError("No orders found")
    return {"ok": True, "order": OrderOut.model_validate(orders[0]).dump()}


@router.get("/orders/{ref}")
async def order_detail(ref: str, store: MemoryStore = Depends(get_store)):
    order = store.get_order_by_ref(ref)
    if order is None:
        raise NotFoundError("Order not found")
    return {"ok": True, "order": OrderOut.model_validate(order).dump()}


@router.get("/receipt/{ref}", response_class=PlainTextResponse)
async def receipt(ref: str, store: MemoryStore = Depends(get_store)):
    order = store.get_order_by_ref(ref)
    if order is None:
        raise NotFoundError("Order not found")
    return PlainTextResponse(
        render_receipt(order),
        headers={"Content-Disposition": f'attachment; filename="receipt-{order.ref}.txt"'},
    )
