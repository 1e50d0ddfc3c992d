"""
Order lifecycle — checkout, status transitions, receipts.

Prices and totals are always derived here from the catalog and the delivery
zone; whatever totals the client sends are only checked against them.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Optional

from storefront import config
from storefront.database import MemoryStore
from storefront.errors import NotFoundError, ValidationError
from storefront.models import Order, OrderItem
from storefront.utils.helpers import format_price, to_money
from storefront.utils.logger import get_logger

_logger = get_logger(__name__)

# status -> statuses it may move to
TRANSITIONS = {
    "Processing": {"Shipped", "Cancelled"},
    "Shipped": {"Completed"},
    "Completed": set(),
    "Cancelled": set(),
}


@dataclass
class LineRequest:
    product_id: str
    qty: int


@dataclass
class Totals:
    subtotal: Decimal
    delivery_fee: Decimal
    grand_total: Decimal


def delivery_fee_for(zone: str) -> Decimal:
    try:
        return config.DELIVERY_FEES[zone]
    except KeyError:
        raise ValidationError(f"Unknown delivery zone '{zone}'") from None


def compute_totals(items: Iterable[OrderItem], zone: str) -> Totals:
    subtotal = to_money(sum((item.line_total for item in items), Decimal("0")))
    fee = to_money(delivery_fee_for(zone))
    return Totals(subtotal=subtotal, delivery_fee=fee, grand_total=subtotal + fee)


def snapshot_items(store: MemoryStore, lines: Iterable[LineRequest]) -> List[OrderItem]:
    """Copy title and unit price from the current catalog for each line."""
    items = []
    missing = []
    for line in lines:
        product = store.get_product_by_id(line.product_id)
        if product is None:
            missing.append(line.product_id)
            continue
        items.append(OrderItem(product_id=product.id, title=product.title,
                               price=product.price, qty=line.qty))
    if missing:
        raise ValidationError("Unknown products in order", details={"productIds": missing})
    if not items:
        raise ValidationError("Order must contain at least one item")
    return items


def check_client_totals(totals: Totals, subtotal=None, delivery_fee=None,
                        grand_total=None) -> None:
    """Reject the order if the client's arithmetic disagrees with ours."""
    claimed = {"subtotal": subtotal, "deliveryFee": delivery_fee, "grandTotal": grand_total}
    actual = {"subtotal": totals.subtotal, "deliveryFee": totals.delivery_fee,
              "grandTotal": totals.grand_total}
    mismatches = {
        name: {"expected": str(actual[name]), "received": str(to_money(value))}
        for name, value in claimed.items()
        if value is not None and to_money(value) != actual[name]
    }
    if mismatches:
        raise ValidationError("Order totals do not match", details=mismatches)


def place_order(store: MemoryStore, lines: Iterable[LineRequest], *,
                customer_name: str, customer_email: str, customer_phone: str,
                customer_address: str, delivery_zone: str, payment_method: str,
                notes: Optional[str] = None, subtotal=None, delivery_fee=None,
                grand_total=None) -> Order:
    """Create an order from a checkout payload."""
    items = snapshot_items(store, lines)
    totals = compute_totals(items, delivery_zone)
    check_client_totals(totals, subtotal, delivery_fee, grand_total)

    order = store.create_order(
        items=items,
        subtotal=totals.subtotal,
        delivery_fee=totals.delivery_fee,
        grand_total=totals.grand_total,
        customer_name=customer_name,
        customer_email=customer_email,
        customer_phone=customer_phone,
        customer_address=customer_address,
        delivery_zone=delivery_zone,
        payment_method=payment_method,
        notes=notes or None,
    )
    _logger.info(f"Order {order.ref} placed ({format_price(order.grand_total)}, "
                 f"{order.item_count} items)")
    return order


def can_transition(current: str, new: str) -> bool:
    return new in TRANSITIONS.get(current, set())


def change_status(store: MemoryStore, order_id: str, status: str) -> Order:
    """Move an order along TRANSITIONS; the check and the write share the store lock."""
    if status not in TRANSITIONS:
        raise ValidationError(f"Unknown order status '{status}'")
    previous = []

    def check(order: Order) -> None:
        if not can_transition(order.status, status):
            raise ValidationError(
                f"Cannot change order status from {order.status} to {status}",
                details={"allowed": sorted(TRANSITIONS[order.status])},
            )
        previous.append(order.status)

    updated = store.update_order_status(order_id, status, check=check)
    if updated is None:
        raise NotFoundError("Order not found")
    _logger.info(f"Order {updated.ref}: {previous[0]} -> {status}")
    return updated


def render_receipt(order: Order) -> str:
    """Plain-text receipt for an order."""
    lines = [
        f"{config.STORE_NAME} RECEIPT",
        f"Order: {order.ref}",
        f"Date: {order.created_at:%Y-%m-%d %H:%M} UTC",
        f"Status: {order.status}",
        "",
        f"Customer: {order.customer_name}",
        f"Email: {order.customer_email}",
        f"Phone: {order.customer_phone}",
        f"Address: {order.customer_address}",
        f"Delivery zone: {order.delivery_zone}",
        "",
    ]
    for item in order.items:
        lines.append(f"{item.qty} x {item.title} @ {format_price(item.price)}"
                     f" = {format_price(item.line_total)}")
    lines += [
        "",
        f"Subtotal: {format_price(order.subtotal)}",
        f"Delivery: {format_price(order.delivery_fee)}",
        f"Total: {format_price(order.grand_total)}",
        f"Payment: {order.payment_method}",
    ]
    if order.notes:
        lines.append(f"Notes: {order.notes}")
    return "\n".join(lines) + "\n"
