"""
Data models — plain dataclasses owned by the in-memory store.
"""

from dataclasses import dataclass, fields
from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional

Category = Literal["technology", "office", "services", "consulting"]
DeliveryZone = Literal["freetown", "western-area", "provinces"]
PaymentMethod = Literal["cash", "mobile", "bank"]
OrderStatus = Literal["Processing", "Shipped", "Completed", "Cancelled"]


@dataclass(frozen=True)
class User:
    id: str
    username: str
    password_hash: str  # "pbkdf2_sha256$<iterations>$<salt>$<hash>"


@dataclass(frozen=True)
class Product:
    id: str
    slug: str
    title: str
    description: str
    price: Decimal
    image: str
    stock: int
    category: Category
    tags: List[str]
    featured: bool
    created_at: datetime
    updated_at: datetime


@dataclass
class ProductPatch:
    """Partial product update. A field left as None is not touched."""

    title: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = None
    image: Optional[str] = None
    stock: Optional[int] = None
    category: Optional[Category] = None
    tags: Optional[List[str]] = None
    featured: Optional[bool] = None

    def changes(self) -> dict:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


@dataclass(frozen=True)
class OrderItem:
    """A line item; title and price are copied from the catalog at order time."""

    product_id: str
    title: str
    price: Decimal
    qty: int

    @property
    def line_total(self) -> Decimal:
        return self.price * self.qty


@dataclass(frozen=True)
class Order:
    id: str
    ref: str
    items: List[OrderItem]
    subtotal: Decimal
    delivery_fee: Decimal
    grand_total: Decimal
    customer_name: str
    customer_email: str
    customer_phone: str
    customer_address: str
    delivery_zone: DeliveryZone
    payment_method: PaymentMethod
    status: OrderStatus
    created_at: datetime
    updated_at: datetime
    notes: Optional[str] = None

    @property
    def item_count(self) -> int:
        return sum(item.qty for item in self.items)

