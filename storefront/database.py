"""
In-memory data store for users, products and orders.

Records live for the lifetime of the process. One MemoryStore is built by
the application factory and handed to request handlers through `get_store`.
"""

import dataclasses
import threading
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, Dict, List, Optional

from fastapi import Request

from storefront import config
from storefront.catalog import ProductFilters, filter_products, newest_first
from storefront.errors import ConflictError, ValidationError
from storefront.models import Order, OrderItem, Product, ProductPatch, User
from storefront.refs import OrderRefGenerator
from storefront.security import hash_password
from storefront.utils.helpers import paginate, slugify, to_money
from storefront.utils.logger import get_logger
from storefront.utils.validators import validate_password, validate_username

_logger = get_logger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MemoryStore:
    def __init__(self, clock: Callable[[], datetime] = utcnow,
                 ref_prefix: Optional[str] = None):
        self._clock = clock
        self._lock = threading.RLock()
        self._users: Dict[str, User] = {}
        self._products: Dict[str, Product] = {}
        self._orders: Dict[str, Order] = {}
        self._refs = OrderRefGenerator(ref_prefix or config.ORDER_REF_PREFIX)

    # --------------- Users ------------------------------------------------

    def create_user(self, username: str, password: str) -> User:
        for ok, msg in (validate_username(username), validate_password(password)):
            if not ok:
                raise ValidationError(msg)
        with self._lock:
            if self.get_user_by_username(username) is not None:
                raise ConflictError(f"Username '{username}' is already taken")
            user = User(id=str(uuid.uuid4()), username=username,
                        password_hash=hash_password(password))
            self._users[user.id] = user
        _logger.debug(f"Created user {username}")
        return user

    def get_user(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            return next((u for u in self._users.values() if u.username == username), None)

    # --------------- Products ---------------------------------------------

    def create_product(self, title: str, price, description: str = "",
                       category: str = "technology", image: str = "",
                       stock: Optional[int] = None, tags: Optional[List[str]] = None,
                       featured: Optional[bool] = None, slug: Optional[str] = None) -> Product:
        """Add a product. The slug defaults to one derived from the title."""
        if stock is not None and stock < 0:
            raise ValidationError("Stock cannot be negative")
        now = self._clock()
        with self._lock:
            slug = slug or slugify(title)
            if not slug:
                raise ValidationError("Title must contain letters or digits to derive a slug")
            self._ensure_slug_free(slug)
            product = Product(
                id=str(uuid.uuid4()),
                slug=slug,
                title=title,
                description=description,
                price=to_money(price),
                image=image,
                stock=stock or 0,
                category=category,
                tags=list(tags or []),
                featured=bool(featured),
                created_at=now,
                updated_at=now,
            )
            self._products[product.id] = product
        return product

    def get_product(self, id_or_slug: str) -> Optional[Product]:
        """Look up by id, falling back to slug."""
        with self._lock:
            product = self._products.get(id_or_slug)
            if product is None:
                product = next((p for p in self._products.values() if p.slug == id_or_slug), None)
            return product

    def get_product_by_id(self, product_id: str) -> Optional[Product]:
        return self._products.get(product_id)

    def get_products(self, filters: Optional[ProductFilters] = None) -> tuple[List[Product], int]:
        filters = filters or ProductFilters()
        with self._lock:
            products = list(self._products.values())
        matched = filter_products(products, filters)
        return paginate(matched, filters.page, filters.page_size)

    def update_product(self, product_id: str, patch: ProductPatch) -> Optional[Product]:
        changes = patch.changes()
        if changes.get("stock", 0) < 0:
            raise ValidationError("Stock cannot be negative")
        with self._lock:
            existing = self._products.get(product_id)
            if existing is None:
                return None
            if "slug" in changes and changes["slug"] != existing.slug:
                self._ensure_slug_free(changes["slug"])
            if "price" in changes:
                changes["price"] = to_money(changes["price"])
            if "tags" in changes:
                changes["tags"] = list(changes["tags"])
            updated = dataclasses.replace(existing, **changes, updated_at=self._clock())
            self._products[product_id] = updated
        return updated

    def delete_product(self, product_id: str) -> bool:
        with self._lock:
            return self._products.pop(product_id, None) is not None

    def _ensure_slug_free(self, slug: str):
        if any(p.slug == slug for p in self._products.values()):
            raise ConflictError(f"Slug '{slug}' is already in use")

    # --------------- Orders -----------------------------------------------

    def create_order(self, items: List[OrderItem], subtotal: Decimal, delivery_fee: Decimal,
                     grand_total: Decimal, customer_name: str, customer_email: str,
                     customer_phone: str, customer_address: str, delivery_zone: str,
                     payment_method: str, notes: Optional[str] = None,
                     status: str = "Processing") -> Order:
        """Store a new order under a freshly generated reference.

        Totals are stored as given; `orders.place_order` is responsible for
        computing them.
        """
        with self._lock:
            now = self._clock()
            order = Order(
                id=str(uuid.uuid4()),
                ref=self._refs.next_ref(now),
                items=list(items),
                subtotal=to_money(subtotal),
                delivery_fee=to_money(delivery_fee),
                grand_total=to_money(grand_total),
                customer_name=customer_name,
                customer_email=customer_email,
                customer_phone=customer_phone,
                customer_address=customer_address,
                delivery_zone=delivery_zone,
                payment_method=payment_method,
                notes=notes,
                status=status,
                created_at=now,
                updated_at=now,
            )
            self._orders[order.id] = order
        return order

    def get_order(self, order_id: str) -> Optional[Order]:
        return self._orders.get(order_id)

    def get_order_by_ref(self, ref: str) -> Optional[Order]:
        with self._lock:
            return next((o for o in self._orders.values() if o.ref == ref), None)

    def get_orders_by_customer(self, email: Optional[str] = None,
                               phone: Optional[str] = None) -> List[Order]:
        """Orders matching email OR phone, newest first. Emails match case-insensitively."""
        if not email and not phone:
            return []
        email = email.casefold() if email else None
        with self._lock:
            matched = [
                o for o in self._orders.values()
                if (email and o.customer_email.casefold() == email)
                or (phone and o.customer_phone == phone)
            ]
        return newest_first(matched)

    def get_orders(self, page: int = 1, page_size: int = 20) -> tuple[List[Order], int]:
        with self._lock:
            orders = list(self._orders.values())
        return paginate(newest_first(orders), page, page_size)

    def update_order_status(self, order_id: str, status: str,
                            check: Optional[Callable[[Order], None]] = None) -> Optional[Order]:
        """Set an order's status. `check` sees the current order under the lock
        and may raise to refuse the change."""
        with self._lock:
            existing = self._orders.get(order_id)
            if existing is None:
                return None
            if check is not None:
                check(existing)
            updated = dataclasses.replace(existing, status=status, updated_at=self._clock())
            self._orders[order_id] = updated
        return updated

    # --------------- Stats ------------------------------------------------

    def counts(self) -> dict:
        with self._lock:
            return {
                "users": len(self._users),
                "products": len(self._products),
                "orders": len(self._orders),
            }


def get_store(request: Request) -> MemoryStore:
    """FastAPI dependency returning the store attached by create_app()."""
    return request.app.state.store
