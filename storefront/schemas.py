"""
Request / response schemas.

JSON on the wire is camelCase; request bodies also accept snake_case field
names. Decimals are serialized as strings so prices never pass through floats.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from storefront.models import Category, DeliveryZone, OrderStatus, PaymentMethod, ProductPatch
from storefront.utils.validators import validate_phone, validate_slug


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True,
                              from_attributes=True)

    def dump(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


def _non_blank(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


def _check_slug(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    ok, msg = validate_slug(value)
    if not ok:
        raise ValueError(msg)
    return value


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------

class ProductCreate(CamelModel):
    title: str = Field(..., max_length=200)
    slug: Optional[str] = None
    description: str = ""
    price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    image: str = ""
    stock: int = Field(0, ge=0)
    category: Category
    tags: List[str] = Field(default_factory=list)
    featured: bool = False

    @field_validator("title")
    @classmethod
    def check_title(cls, value: str) -> str:
        return _non_blank(value)

    @field_validator("slug")
    @classmethod
    def check_slug(cls, value: Optional[str]) -> Optional[str]:
        return _check_slug(value)


class ProductUpdate(CamelModel):
    title: Optional[str] = Field(None, max_length=200)
    slug: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    image: Optional[str] = None
    stock: Optional[int] = Field(None, ge=0)
    category: Optional[Category] = None
    tags: Optional[List[str]] = None
    featured: Optional[bool] = None

    @field_validator("slug")
    @classmethod
    def check_slug(cls, value: Optional[str]) -> Optional[str]:
        return _check_slug(value)

    @field_validator("title")
    @classmethod
    def check_title(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else _non_blank(value)

    def to_patch(self) -> ProductPatch:
        return ProductPatch(**self.model_dump(exclude_unset=True))


class ProductOut(CamelModel):
    id: str
    slug: str
    title: str
    description: str
    price: Decimal
    image: str
    stock: int
    category: str
    tags: List[str]
    featured: bool
    created_at: datetime
    updated_at: datetime


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------

class OrderItemIn(CamelModel):
    product_id: str
    qty: int = Field(..., ge=1, le=1000)
    # Display fields sent by the cart; the catalog is authoritative.
    title: Optional[str] = None
    price: Optional[Decimal] = None


class OrderCreate(CamelModel):
    items: List[OrderItemIn] = Field(..., min_length=1)
    customer_name: str
    customer_email: EmailStr
    customer_phone: str
    customer_address: str
    delivery_zone: DeliveryZone
    payment_method: PaymentMethod
    notes: Optional[str] = Field(None, max_length=1000)
    subtotal: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    delivery_fee: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    grand_total: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)

    @field_validator("customer_name", "customer_address")
    @classmethod
    def check_required_text(cls, value: str) -> str:
        return _non_blank(value)

    @field_validator("customer_phone")
    @classmethod
    def check_phone(cls, value: str) -> str:
        value = value.strip()
        ok, msg = validate_phone(value)
        if not ok:
            raise ValueError(msg)
        return value


class OrderItemOut(CamelModel):
    product_id: str
    title: str
    price: Decimal
    qty: int


class OrderOut(CamelModel):
    id: str
    ref: str
    items: List[OrderItemOut]
    subtotal: Decimal
    delivery_fee: Decimal
    grand_total: Decimal
    customer_name: str
    customer_email: str
    customer_phone: str
    customer_address: str
    delivery_zone: str
    payment_method: str
    notes: Optional[str] = None
    status: str
    created_at: datetime
    updated_at: datetime


class OrderStatusUpdate(CamelModel):
    status: OrderStatus


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------

class AdminLogin(CamelModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
