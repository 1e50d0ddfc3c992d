"""
General‑purpose helper functions used across the project.
"""

import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence, TypeVar

T = TypeVar("T")

_CENTS = Decimal("0.01")


def slugify(text: str) -> str:
    """Convert a title to a URL‑friendly slug.

    Every run of characters outside [a-z0-9] becomes a single hyphen and
    hyphens at either end are dropped: "Laptop Pro 15\"" -> "laptop-pro-15".
    """
    text = text.lower().strip()
    text = re.sub(r"[^a-z0-9]+", "-", text)
    return text.strip("-")


def to_money(amount) -> Decimal:
    """Coerce to a Decimal rounded to cents (half up)."""
    if not isinstance(amount, Decimal):
        amount = Decimal(str(amount))
    return amount.quantize(_CENTS, rounding=ROUND_HALF_UP)


def format_price(amount) -> str:
    """Display a price in leones with thousands separators."""
    return f"NLe {to_money(amount):,.2f}"


def paginate(items: Sequence[T], page: int = 1, per_page: int = 20) -> tuple[list[T], int]:
    """Return the 1‑indexed page slice and the total before slicing."""
    start = (page - 1) * per_page
    end = start + per_page
    return list(items[start:end]), len(items)
