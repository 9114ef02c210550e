"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class OrderItemDTO:
    """Output: a single order item as displayed to the user."""

    product_id: str
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$50.00"
    line_total: str
    platform_id: str | None
    prompt_id: str | None


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    user_id: str
    status: str
    items: list[OrderItemDTO]
    total: str  # formatted, e.g. "$225.00"
    prompt: str
    created_at: str
    total_amount: Decimal
    currency: str


@dataclass(frozen=True)
class CartItemDTO:
    id: str
    product_id: str
    platform_id: str | None
    prompt_id: str | None
    quantity: int
    recorded_price: str | None


@dataclass(frozen=True)
class CartDTO:
    id: str
    user_id: str
    site_id: str | None
    items: list[CartItemDTO]


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    price: str
