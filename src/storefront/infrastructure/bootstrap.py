"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from storefront.application.create_order import CreateOrderFromCartHandler
from storefront.infrastructure.config import get_settings
from storefront.infrastructure.logging import configure_logging
from storefront.infrastructure.persistence.json_cart_repository import (
    JsonCartRepository,
)
from storefront.infrastructure.persistence.json_catalog_repository import (
    JsonCatalogRepository,
)
from storefront.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)


def setup_logging() -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, fmt=settings.log_format)


def currency() -> str:
    return get_settings().currency


def catalog_repository() -> JsonCatalogRepository:
    settings = get_settings()
    return JsonCatalogRepository(settings.data_dir / "catalog.json", currency=settings.currency)


def cart_repository() -> JsonCartRepository:
    return JsonCartRepository(get_settings().data_dir / "carts.json")


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(get_settings().data_dir / "orders.json")


def create_order_handler() -> CreateOrderFromCartHandler:
    return CreateOrderFromCartHandler(
        cart_repo=cart_repository(),
        catalog=catalog_repository(),
        order_repo=order_repository(),
        currency=currency(),
    )
