"""Application service: Add Product use case."""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.catalog import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.catalog_repository import CatalogRepository

logger = structlog.get_logger(__name__)


class AddProductHandler:

    def __init__(self, catalog: CatalogRepository, currency: str = "USD") -> None:
        self._catalog = catalog
        self._currency = currency

    def handle(
        self,
        name: str,
        price: str,
        prompt: str = "",
        product_id: str | None = None,
    ) -> Product:
        """Add a new product to the catalog.

        Without an explicit ``product_id`` the next numeric ID is used.
        """
        if product_id is None:
            product_id = self._next_id()
        elif self._catalog.get_product(product_id) is not None:
            raise ValidationError(f"Product with ID '{product_id}' already exists")

        product = Product.create(
            id=product_id,
            name=name,
            price=Money.of(price, self._currency),
            prompt=prompt,
        )
        self._catalog.save_product(product)
        logger.info("product_added", product_id=product.id, price=str(product.price))
        return product

    def _next_id(self) -> str:
        numeric = [int(p.id) for p in self._catalog.list_products() if p.id.isdigit()]
        return str(max(numeric) + 1) if numeric else "1"
