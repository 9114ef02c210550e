"""Application service: Update Product use case."""

from __future__ import annotations

from storefront.domain.exceptions import ProductNotFoundError, ValidationError
from storefront.domain.model.catalog import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.catalog_repository import CatalogRepository


class UpdateProductHandler:

    def __init__(self, catalog: CatalogRepository, currency: str = "USD") -> None:
        self._catalog = catalog
        self._currency = currency

    def handle(
        self,
        product_id: str,
        name: str | None = None,
        price: str | None = None,
        prompt: str | None = None,
    ) -> Product:
        """Update any of a product's name, price and prompt template.

        Existing orders keep the name, price and prompt they were
        created with; carts holding the product pick up the change at
        their next checkout.
        """
        if name is None and price is None and prompt is None:
            raise ValidationError("Nothing to update: give a name, price or prompt")

        product = self._catalog.get_product(product_id)
        if product is None:
            raise ProductNotFoundError(f"Product with ID '{product_id}' not found")

        if name is not None:
            product.rename(name)
        if price is not None:
            product.update_price(Money.of(price, self._currency))
        if prompt is not None:
            product.update_prompt(prompt)
        self._catalog.save_product(product)
        return product
