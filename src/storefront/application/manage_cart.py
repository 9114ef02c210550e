"""Application services for the cart: add an item, show contents."""

from __future__ import annotations

from storefront.application.dto import CartDTO
from storefront.application.mapping import cart_to_dto
from storefront.domain.exceptions import (
    CartNotFoundError,
    PlatformNotFoundError,
    ProductNotFoundError,
    PromptFragmentNotFoundError,
)
from storefront.domain.model.cart import CartItem
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.catalog_repository import CatalogRepository


class AddCartItemHandler:

    def __init__(self, cart_repo: CartRepository, catalog: CatalogRepository) -> None:
        self._cart_repo = cart_repo
        self._catalog = catalog

    def handle(
        self,
        cart_id: str,
        product_id: str,
        platform_id: str | None = None,
        prompt_id: str | None = None,
        quantity: int = 1,
    ) -> CartDTO:
        """Append a line to the cart, recording today's price.

        The recorded price is informational; checkout reprices from the
        catalog.
        """
        cart = self._cart_repo.get_with_items(cart_id)
        if cart is None:
            raise CartNotFoundError(f"Cart '{cart_id}' not found")

        product = self._catalog.get_product(product_id)
        if product is None:
            raise ProductNotFoundError(f"Product not found: '{product_id}'")
        if platform_id is not None and self._catalog.get_platform(platform_id) is None:
            raise PlatformNotFoundError(f"Platform not found: '{platform_id}'")
        if prompt_id is not None and self._catalog.get_prompt(prompt_id) is None:
            raise PromptFragmentNotFoundError(f"Prompt fragment not found: '{prompt_id}'")

        cart.add_item(
            CartItem(
                id=self._next_item_id(cart_id, [item.id for item in cart.items]),
                cart_id=cart.id,
                product_id=product.id,
                platform_id=platform_id,
                prompt_id=prompt_id,
                quantity=Quantity(quantity),
                recorded_price=product.price,
            )
        )
        self._cart_repo.save(cart)
        return cart_to_dto(cart)

    @staticmethod
    def _next_item_id(cart_id: str, existing: list[str]) -> str:
        n = len(existing) + 1
        while f"{cart_id}-{n}" in existing:
            n += 1
        return f"{cart_id}-{n}"


class ShowCartHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, cart_id: str) -> CartDTO:
        cart = self._cart_repo.get_with_items(cart_id)
        if cart is None:
            raise CartNotFoundError(f"Cart '{cart_id}' not found")
        return cart_to_dto(cart)
