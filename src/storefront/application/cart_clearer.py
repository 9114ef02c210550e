"""Application service: empty a cart once its order is committed."""

from __future__ import annotations

from storefront.domain.exceptions import CartClearError, StorageError
from storefront.domain.repository.cart_repository import CartRepository


class CartClearer:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def clear(self, cart_id: str) -> None:
        """Remove every item from the cart.

        Raises CartClearError on any storage fault. Callers that have
        already committed an order must not roll it back on this error.
        """
        try:
            self._cart_repo.clear(cart_id)
        except StorageError as exc:
            raise CartClearError(f"Cart '{cart_id}' could not be cleared: {exc}") from exc
