"""Abstract repository for the Cart aggregate (the Cart Store)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def get_with_items(self, cart_id: str) -> Cart | None:
        """Return a cart with all its items in insertion order, or None."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Persist a new or updated cart."""

    @abstractmethod
    def clear(self, cart_id: str) -> None:
        """Remove every item from the cart; the cart itself remains."""
