"""Application service: read a point-in-time snapshot of a cart.

The snapshot is the only view of the cart an order-creation run uses.
Items added to the cart after the snapshot is taken are not part of
that run's order.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import (
    CartEmptyError,
    CartNotFoundError,
    SiteNotFoundError,
)
from storefront.domain.model.cart import CartItem
from storefront.domain.model.catalog import SiteConfiguration
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.catalog_repository import CatalogRepository


@dataclass(frozen=True)
class CartSnapshot:
    cart_id: str
    user_id: str
    site: SiteConfiguration | None
    items: tuple[CartItem, ...]


class CartSnapshotReader:

    def __init__(self, cart_repo: CartRepository, catalog: CatalogRepository) -> None:
        self._cart_repo = cart_repo
        self._catalog = catalog

    def read(self, cart_id: str) -> CartSnapshot:
        """Load the cart, its items and its site configuration.

        Raises CartNotFoundError for an unknown cart, CartEmptyError for
        a cart without items and SiteNotFoundError when the cart points
        at a site configuration that no longer exists.
        """
        cart = self._cart_repo.get_with_items(cart_id)
        if cart is None:
            raise CartNotFoundError(f"Cart '{cart_id}' not found")

        if cart.is_empty:
            raise CartEmptyError(f"Cart '{cart_id}' has no items")

        site = None
        if cart.site_id is not None:
            site = self._catalog.get_site(cart.site_id)
            if site is None:
                raise SiteNotFoundError(
                    f"Site '{cart.site_id}' referenced by cart '{cart_id}' not found"
                )

        return CartSnapshot(
            cart_id=cart.id,
            user_id=cart.user_id,
            site=site,
            items=tuple(cart.items),
        )
