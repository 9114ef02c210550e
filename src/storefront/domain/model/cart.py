"""Cart aggregate.

Carts are owned by the cart subsystem. Order creation borrows a
read-only view of them and asks the cart store to clear them once the
order is committed.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class CartItem:
    """One line in a cart.

    ``recorded_price`` is the product price seen when the item was
    added. It is advisory only; orders are priced from the catalog.
    """

    id: str
    cart_id: str
    product_id: str
    platform_id: str | None = None
    prompt_id: str | None = None
    quantity: Quantity = field(default_factory=Quantity)
    recorded_price: Money | None = None


@dataclass
class Cart:
    id: str
    user_id: str
    site_id: str | None = None
    items: list[CartItem] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def add_item(self, item: CartItem) -> None:
        self.items.append(item)

    def clear(self) -> None:
        self.items = []
