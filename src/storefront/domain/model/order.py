"""Order aggregate.

The Order is an aggregate root that owns its items. It is created
exactly once per successful cart conversion and, apart from status
transitions, never changes afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    NEW = "NEW"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


_ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.NEW: frozenset({OrderStatus.IN_PROGRESS, OrderStatus.CANCELLED}),
    OrderStatus.IN_PROGRESS: frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED}),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


@dataclass(frozen=True)
class OrderItem:
    """Frozen snapshot of a cart line at order-creation time.

    ``unit_price`` is the catalog price when the order was created; it
    never changes even if the product is later repriced.
    """

    product_id: str
    product_name: str
    unit_price: Money
    quantity: Quantity = field(default_factory=Quantity)
    platform_id: str | None = None
    prompt_id: str | None = None

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for orders.

    Use the ``Order.create()`` factory for new orders. The ``__init__``
    is intentionally simple so the repository can reconstitute
    persisted orders without re-validating.
    """

    id: int | None
    user_id: str
    items: list[OrderItem]
    total: Money
    prompt: str
    status: OrderStatus = OrderStatus.NEW
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        user_id: str,
        items: list[OrderItem],
        total: Money,
        prompt: str,
        created_at: datetime | None = None,
    ) -> Order:
        """Create a new order, enforcing its invariants.

        ``total`` is taken as given: it is the reconciled sum, which may
        include a site base price that no single item carries.
        """
        if not user_id or not str(user_id).strip():
            raise ValidationError("User id is required")

        if not items:
            raise ValidationError("Order must contain at least one item")

        items_total = Money.zero(total.currency)
        for item in items:
            items_total = items_total + item.line_total
        if total < items_total:
            raise ValidationError(
                f"Order total {total} is below the sum of its items {items_total}"
            )

        order = Order(
            id=None,
            user_id=str(user_id),
            items=list(items),
            total=total,
            prompt=prompt,
        )
        if created_at is not None:
            order.created_at = created_at
        return order

    # --- State transitions ----------------------------------------------------

    def change_status(self, new_status: OrderStatus) -> None:
        """Move the order along NEW -> IN_PROGRESS -> COMPLETED.

        NEW and IN_PROGRESS orders may also be CANCELLED. Finished
        orders accept no further transitions.
        """
        if new_status not in _ALLOWED_TRANSITIONS[self.status]:
            raise ValidationError(
                f"Cannot move order from {self.status.value} to {new_status.value}"
            )
        self.status = new_status

    # --- Computed properties --------------------------------------------------

    @property
    def item_count(self) -> int:
        return len(self.items)
