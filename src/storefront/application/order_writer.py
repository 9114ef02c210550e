"""Application service: persist a new order and its items atomically."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime, timezone

from storefront.domain.exceptions import PersistenceError, StorageError
from storefront.domain.model.order import Order, OrderItem
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.service.price_reconciler import ReconciledItem


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderWriter:
    """The only component that creates Order records."""

    def __init__(
        self,
        order_repo: OrderRepository,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._order_repo = order_repo
        self._clock = clock

    def write(
        self,
        user_id: str,
        items: Sequence[ReconciledItem],
        total: Money,
        prompt: str,
    ) -> Order:
        """Build the order in status NEW and commit it in one write.

        Any storage fault surfaces as PersistenceError, meaning no order
        was created.
        """
        order = Order.create(
            user_id=user_id,
            items=[self._snapshot(item) for item in items],
            total=total,
            prompt=prompt,
            created_at=self._clock(),
        )

        try:
            self._order_repo.save(order)
        except StorageError as exc:
            raise PersistenceError(f"Order could not be saved: {exc}") from exc

        return order

    @staticmethod
    def _snapshot(item: ReconciledItem) -> OrderItem:
        return OrderItem(
            product_id=item.product_id,
            product_name=item.product_name,
            unit_price=item.unit_price,
            quantity=item.quantity,
            platform_id=item.platform.id if item.platform else None,
            prompt_id=item.prompt_fragment.id if item.prompt_fragment else None,
        )
