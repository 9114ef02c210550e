"""Application service: order status transitions.

Status is the only thing about a committed order that may change.
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import (
    OrderNotFoundError,
    StatusNotFoundError,
    ValidationError,
)
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class ChangeOrderStatusHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int, new_status: str) -> None:
        try:
            target = OrderStatus(new_status.upper())
        except ValueError as exc:
            raise ValidationError(f"Unknown order status '{new_status}'") from exc

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(f"Order #{order_id} not found")

        previous = order.status
        order.change_status(target)
        self._order_repo.save(order)
        logger.info(
            "order_status_changed",
            order_id=order_id,
            previous=previous.value,
            status=target.value,
        )


class ListOrderStatusesHandler:

    def handle(self) -> list[str]:
        return [status.value for status in OrderStatus]


class GetOrderStatusHandler:

    def handle(self, status: str) -> str:
        """Return the canonical status value; matching ignores case."""
        try:
            return OrderStatus(status.strip().upper()).value
        except ValueError as exc:
            raise StatusNotFoundError(f"Status '{status}' not found") from exc
