"""Abstract repository for the Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every persisted order."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist an order together with all of its items.

        The write is atomic: either the order and every item are
        stored, or nothing is. A new order gets its ID assigned here,
        in the same step as the write. Raises ``StorageError`` on failure.
        """
