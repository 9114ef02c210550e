"""JSON-file-backed implementation of OrderRepository.

Each order is stored with its items embedded, and the file is replaced
in one atomic step, so items are never visible without their order.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.model.order import Order, OrderItem, OrderStatus
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.json_file import (
    decoding,
    ensure_file,
    locked,
    read_json,
    write_atomic,
)


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        ensure_file(self._file_path, [])

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        with decoding(self._file_path):
            for raw in self._load_raw():
                if raw["id"] == order_id:
                    return self._to_domain(raw)
        return None

    def list_all(self) -> list[Order]:
        with decoding(self._file_path):
            return [self._to_domain(raw) for raw in self._load_raw()]

    def save(self, order: Order) -> None:
        # The id is chosen and the file rewritten under one lock.
        with locked(self._file_path):
            orders = self._load_raw()
            with decoding(self._file_path):
                order_id = order.id if order.id is not None else self._next_id(orders)
            record = self._to_raw(order, order_id)

            # Upsert: replace if exists, otherwise append
            for i, raw in enumerate(orders):
                if raw.get("id") == order_id:
                    orders[i] = record
                    break
            else:
                orders.append(record)

            write_atomic(self._file_path, orders)
        order.id = order_id  # only once the write has landed

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order, order_id: int) -> dict:
        return {
            "id": order_id,
            "user_id": order.user_id,
            "status": order.status.value,
            "created_at": order.created_at.isoformat(),
            "total": str(order.total.amount),
            "currency": order.total.currency,
            "prompt": order.prompt,
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                    "platform_id": item.platform_id,
                    "prompt_id": item.prompt_id,
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = [
            OrderItem(
                product_id=i["product_id"],
                product_name=i["product_name"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), i.get("currency", "USD")),
                platform_id=i.get("platform_id"),
                prompt_id=i.get("prompt_id"),
            )
            for i in raw["items"]
        ]
        return Order(
            id=raw["id"],
            user_id=raw["user_id"],
            items=items,
            total=Money(Decimal(raw["total"]), raw.get("currency", "USD")),
            prompt=raw.get("prompt", ""),
            status=OrderStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )

    # --- File helpers ---------------------------------------------------------

    @staticmethod
    def _next_id(orders: list[dict]) -> int:
        if not orders:
            return 1
        return max(o["id"] for o in orders) + 1

    def _load_raw(self) -> list[dict]:
        return read_json(self._file_path)
