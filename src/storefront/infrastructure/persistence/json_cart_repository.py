"""JSON-file-backed implementation of CartRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from storefront.domain.exceptions import StorageError
from storefront.domain.model.cart import Cart, CartItem
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.infrastructure.persistence.json_file import (
    decoding,
    ensure_file,
    locked,
    read_json,
    write_atomic,
)


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        ensure_file(self._file_path, [])

    # --- CartRepository interface ---------------------------------------------

    def get_with_items(self, cart_id: str) -> Cart | None:
        with decoding(self._file_path):
            for raw in self._load_raw():
                if str(raw["id"]) == str(cart_id):
                    return self._to_domain(raw)
        return None

    def save(self, cart: Cart) -> None:
        with locked(self._file_path):
            carts = self._load_raw()
            with decoding(self._file_path):
                for i, raw in enumerate(carts):
                    if str(raw["id"]) == cart.id:
                        carts[i] = self._to_raw(cart)
                        break
                else:
                    carts.append(self._to_raw(cart))
            write_atomic(self._file_path, carts)

    def clear(self, cart_id: str) -> None:
        with locked(self._file_path):
            carts = self._load_raw()
            with decoding(self._file_path):
                target = next((raw for raw in carts if str(raw["id"]) == str(cart_id)), None)
            if target is None:
                raise StorageError(f"Cart '{cart_id}' does not exist")
            target["items"] = []
            write_atomic(self._file_path, carts)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(cart: Cart) -> dict:
        return {
            "id": cart.id,
            "user_id": cart.user_id,
            "site_id": cart.site_id,
            "items": [
                {
                    "id": item.id,
                    "product_id": item.product_id,
                    "platform_id": item.platform_id,
                    "prompt_id": item.prompt_id,
                    "quantity": item.quantity.value,
                    "recorded_price": (
                        str(item.recorded_price.amount) if item.recorded_price else None
                    ),
                    "currency": (
                        item.recorded_price.currency if item.recorded_price else None
                    ),
                }
                for item in cart.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Cart:
        cart_id = str(raw["id"])
        items = [
            CartItem(
                id=str(i["id"]),
                cart_id=cart_id,
                product_id=str(i["product_id"]),
                platform_id=_optional_id(i.get("platform_id")),
                prompt_id=_optional_id(i.get("prompt_id")),
                quantity=Quantity(i.get("quantity", 1)),
                recorded_price=(
                    Money(Decimal(str(i["recorded_price"])), i.get("currency") or "USD")
                    if i.get("recorded_price") is not None
                    else None
                ),
            )
            for i in raw.get("items", [])
        ]
        return Cart(
            id=cart_id,
            user_id=str(raw["user_id"]),
            site_id=_optional_id(raw.get("site_id")),
            items=items,
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return read_json(self._file_path)


def _optional_id(value) -> str | None:
    return None if value is None else str(value)
