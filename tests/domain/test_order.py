"""Unit tests for the Order aggregate and its business rules."""

from datetime import datetime, timezone

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import Order, OrderItem, OrderStatus
from storefront.domain.model.value_objects import Money, Quantity


def _make_item(name: str = "Landing page", qty: int = 1, price: str = "50.00") -> OrderItem:
    """Helper to build a valid order item."""
    return OrderItem(
        product_id="1",
        product_name=name,
        unit_price=Money.of(price),
        quantity=Quantity(qty),
    )


class TestOrderCreation:

    def test_happy_path(self):
        order = Order.create(
            user_id="7",
            items=[_make_item(qty=2, price="10.00")],
            total=Money.of("20.00"),
            prompt="# prompt\n",
        )
        assert order.user_id == "7"
        assert order.status == OrderStatus.NEW
        assert order.item_count == 1
        assert order.total == Money.of("20.00")
        assert order.prompt == "# prompt\n"

    def test_id_is_none_for_new_orders(self):
        order = Order.create("7", [_make_item()], Money.of("50"), "")
        assert order.id is None  # assigned by repository

    def test_total_may_include_amounts_beyond_items(self):
        order = Order.create("7", [_make_item(price="50")], Money.of("150"), "")
        assert order.total == Money.of("150")

    def test_total_below_items_rejected(self):
        with pytest.raises(ValidationError, match="below the sum of its items"):
            Order.create("7", [_make_item(price="50")], Money.of("49.99"), "")

    def test_explicit_creation_time(self):
        ts = datetime(2026, 1, 2, 3, 4, tzinfo=timezone.utc)
        order = Order.create("7", [_make_item()], Money.of("50"), "", created_at=ts)
        assert order.created_at == ts


class TestOrderValidation:

    def test_empty_user_rejected(self):
        with pytest.raises(ValidationError, match="User id"):
            Order.create("  ", [_make_item()], Money.of("50"), "")

    def test_no_items_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            Order.create("7", [], Money.of("0"), "")


class TestOrderItemSnapshot:

    def test_line_total(self):
        assert _make_item(qty=3, price="15.00").line_total == Money.of("45.00")

    def test_items_are_frozen(self):
        item = _make_item()
        with pytest.raises(AttributeError):
            item.unit_price = Money.of("1")  # type: ignore[misc]


class TestOrderStatusTransitions:

    def _order(self) -> Order:
        return Order.create("7", [_make_item()], Money.of("50"), "")

    def test_new_to_in_progress_to_completed(self):
        order = self._order()
        order.change_status(OrderStatus.IN_PROGRESS)
        order.change_status(OrderStatus.COMPLETED)
        assert order.status == OrderStatus.COMPLETED

    def test_new_can_be_cancelled(self):
        order = self._order()
        order.change_status(OrderStatus.CANCELLED)
        assert order.status == OrderStatus.CANCELLED

    def test_new_cannot_skip_to_completed(self):
        with pytest.raises(ValidationError, match="from NEW to COMPLETED"):
            self._order().change_status(OrderStatus.COMPLETED)

    def test_completed_is_final(self):
        order = self._order()
        order.change_status(OrderStatus.IN_PROGRESS)
        order.change_status(OrderStatus.COMPLETED)
        with pytest.raises(ValidationError, match="Cannot move order"):
            order.change_status(OrderStatus.CANCELLED)
