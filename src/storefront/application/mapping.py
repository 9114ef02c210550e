"""Hand-written conversions from domain objects to DTOs."""

from __future__ import annotations

from storefront.application.dto import (
    CartDTO,
    CartItemDTO,
    OrderDTO,
    OrderItemDTO,
    ProductDTO,
)
from storefront.domain.model.cart import Cart
from storefront.domain.model.catalog import Product
from storefront.domain.model.order import Order


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        user_id=order.user_id,
        status=order.status.value,
        items=[
            OrderItemDTO(
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                line_total=str(item.line_total),
                platform_id=item.platform_id,
                prompt_id=item.prompt_id,
            )
            for item in order.items
        ],
        total=str(order.total),
        prompt=order.prompt,
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        total_amount=order.total.amount,
        currency=order.total.currency,
    )


def cart_to_dto(cart: Cart) -> CartDTO:
    return CartDTO(
        id=cart.id,
        user_id=cart.user_id,
        site_id=cart.site_id,
        items=[
            CartItemDTO(
                id=item.id,
                product_id=item.product_id,
                platform_id=item.platform_id,
                prompt_id=item.prompt_id,
                quantity=item.quantity.value,
                recorded_price=(
                    str(item.recorded_price) if item.recorded_price is not None else None
                ),
            )
            for item in cart.items
        ],
    )


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(id=product.id, name=product.name, price=str(product.price))
