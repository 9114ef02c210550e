import click

from storefront.infrastructure.bootstrap import setup_logging
from storefront.infrastructure.cli.cart_commands import cart_add, cart_clear, cart_show
from storefront.infrastructure.cli.order_commands import (
    order_create,
    order_show,
    order_status,
    order_statuses,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_update,
)


@click.group()
def cli() -> None:
    """Storefront — cart to order conversion"""
    setup_logging()


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def cart() -> None:
    """Inspect and edit carts."""


@cli.group()
def product() -> None:
    """Manage products."""


# Register subcommands
order.add_command(order_create)
order.add_command(order_show)
order.add_command(order_status)
order.add_command(order_statuses)
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_show)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_update)
