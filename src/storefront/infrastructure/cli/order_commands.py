"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.change_order_status import (
    ChangeOrderStatusHandler,
    GetOrderStatusHandler,
    ListOrderStatusesHandler,
)
from storefront.application.show_order import ShowOrderHandler
from storefront.domain.exceptions import DomainException, StorageError
from storefront.infrastructure.bootstrap import create_order_handler, order_repository


def _display_order(dto, show_prompt: bool = False) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"User:     {dto.user_id}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<24} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*51}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<24} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*51}")
    click.echo(f"  {'Order Total':<31} {dto.total:>20}")

    if show_prompt:
        click.echo()
        click.echo(dto.prompt, nl=False)


@click.command("create")
@click.option("--cart", "cart_id", required=True, help="Cart ID to convert.")
@click.option("--show-prompt", is_flag=True, default=False, help="Print the generated prompt.")
def order_create(cart_id: str, show_prompt: bool) -> None:
    """Create an order from a cart, then clear the cart."""
    handler = create_order_handler()

    try:
        result = handler.handle(cart_id)
    except (DomainException, StorageError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{result.order_id} created from cart {cart_id}")
    _display_order(result.order, show_prompt=show_prompt)

    if not result.cart_cleared:
        click.echo()
        click.secho(
            f"Warning: order #{result.order_id} exists but {result.warning}. "
            f"Run 'storefront cart clear --id {cart_id}'; do not re-create the order.",
            fg="yellow",
            err=True,
        )


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.option("--show-prompt", is_flag=True, default=False, help="Print the stored prompt.")
def order_show(order_id: int, show_prompt: bool) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id)
    except (DomainException, StorageError) as exc:
        raise click.ClickException(str(exc))

    _display_order(dto, show_prompt=show_prompt)


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--to", "new_status", required=True, help="Target status, e.g. IN_PROGRESS.")
def order_status(order_id: int, new_status: str) -> None:
    """Move an order to a new status."""
    handler = ChangeOrderStatusHandler(order_repo=order_repository())

    try:
        handler.handle(order_id, new_status)
    except (DomainException, StorageError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} is now {new_status.upper()}.")


@click.command("statuses")
@click.option("--id", "status", default=None, help="Look up a single status.")
def order_statuses(status: str | None) -> None:
    """List the order statuses, or check a single one."""
    if status is None:
        for value in ListOrderStatusesHandler().handle():
            click.echo(value)
        return

    try:
        click.echo(GetOrderStatusHandler().handle(status))
    except DomainException as exc:
        raise click.ClickException(str(exc))
