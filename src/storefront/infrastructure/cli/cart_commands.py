"""CLI commands for carts."""

from __future__ import annotations

import click

from storefront.application.cart_clearer import CartClearer
from storefront.application.manage_cart import AddCartItemHandler, ShowCartHandler
from storefront.domain.exceptions import DomainException, StorageError
from storefront.infrastructure.bootstrap import cart_repository, catalog_repository


def _display_cart(dto) -> None:
    click.echo(f"Cart {dto.id}  (user={dto.user_id}, site={dto.site_id or '-'})")
    if not dto.items:
        click.echo("  (empty)")
        return
    click.echo(f"  {'Item':<10} {'Product':<10} {'Platform':<10} {'Prompt':<8} {'Qty':>5} {'Price':>10}")
    click.echo(f"  {'-'*58}")
    for item in dto.items:
        click.echo(
            f"  {item.id:<10} {item.product_id:<10} {item.platform_id or '-':<10} "
            f"{item.prompt_id or '-':<8} {item.quantity:>5} {item.recorded_price or '-':>10}"
        )


@click.command("show")
@click.option("--id", "cart_id", required=True, help="Cart ID.")
def cart_show(cart_id: str) -> None:
    """Show the current contents of a cart."""
    handler = ShowCartHandler(cart_repo=cart_repository())

    try:
        dto = handler.handle(cart_id)
    except (DomainException, StorageError) as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("add")
@click.option("--cart", "cart_id", required=True, help="Cart ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--platform", "platform_id", default=None, help="Platform ID.")
@click.option("--prompt", "prompt_id", default=None, help="Prompt fragment ID.")
@click.option("--quantity", default=1, show_default=True, type=int, help="Quantity.")
def cart_add(
    cart_id: str,
    product_id: str,
    platform_id: str | None,
    prompt_id: str | None,
    quantity: int,
) -> None:
    """Add a product to a cart."""
    handler = AddCartItemHandler(cart_repo=cart_repository(), catalog=catalog_repository())

    try:
        dto = handler.handle(
            cart_id=cart_id,
            product_id=product_id,
            platform_id=platform_id,
            prompt_id=prompt_id,
            quantity=quantity,
        )
    except (DomainException, StorageError) as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("clear")
@click.option("--id", "cart_id", required=True, help="Cart ID.")
def cart_clear(cart_id: str) -> None:
    """Empty a cart (e.g. after an order left it uncleared)."""
    try:
        CartClearer(cart_repository()).clear(cart_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Cart {cart_id} cleared.")
