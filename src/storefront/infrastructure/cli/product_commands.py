"""CLI commands for catalog products."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.mapping import product_to_dto
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import DomainException, StorageError
from storefront.infrastructure.bootstrap import catalog_repository, currency


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--prompt", default="", help="Prompt template for the product.")
@click.option("--id", "product_id", default=None, help="Explicit product ID.")
def product_add(name: str, price: str, prompt: str, product_id: str | None) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(catalog=catalog_repository(), currency=currency())

    try:
        product = handler.handle(name=name, price=price, prompt=prompt, product_id=product_id)
    except (DomainException, StorageError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' added at {product.price}")


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    try:
        products = [product_to_dto(p) for p in catalog_repository().list_products()]
    except StorageError as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Price':>12}")
    click.echo("-" * 44)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<24} {p.price:>12}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--prompt", default=None, help="New prompt template; empty to remove.")
def product_update(
    product_id: str, name: str | None, price: str | None, prompt: str | None
) -> None:
    """Update a product's name, price or prompt."""
    handler = UpdateProductHandler(catalog=catalog_repository(), currency=currency())

    try:
        product = handler.handle(product_id=product_id, name=name, price=price, prompt=prompt)
    except (DomainException, StorageError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' updated ({product.price})")
