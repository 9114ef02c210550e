"""Catalog entities.

Products, platforms, site types and prompt fragments live
independently of carts and orders. They have their own lifecycle:
prices change, products are added and removed from the catalog.
Order creation only ever reads them.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog.

    ``prompt`` is the product's own prompt template; it may be empty
    for products that carry no generation instructions.
    """

    id: str
    name: str
    price: Money
    prompt: str = ""

    @classmethod
    def create(cls, id: str, name: str, price: Money, prompt: str = "") -> Product:
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        product = cls(id=id, name=name.strip(), price=price, prompt=prompt.strip())
        product.update_price(price)
        return product

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        Existing orders are unaffected: they hold their own price
        snapshot.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price

    def rename(self, new_name: str) -> None:
        if not new_name or not new_name.strip():
            raise ValidationError("Product name is required")
        self.name = new_name.strip()

    def update_prompt(self, new_prompt: str) -> None:
        """Replace the prompt template; an empty string removes it."""
        self.prompt = new_prompt.strip()


@dataclass(frozen=True)
class Platform:
    """A delivery target for a product (e.g. "Web", "Mobile")."""

    id: str
    name: str


@dataclass(frozen=True)
class SiteType:
    """A kind of website; carries the base price added to every order."""

    id: str
    name: str
    base_price: Money


@dataclass(frozen=True)
class SiteConfiguration:
    """A user's described target website."""

    id: str
    name: str
    description: str
    site_type_id: str


@dataclass(frozen=True)
class PromptFragment:
    """User-authored generation text attached to a single cart line."""

    id: str
    text: str
