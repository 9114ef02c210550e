"""Domain service: Price Reconciliation.

Recomputes what an order really costs from the live catalog instead of
trusting the prices recorded in the cart. Cart prices can be stale
(the product was repriced after it was added) or tampered with, so
they are only used to report drift.

The reconciler also resolves every catalog reference a cart line
carries (product, platform, prompt fragment). A dangling reference
aborts the whole reconciliation: there is no partial result.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from storefront.domain.exceptions import (
    PlatformNotFoundError,
    ProductNotFoundError,
    PromptFragmentNotFoundError,
    SiteTypeNotFoundError,
)
from storefront.domain.model.cart import CartItem
from storefront.domain.model.catalog import (
    Platform,
    PromptFragment,
    SiteConfiguration,
    SiteType,
)
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.catalog_repository import CatalogRepository

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ReconciledItem:
    """A cart line priced and resolved against the current catalog."""

    cart_item_id: str
    product_id: str
    product_name: str
    product_prompt: str
    unit_price: Money  # current catalog price
    quantity: Quantity
    platform: Platform | None = None
    prompt_fragment: PromptFragment | None = None
    recorded_price: Money | None = None

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value

    @property
    def has_drift(self) -> bool:
        return self.recorded_price is not None and self.recorded_price != self.unit_price


@dataclass(frozen=True)
class Reconciliation:
    items: list[ReconciledItem]
    total: Money
    site_type: SiteType | None = None

    @property
    def drifted_items(self) -> list[ReconciledItem]:
        return [item for item in self.items if item.has_drift]


class PriceReconciler:

    def __init__(self, catalog: CatalogRepository, currency: str = "USD") -> None:
        self._catalog = catalog
        self._currency = currency

    def reconcile(
        self,
        items: list[CartItem],
        site: SiteConfiguration | None = None,
    ) -> Reconciliation:
        """Price every cart line from the catalog and compute the total.

        The total is the sum of line totals in cart order, plus the site
        type's base price when a site is attached. The site type is
        fetched once, before any item.
        """
        site_type = self._resolve_site_type(site) if site is not None else None

        total = Money.zero(self._currency)
        if site_type is not None:
            total = total + site_type.base_price

        reconciled: list[ReconciledItem] = []
        for item in items:
            line = self._reconcile_item(item)
            if line.has_drift:
                logger.info(
                    "price_drift",
                    product_id=line.product_id,
                    recorded=str(line.recorded_price),
                    current=str(line.unit_price),
                )
            reconciled.append(line)
            total = total + line.line_total

        return Reconciliation(items=reconciled, total=total, site_type=site_type)

    # --- Internal helpers -----------------------------------------------------

    def _resolve_site_type(self, site: SiteConfiguration) -> SiteType:
        site_type = self._catalog.get_site_type(site.site_type_id)
        if site_type is None:
            raise SiteTypeNotFoundError(
                f"Site type '{site.site_type_id}' of site '{site.name}' not found"
            )
        return site_type

    def _reconcile_item(self, item: CartItem) -> ReconciledItem:
        product = self._catalog.get_product(item.product_id)
        if product is None:
            raise ProductNotFoundError(f"Product not found: '{item.product_id}'")

        platform = None
        if item.platform_id is not None:
            platform = self._catalog.get_platform(item.platform_id)
            if platform is None:
                raise PlatformNotFoundError(f"Platform not found: '{item.platform_id}'")

        fragment = None
        if item.prompt_id is not None:
            fragment = self._catalog.get_prompt(item.prompt_id)
            if fragment is None:
                raise PromptFragmentNotFoundError(
                    f"Prompt fragment not found: '{item.prompt_id}'"
                )

        return ReconciledItem(
            cart_item_id=item.id,
            product_id=product.id,
            product_name=product.name,
            product_prompt=product.prompt,
            unit_price=product.price,
            quantity=item.quantity,
            platform=platform,
            prompt_fragment=fragment,
            recorded_price=item.recorded_price,
        )
