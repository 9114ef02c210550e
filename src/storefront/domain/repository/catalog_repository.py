"""Abstract catalog repository (the Catalog Reader).

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQL, in-memory)
live in the infrastructure layer. Implementations raise
``StorageError`` on I/O faults and return None for unknown ids.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.catalog import (
    Platform,
    Product,
    PromptFragment,
    SiteConfiguration,
    SiteType,
)


class CatalogRepository(ABC):

    @abstractmethod
    def get_product(self, product_id: str) -> Product | None:
        """Return a product with its *current* price, or None."""

    @abstractmethod
    def list_products(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save_product(self, product: Product) -> None:
        """Persist a new or updated product."""

    @abstractmethod
    def get_platform(self, platform_id: str) -> Platform | None:
        """Return a platform by its ID, or None."""

    @abstractmethod
    def get_prompt(self, prompt_id: str) -> PromptFragment | None:
        """Return a prompt fragment by its ID, or None."""

    @abstractmethod
    def get_site(self, site_id: str) -> SiteConfiguration | None:
        """Return a site configuration by its ID, or None."""

    @abstractmethod
    def get_site_type(self, site_type_id: str) -> SiteType | None:
        """Return a site type (with its base price), or None."""
