"""JSON-file-backed implementation of CatalogRepository.

The whole catalog lives in one document::

    {"products": [...], "platforms": [...], "prompts": [...],
     "sites": [...], "site_types": [...]}
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from storefront.domain.model.catalog import (
    Platform,
    Product,
    PromptFragment,
    SiteConfiguration,
    SiteType,
)
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.catalog_repository import CatalogRepository
from storefront.infrastructure.persistence.json_file import (
    decoding,
    ensure_file,
    locked,
    read_json,
    write_atomic,
)

_SECTIONS = ("products", "platforms", "prompts", "sites", "site_types")


class JsonCatalogRepository(CatalogRepository):

    def __init__(self, file_path: Path, currency: str = "USD") -> None:
        self._file_path = file_path
        self._currency = currency
        ensure_file(self._file_path, {section: [] for section in _SECTIONS})

    # --- CatalogRepository interface ------------------------------------------

    def get_product(self, product_id: str) -> Product | None:
        with decoding(self._file_path):
            raw = self._find("products", product_id)
            return self._product(raw) if raw else None

    def list_products(self) -> list[Product]:
        with decoding(self._file_path):
            return [self._product(raw) for raw in self._section("products")]

    def save_product(self, product: Product) -> None:
        raw = {
            "id": product.id,
            "name": product.name,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "prompt": product.prompt,
        }
        with locked(self._file_path):
            doc = self._load()
            with decoding(self._file_path):
                products = doc.setdefault("products", [])
                for i, existing in enumerate(products):
                    if str(existing["id"]) == product.id:
                        products[i] = raw
                        break
                else:
                    products.append(raw)
            write_atomic(self._file_path, doc)

    def get_platform(self, platform_id: str) -> Platform | None:
        with decoding(self._file_path):
            raw = self._find("platforms", platform_id)
            return Platform(id=str(raw["id"]), name=raw["name"]) if raw else None

    def get_prompt(self, prompt_id: str) -> PromptFragment | None:
        with decoding(self._file_path):
            raw = self._find("prompts", prompt_id)
            return PromptFragment(id=str(raw["id"]), text=raw["text"]) if raw else None

    def get_site(self, site_id: str) -> SiteConfiguration | None:
        with decoding(self._file_path):
            raw = self._find("sites", site_id)
            if raw is None:
                return None
            return SiteConfiguration(
                id=str(raw["id"]),
                name=raw["name"],
                description=raw.get("description", ""),
                site_type_id=str(raw["site_type_id"]),
            )

    def get_site_type(self, site_type_id: str) -> SiteType | None:
        with decoding(self._file_path):
            raw = self._find("site_types", site_type_id)
            if raw is None:
                return None
            return SiteType(
                id=str(raw["id"]),
                name=raw["name"],
                base_price=self._money(raw["base_price"], raw),
            )

    # --- Serialization helpers ------------------------------------------------

    def _product(self, raw: dict) -> Product:
        return Product(
            id=str(raw["id"]),
            name=raw["name"],
            price=self._money(raw["price"], raw),
            prompt=raw.get("prompt") or "",
        )

    def _money(self, amount: str, raw: dict) -> Money:
        return Money(Decimal(str(amount)), raw.get("currency", self._currency))

    def _find(self, section: str, entity_id: str) -> dict | None:
        for raw in self._section(section):
            if str(raw["id"]) == str(entity_id):
                return raw
        return None

    def _section(self, section: str) -> list[dict]:
        return self._load().get(section, [])

    def _load(self) -> dict:
        return read_json(self._file_path)
