"""Unit tests for the PromptAssembler domain service."""

from storefront.domain.model.catalog import (
    Platform,
    PromptFragment,
    SiteConfiguration,
    SiteType,
)
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.service.price_reconciler import ReconciledItem
from storefront.domain.service.prompt_assembler import PromptAssembler

SITE = SiteConfiguration(id="1", name="Bakery", description="Fresh bread daily.", site_type_id="1")
SITE_TYPE = SiteType(id="1", name="Business", base_price=Money.of("100"))


def _line(
    name: str,
    fragment: str | None,
    product_prompt: str = "",
    platform: Platform | None = None,
) -> ReconciledItem:
    return ReconciledItem(
        cart_item_id=name,
        product_id=name,
        product_name=name,
        product_prompt=product_prompt,
        unit_price=Money.of("10"),
        quantity=Quantity(),
        platform=platform,
        prompt_fragment=PromptFragment(id=f"p-{name}", text=fragment) if fragment is not None else None,
    )


class TestPromptLayout:

    def test_site_intro_then_items_in_cart_order(self):
        items = [
            _line("Landing page", "Warm colours.", "Hero banner.", Platform("1", "Web")),
            _line("Contact form", "Email sales."),
        ]
        text = PromptAssembler().assemble(SITE, items, SITE_TYPE)
        assert text == (
            "# Website generation request\n"
            "\n"
            "## Site: Bakery\n"
            "\n"
            "Site type: Business\n"
            "\n"
            "### Description\n"
            "\n"
            "Fresh bread daily.\n"
            "\n"
            "## Components\n"
            "\n"
            "### 1. Landing page\n"
            "\n"
            "Platform: Web\n"
            "\n"
            "Hero banner.\n"
            "\n"
            "Warm colours.\n"
            "\n"
            "### 2. Contact form\n"
            "\n"
            "Email sales.\n"
        )

    def test_items_without_any_prompt_are_omitted(self):
        items = [_line("A", None), _line("B", "b text"), _line("C", "   ")]
        text = PromptAssembler().assemble(None, items)
        assert "### 1. B" in text
        assert "### 1. A" not in text
        assert "### 2." not in text

    def test_product_prompt_alone_is_rendered(self):
        items = [_line("Landing page", None, "Build a hero banner."), _line("Contact form", None)]
        text = PromptAssembler().assemble(None, items)
        assert text == (
            "# Website generation request\n"
            "\n"
            "## Components\n"
            "\n"
            "### 1. Landing page\n"
            "\n"
            "Build a hero banner.\n"
        )

    def test_no_site_section_without_site(self):
        text = PromptAssembler().assemble(None, [_line("A", "a")])
        assert "## Site:" not in text
        assert text.startswith("# Website generation request\n\n## Components")

    def test_no_components_section_without_prompts(self):
        text = PromptAssembler().assemble(SITE, [_line("A", None)], SITE_TYPE)
        assert "## Components" not in text
        assert text.endswith("Fresh bread daily.\n")

    def test_empty_description_skipped(self):
        site = SiteConfiguration(id="2", name="Blank", description="   ", site_type_id="1")
        text = PromptAssembler().assemble(site, [])
        assert "### Description" not in text


class TestPromptDeterminism:

    def test_identical_inputs_give_identical_text(self):
        items = [_line("A", "a", "pa", Platform("1", "Web")), _line("B", "b")]
        first = PromptAssembler().assemble(SITE, items, SITE_TYPE)
        second = PromptAssembler().assemble(SITE, list(items), SITE_TYPE)
        assert first == second
        assert first.encode() == second.encode()

    def test_accepts_any_iterable(self):
        items = [_line("A", "a")]
        assert PromptAssembler().assemble(None, iter(items)) == PromptAssembler().assemble(None, items)
