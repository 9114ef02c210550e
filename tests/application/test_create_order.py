"""Integration tests for the CreateOrderFromCart use case.

Uses in-memory fake repositories — no file I/O.
"""

from decimal import Decimal

import pytest

from storefront.application.create_order import (
    CreateOrderFromCartHandler,
    OrchestrationState,
)
from storefront.domain.exceptions import (
    CartEmptyError,
    CartNotFoundError,
    PersistenceError,
    ProductNotFoundError,
    SiteNotFoundError,
    SiteTypeNotFoundError,
)
from storefront.domain.model.cart import Cart, CartItem
from storefront.domain.model.catalog import (
    Platform,
    Product,
    PromptFragment,
    SiteConfiguration,
    SiteType,
)
from storefront.domain.model.order import OrderStatus
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeCartRepository, FakeCatalogRepository, FakeOrderRepository


def _catalog() -> FakeCatalogRepository:
    return FakeCatalogRepository(
        products=[
            Product(id="A", name="Landing page", price=Money.of("50"), prompt="Hero banner."),
            Product(id="B", name="Contact form", price=Money.of("75")),
        ],
        platforms=[Platform(id="1", name="Web")],
        prompts=[
            PromptFragment(id="1", text="Warm colours."),
            PromptFragment(id="2", text="Email the sales team."),
        ],
        sites=[SiteConfiguration(id="1", name="Bakery", description="Bread.", site_type_id="1")],
        site_types=[SiteType(id="1", name="Business", base_price=Money.of("100"))],
    )


def _cart(cart_id: str = "c1", site_id: str | None = "1", items: list | None = None) -> Cart:
    if items is None:
        items = [
            CartItem(id="1", cart_id=cart_id, product_id="A", platform_id="1",
                     prompt_id="1", recorded_price=Money.of("40")),
            CartItem(id="2", cart_id=cart_id, product_id="B", prompt_id="2",
                     recorded_price=Money.of("75")),
        ]
    return Cart(id=cart_id, user_id="u1", site_id=site_id, items=items)


def _setup(
    carts: list[Cart] | None = None,
    catalog: FakeCatalogRepository | None = None,
    fail_on_save: bool = False,
    fail_on_clear: bool = False,
):
    cart_repo = FakeCartRepository(carts if carts is not None else [_cart()], fail_on_clear)
    catalog = catalog or _catalog()
    order_repo = FakeOrderRepository(fail_on_save)
    handler = CreateOrderFromCartHandler(cart_repo, catalog, order_repo)
    return handler, cart_repo, catalog, order_repo


class TestCreateOrderHappyPath:

    def test_creates_one_order_with_reconciled_total(self):
        handler, _, _, order_repo = _setup()
        result = handler.handle("c1")

        assert result.order.total == "$225.00"
        assert result.order.user_id == "u1"
        assert result.total_sum == Decimal("225")
        assert result.order.currency == "USD"
        assert result.order.status == "NEW"
        assert len(result.order.items) == 2
        assert len(order_repo.list_all()) == 1

    def test_walks_every_state_in_order(self):
        handler, _, _, _ = _setup()
        result = handler.handle("c1")

        assert result.state is OrchestrationState.CART_CLEARED
        assert result.cart_cleared
        assert result.warning is None
        assert result.transitions == (
            OrchestrationState.STARTED,
            OrchestrationState.CART_READ,
            OrchestrationState.PRICE_RECONCILED,
            OrchestrationState.PROMPT_ASSEMBLED,
            OrchestrationState.ORDER_COMMITTED,
            OrchestrationState.CART_CLEARED,
        )

    def test_persists_order_with_prompt(self):
        handler, _, _, order_repo = _setup()
        result = handler.handle("c1")

        saved = order_repo.get_by_id(result.order_id)
        assert saved is not None
        assert saved.status == OrderStatus.NEW
        assert saved.prompt == result.order.prompt
        assert saved.prompt.index("## Site: Bakery") < saved.prompt.index("### 1. Landing page")
        assert saved.prompt.index("### 1. Landing page") < saved.prompt.index("### 2. Contact form")

    def test_clears_cart_after_commit(self):
        handler, cart_repo, _, _ = _setup()
        handler.handle("c1")
        assert cart_repo.get_with_items("c1").items == []
        assert cart_repo.cleared == ["c1"]

    def test_cart_without_site_has_no_base_price(self):
        handler, _, _, _ = _setup(carts=[_cart(site_id=None)])
        result = handler.handle("c1")
        assert result.order.total == "$125.00"
        assert "## Site:" not in result.order.prompt

    def test_independent_carts_get_sequential_ids(self):
        handler, _, _, _ = _setup(carts=[_cart("c1"), _cart("c2")])
        first = handler.handle("c1")
        second = handler.handle("c2")
        assert second.order_id == first.order_id + 1

    def test_product_prompt_without_fragment_reaches_order(self):
        catalog = _catalog()
        catalog.save_product(Product(id="C", name="Gallery", price=Money.of("40"),
                                     prompt="Build a hero banner."))
        cart = _cart(items=[CartItem(id="1", cart_id="c1", product_id="C")])
        handler, _, _, order_repo = _setup(carts=[cart], catalog=catalog)

        result = handler.handle("c1")

        assert "### 1. Gallery" in result.order.prompt
        assert "Build a hero banner." in result.order.prompt
        assert order_repo.get_by_id(result.order_id).prompt == result.order.prompt


class TestCreateOrderPriceIntegrity:

    def test_uses_catalog_price_not_cart_price(self):
        handler, _, _, order_repo = _setup()
        result = handler.handle("c1")

        landing = result.order.items[0]
        assert landing.unit_price == "$50.00"  # cart recorded $40.00
        assert order_repo.get_by_id(result.order_id).items[0].unit_price == Money.of("50")

    def test_order_keeps_price_after_catalog_change(self):
        handler, _, catalog, order_repo = _setup()
        result = handler.handle("c1")

        product = catalog.get_product("A")
        product.update_price(Money.of("99.99"))
        catalog.save_product(product)

        saved = order_repo.get_by_id(result.order_id)
        assert saved.items[0].unit_price == Money.of("50")
        assert saved.total == Money.of("225")


class TestCreateOrderPreCommitFailures:

    def test_unknown_cart_rejected(self):
        handler, _, _, order_repo = _setup()
        with pytest.raises(CartNotFoundError):
            handler.handle("missing")
        assert order_repo.save_calls == 0

    def test_empty_cart_rejected_without_writes(self):
        handler, cart_repo, _, order_repo = _setup(carts=[_cart(items=[])])
        with pytest.raises(CartEmptyError) as info:
            handler.handle("c1")
        assert info.value.kind == "CartEmpty"
        assert order_repo.save_calls == 0
        assert cart_repo.cleared == []

    def test_deleted_product_rejected_without_writes(self):
        handler, cart_repo, catalog, order_repo = _setup()
        catalog.delete_product("B")

        with pytest.raises(ProductNotFoundError):
            handler.handle("c1")
        assert order_repo.list_all() == []
        assert len(cart_repo.get_with_items("c1").items) == 2

    def test_dangling_site_rejected(self):
        handler, _, _, order_repo = _setup(carts=[_cart(site_id="404")])
        with pytest.raises(SiteNotFoundError):
            handler.handle("c1")
        assert order_repo.list_all() == []

    def test_dangling_site_type_rejected(self):
        catalog = FakeCatalogRepository(
            products=_catalog().list_products(),
            sites=[SiteConfiguration(id="1", name="Bakery", description="", site_type_id="gone")],
        )
        handler, cart_repo, _, order_repo = _setup(catalog=catalog)

        with pytest.raises(SiteTypeNotFoundError):
            handler.handle("c1")
        assert order_repo.list_all() == []
        assert cart_repo.cleared == []


class TestCreateOrderPersistenceFailure:

    def test_failed_write_leaves_no_order_and_full_cart(self):
        handler, cart_repo, _, order_repo = _setup(fail_on_save=True)

        with pytest.raises(PersistenceError) as info:
            handler.handle("c1")

        assert info.value.kind == "PersistenceFailure"
        assert order_repo.list_all() == []
        assert cart_repo.cleared == []
        assert len(cart_repo.get_with_items("c1").items) == 2

    def test_retry_after_failure_creates_exactly_one_order(self):
        handler, _, _, order_repo = _setup(fail_on_save=True)
        with pytest.raises(PersistenceError):
            handler.handle("c1")

        order_repo.fail_on_save = False
        handler.handle("c1")
        assert len(order_repo.list_all()) == 1


class TestCreateOrderCartClearFailure:

    def test_clear_failure_is_a_warning_not_an_error(self):
        handler, cart_repo, _, order_repo = _setup(fail_on_clear=True)

        result = handler.handle("c1")

        assert result.state is OrchestrationState.COMMITTED_BUT_CART_NOT_CLEARED
        assert not result.cart_cleared
        assert result.warning_kind == "CartClearFailure"
        assert "could not be cleared" in result.warning
        assert result.transitions[-2:] == (
            OrchestrationState.ORDER_COMMITTED,
            OrchestrationState.COMMITTED_BUT_CART_NOT_CLEARED,
        )

    def test_order_stays_queryable_and_correct(self):
        handler, cart_repo, _, order_repo = _setup(fail_on_clear=True)

        result = handler.handle("c1")

        saved = order_repo.get_by_id(result.order_id)
        assert saved is not None
        assert saved.total == Money.of("225")
        assert len(saved.items) == 2
        assert len(cart_repo.get_with_items("c1").items) == 2


class _CartChangingCatalog(FakeCatalogRepository):
    """Adds an item to the cart while the order is being priced."""

    def __init__(self, cart_repo: FakeCartRepository, **kwargs) -> None:
        super().__init__(**kwargs)
        self._cart_repo = cart_repo
        self._done = False

    def get_product(self, product_id):
        if not self._done:
            self._done = True
            cart = self._cart_repo.get_with_items("c1")
            cart.add_item(CartItem(id="late", cart_id="c1", product_id="B"))
            self._cart_repo.save(cart)
        return super().get_product(product_id)


class TestCreateOrderSnapshot:

    def test_items_added_after_snapshot_are_not_ordered(self):
        cart_repo = FakeCartRepository([_cart()])
        base = _catalog()
        catalog = _CartChangingCatalog(
            cart_repo,
            products=base.list_products(),
            platforms=[Platform(id="1", name="Web")],
            prompts=[PromptFragment(id="1", text="a"), PromptFragment(id="2", text="b")],
            sites=[base.get_site("1")],
            site_types=[base.get_site_type("1")],
        )
        order_repo = FakeOrderRepository()
        handler = CreateOrderFromCartHandler(cart_repo, catalog, order_repo)

        result = handler.handle("c1")

        assert len(result.order.items) == 2
        assert result.order.total == "$225.00"
