"""Application service: Create Order From Cart use case.

Converts a cart into an order. This is the only place that coordinates
the cart store, the catalog and the order store. Steps run strictly in
this order, each on the data captured by the previous one:

    Started -> CartRead -> PriceReconciled -> PromptAssembled
            -> OrderCommitted -> CartCleared

Any failure before OrderCommitted aborts the run with nothing written
and the cart untouched; the domain error is re-raised to the caller.
Clearing the cart is a compensating step: if it fails the order stays
committed and the run ends in CommittedButCartNotCleared, returned (not
raised) so callers retry only the clear and never re-submit the order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

import structlog

from storefront.application.cart_clearer import CartClearer
from storefront.application.cart_snapshot import CartSnapshotReader
from storefront.application.dto import OrderDTO
from storefront.application.mapping import order_to_dto
from storefront.application.order_writer import OrderWriter
from storefront.domain.exceptions import CartClearError, DomainException, StorageError
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.catalog_repository import CatalogRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.service.price_reconciler import PriceReconciler
from storefront.domain.service.prompt_assembler import PromptAssembler

logger = structlog.get_logger(__name__)


class OrchestrationState(Enum):
    STARTED = "Started"
    CART_READ = "CartRead"
    PRICE_RECONCILED = "PriceReconciled"
    PROMPT_ASSEMBLED = "PromptAssembled"
    ORDER_COMMITTED = "OrderCommitted"
    CART_CLEARED = "CartCleared"
    ABORTED = "Aborted"
    COMMITTED_BUT_CART_NOT_CLEARED = "CommittedButCartNotCleared"


@dataclass(frozen=True)
class OrderResult:
    """Outcome of a run that committed an order.

    ``warning`` is set only when the cart could not be cleared; the
    order exists either way.
    """

    state: OrchestrationState
    order: OrderDTO
    transitions: tuple[OrchestrationState, ...]
    warning: str | None = None
    warning_kind: str | None = None

    @property
    def order_id(self) -> int:
        return self.order.id

    @property
    def total_sum(self) -> Decimal:
        return self.order.total_amount

    @property
    def cart_cleared(self) -> bool:
        return self.state is OrchestrationState.CART_CLEARED


@dataclass
class _Run:
    """Per-call progress; handlers keep no state between calls."""

    cart_id: str
    state: OrchestrationState = OrchestrationState.STARTED
    history: list[OrchestrationState] = field(
        default_factory=lambda: [OrchestrationState.STARTED]
    )

    def advance(self, state: OrchestrationState) -> None:
        self.state = state
        self.history.append(state)
        logger.debug("order_creation_transition", cart_id=self.cart_id, state=state.value)


class CreateOrderFromCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        catalog: CatalogRepository,
        order_repo: OrderRepository,
        currency: str = "USD",
        order_writer: OrderWriter | None = None,
    ) -> None:
        self._snapshot_reader = CartSnapshotReader(cart_repo, catalog)
        self._reconciler = PriceReconciler(catalog, currency=currency)
        self._assembler = PromptAssembler()
        self._writer = order_writer or OrderWriter(order_repo)
        self._clearer = CartClearer(cart_repo)

    def handle(self, cart_id: str) -> OrderResult:
        """Create an order from the cart and clear the cart.

        Raises the DomainException of the failed step (CartNotFound,
        CartEmpty, ProductNotFound, SiteTypeNotFound, PersistenceFailure,
        ...) when no order was created.
        """
        run = _Run(cart_id=cart_id)

        try:
            snapshot = self._snapshot_reader.read(cart_id)
            run.advance(OrchestrationState.CART_READ)

            reconciliation = self._reconciler.reconcile(list(snapshot.items), snapshot.site)
            run.advance(OrchestrationState.PRICE_RECONCILED)

            prompt = self._assembler.assemble(
                snapshot.site, reconciliation.items, reconciliation.site_type
            )
            run.advance(OrchestrationState.PROMPT_ASSEMBLED)

            order = self._writer.write(
                user_id=snapshot.user_id,
                items=reconciliation.items,
                total=reconciliation.total,
                prompt=prompt,
            )
        except (DomainException, StorageError) as exc:
            reason = getattr(exc, "kind", type(exc).__name__)
            logger.warning(
                "order_creation_aborted",
                cart_id=cart_id,
                failed_after=run.state.value,
                reason=reason,
                error=str(exc),
            )
            run.advance(OrchestrationState.ABORTED)
            raise

        run.advance(OrchestrationState.ORDER_COMMITTED)
        logger.info(
            "order_committed",
            cart_id=cart_id,
            order_id=order.id,
            user_id=order.user_id,
            items=order.item_count,
            total=str(order.total),
            drifted_items=len(reconciliation.drifted_items),
        )

        # From here on the order is final; a clear failure is only a warning.
        warning = warning_kind = None
        try:
            self._clearer.clear(cart_id)
        except CartClearError as exc:
            warning = str(exc)
            warning_kind = exc.kind
            logger.error(
                "cart_clear_failed",
                cart_id=cart_id,
                order_id=order.id,
                reason=exc.kind,
                error=warning,
            )
            run.advance(OrchestrationState.COMMITTED_BUT_CART_NOT_CLEARED)
        else:
            run.advance(OrchestrationState.CART_CLEARED)

        return OrderResult(
            state=run.state,
            order=order_to_dto(order),
            transitions=tuple(run.history),
            warning=warning,
            warning_kind=warning_kind,
        )
