"""Application service: Checkout use case.

Turns the owner's cart into a PENDING order. This is the only place that
mutates several aggregates at once (every product in the cart, the cart
itself and a new order), so it is all-or-nothing:

1. load the cart (EmptyCartError if there is nothing in it);
2. check stock for every line before touching anything;
3. price the cart snapshot (not live catalog prices);
4. pick an order number nobody uses;
5. build the order with frozen lines;
6. reserve stock and bump sales counters on every product;
7. clear the cart and persist the order.

If anything after step 5 fails (for instance a concurrent checkout drained
a product between steps 2 and 6), the reservations are released and the
cart is put back before the error propagates.
"""

from __future__ import annotations

import copy
from collections.abc import Callable
from datetime import datetime, timezone

import structlog

from storefront.application.dto import CheckoutRequest
from storefront.domain.exceptions import (
    ConflictError,
    EmptyCartError,
    EntityNotFoundError,
)
from storefront.domain.model.cart import Cart, CartLine
from storefront.domain.model.order import Order, OrderLine
from storefront.domain.model.product import Product
from storefront.domain.repository.address_repository import AddressRepository
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service import pricing
from storefront.domain.service.inventory_ledger import InventoryLedger
from storefront.domain.service.keyed_lock import CART_LOCKS, KeyedLock
from storefront.domain.service.order_numbers import OrderNumberGenerator

logger = structlog.get_logger(__name__)

INSERT_ATTEMPTS = 3


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CheckoutHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        address_repo: AddressRepository,
        ledger: InventoryLedger | None = None,
        order_numbers: OrderNumberGenerator | None = None,
        cart_locks: KeyedLock = CART_LOCKS,
        clock: Callable[[], datetime] = _utcnow,
        insert_attempts: int = INSERT_ATTEMPTS,
    ) -> None:
        self._cart_repo = cart_repo
        self._order_repo = order_repo
        self._address_repo = address_repo
        self._ledger = ledger or InventoryLedger(product_repo)
        self._order_numbers = order_numbers or OrderNumberGenerator(order_repo)
        self._cart_locks = cart_locks
        self._clock = clock
        self._insert_attempts = insert_attempts

    def handle(self, owner_id: str, request: CheckoutRequest) -> Order:
        with self._cart_locks.hold(owner_id):
            return self._checkout(owner_id, request)

    # --- Steps ----------------------------------------------------------------

    def _checkout(self, owner_id: str, request: CheckoutRequest) -> Order:
        cart = self._cart_repo.get_by_owner(owner_id)
        if cart is None or cart.is_empty:
            raise EmptyCartError(owner_id)

        shipping_label = self._address_label(owner_id, request.shipping_address_id)
        billing_label = self._address_label(owner_id, request.billing_address_id)

        # Step 2: fail before any mutation if a line cannot be served
        items = [(line.product_id, line.quantity.value) for line in cart.lines]
        products = self._ledger.check_available(items)

        # Step 3: price from the cart's own snapshot
        breakdown = pricing.price_lines(
            [line.line_total for line in cart.lines],
            pricing.resolve_discount_percent(request.discount_code),
        )

        # Steps 4-5
        now = self._clock()
        cart_lines = list(cart.lines)

        def build(order_number: str) -> Order:
            return self._build_order(
                order_number, owner_id, cart_lines, products, breakdown,
                request, shipping_label, billing_label, now,
            )

        order = build(self._order_numbers.generate())

        # Step 6: reserve_all undoes its own partial work on failure
        self._ledger.reserve_all(items, record_sale=True)

        # Step 7
        cart_before = copy.deepcopy(cart)
        try:
            cart.clear(now)
            self._cart_repo.save(cart)
            order = self._persist(order, build)
        except Exception as exc:
            logger.warning(
                "Checkout failed after reserving stock, rolling back",
                owner_id=owner_id,
                error=str(exc),
            )
            self._rollback(items, cart_before)
            raise

        logger.info(
            "Checkout completed",
            owner_id=owner_id,
            order_number=order.order_number,
            total=str(order.total),
            lines=len(order.lines),
        )
        return order

    def _persist(self, order: Order, build: Callable[[str], Order]) -> Order:
        """Insert the order, picking a new number if ours got taken."""
        for _ in range(self._insert_attempts):
            try:
                self._order_repo.add(order)
                return order
            except ConflictError:
                logger.info(
                    "Order number taken at insert, regenerating",
                    order_number=order.order_number,
                )
                order = build(self._order_numbers.generate())
        raise ConflictError("Could not store the order under a unique order number")

    def _rollback(self, items: list[tuple[str, int]], cart_before: Cart) -> None:
        for product_id, qty in reversed(items):
            try:
                self._ledger.release(product_id, qty, revoke_sale=True)
            except Exception:
                logger.exception(
                    "Could not return reserved stock",
                    product_id=product_id,
                    quantity=qty,
                )
        try:
            self._cart_repo.save(cart_before)
        except Exception:
            logger.exception("Could not restore cart", owner_id=cart_before.owner_id)

    # --- Helpers --------------------------------------------------------------

    def _address_label(self, owner_id: str, address_id: str) -> str:
        address = self._address_repo.get_by_id(address_id)
        if address is None or address.owner_id != owner_id:
            raise EntityNotFoundError("Address", address_id)
        return address.shipping_label

    @staticmethod
    def _build_order(
        order_number: str,
        owner_id: str,
        cart_lines: list[CartLine],
        products: list[Product],
        breakdown: pricing.PriceBreakdown,
        request: CheckoutRequest,
        shipping_label: str,
        billing_label: str,
        now: datetime,
    ) -> Order:
        lines = [
            OrderLine(
                order_number=order_number,
                product_id=product.id,
                product_name=product.name,
                product_sku=product.sku,
                quantity=cart_line.quantity,
                unit_price=cart_line.unit_price,  # <-- price snapshot
            )
            for cart_line, product in zip(cart_lines, products)
        ]
        return Order.create(
            order_number=order_number,
            owner_id=owner_id,
            lines=lines,
            subtotal=breakdown.subtotal,
            tax=breakdown.tax,
            shipping=breakdown.shipping,
            discount=breakdown.discount,
            total=breakdown.total,
            payment_method=request.payment_method,
            shipping_address=shipping_label,
            billing_address=billing_label,
            discount_code=request.discount_code,
            notes=request.notes,
            now=now,
        )
