"""Order aggregate, the root of the checkout domain.

The Order is an aggregate root that owns its lines. Lines are frozen
snapshots of the cart at checkout; afterwards the order only changes
through its status and payment-status transitions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.exceptions import (
    InvalidArgumentError,
    InvalidStateTransitionError,
    ValidationError,
)
from storefront.domain.model.status import (
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    check_payment_transition,
    check_transition,
)
from storefront.domain.model.value_objects import Money, Quantity


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class OrderLine:
    """Captures the product and price at order-creation time.

    Frozen: nothing about a line changes once the order exists, even if
    the product is later repriced or renamed.
    """

    order_number: str
    product_id: str
    product_name: str
    product_sku: str
    quantity: Quantity
    unit_price: Money  # locked at order-creation time
    discount: Money = field(default_factory=Money.zero)
    tax: Money = field(default_factory=Money.zero)

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity.value

    @property
    def line_total(self) -> Money:
        return self.subtotal + self.tax - self.discount


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
MAX_NOTES_LENGTH = 1000
MAX_DISCOUNT_CODE_LENGTH = 50


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders; it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    order_number: str
    owner_id: str
    lines: list[OrderLine]
    subtotal: Money
    tax: Money
    shipping: Money
    discount: Money
    total: Money
    payment_method: PaymentMethod
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    created_at: datetime = field(default_factory=_utcnow)
    shipping_address: str = ""
    billing_address: str = ""
    discount_code: str | None = None
    notes: str | None = None
    tracking_number: str | None = None
    carrier: str | None = None
    cancellation_reason: str | None = None
    cancelled_at: datetime | None = None
    delivered_at: datetime | None = None
    deleted: bool = False
    version: int = 0

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        order_number: str,
        owner_id: str,
        lines: list[OrderLine],
        subtotal: Money,
        tax: Money,
        shipping: Money,
        discount: Money,
        total: Money,
        payment_method: PaymentMethod,
        shipping_address: str = "",
        billing_address: str = "",
        discount_code: str | None = None,
        notes: str | None = None,
        now: datetime | None = None,
    ) -> Order:
        """Create a new PENDING order, enforcing all invariants."""
        if not order_number:
            raise ValidationError("Order number is required")
        if not owner_id or not owner_id.strip():
            raise ValidationError("Order owner is required")
        if not lines:
            raise ValidationError("Order must contain at least one line")
        if notes is not None and len(notes) > MAX_NOTES_LENGTH:
            raise InvalidArgumentError(
                f"Notes must not exceed {MAX_NOTES_LENGTH} characters"
            )
        if discount_code is not None and len(discount_code) > MAX_DISCOUNT_CODE_LENGTH:
            raise InvalidArgumentError(
                f"Discount code must not exceed {MAX_DISCOUNT_CODE_LENGTH} characters"
            )

        line_sum = Money.zero()
        for line in lines:
            line_sum = line_sum + line.line_total
        if line_sum.rounded() != subtotal:
            raise ValidationError(
                f"Subtotal {subtotal} does not match line totals {line_sum}"
            )

        gross = subtotal.amount + tax.amount + shipping.amount - discount.amount
        if total.amount != max(gross, 0):
            raise ValidationError(
                f"Total {total} does not equal subtotal + tax + shipping - discount"
            )

        return Order(
            id=None,
            order_number=order_number,
            owner_id=owner_id.strip(),
            lines=list(lines),
            subtotal=subtotal,
            tax=tax,
            shipping=shipping,
            discount=discount,
            total=total,
            payment_method=payment_method,
            created_at=now or _utcnow(),
            shipping_address=shipping_address,
            billing_address=billing_address,
            discount_code=discount_code,
            notes=notes,
        )

    # --- State transitions ----------------------------------------------------

    def transition_to(self, target: OrderStatus, now: datetime | None = None) -> None:
        """Move to *target* if the transition table allows it.

        Cancellation has its own entry point because it needs a reason
        and a stock release coordinated by the application layer.
        """
        check_transition(self.status, target)
        if target is OrderStatus.CANCELLED:
            raise ValidationError("Cancelling an order requires a reason")
        self.status = target
        if target is OrderStatus.DELIVERED:
            self.delivered_at = now or _utcnow()

    def cancel(self, reason: str, now: datetime | None = None) -> None:
        """Transition PENDING|CONFIRMED|PROCESSING -> CANCELLED.

        Stock release must happen alongside this call (coordinated by
        the application handler via the inventory ledger).
        """
        if not self.status.is_cancellable:
            raise InvalidStateTransitionError(self.status, OrderStatus.CANCELLED)
        if not reason or not reason.strip():
            raise InvalidArgumentError("Cancellation reason is required")
        self.status = OrderStatus.CANCELLED
        self.cancellation_reason = reason.strip()
        self.cancelled_at = now or _utcnow()

    def update_payment_status(self, target: PaymentStatus) -> None:
        """Apply a payment status reported by the payment side.

        A completed payment confirms a still-pending order.
        """
        check_payment_transition(self.payment_status, target)
        self.payment_status = target
        if target is PaymentStatus.COMPLETED and self.status is OrderStatus.PENDING:
            self.status = OrderStatus.CONFIRMED

    def update_tracking(self, tracking_number: str, carrier: str | None = None) -> None:
        """Record shipment tracking and move the order to SHIPPED."""
        if not tracking_number or not tracking_number.strip():
            raise InvalidArgumentError("Tracking number is required")
        check_transition(self.status, OrderStatus.SHIPPED)
        self.tracking_number = tracking_number.strip()
        self.carrier = carrier.strip() if carrier else None
        self.status = OrderStatus.SHIPPED

    # --- Computed properties --------------------------------------------------

    @property
    def is_cancellable(self) -> bool:
        return self.status.is_cancellable

    @property
    def total_item_count(self) -> int:
        return sum(line.quantity.value for line in self.lines)
