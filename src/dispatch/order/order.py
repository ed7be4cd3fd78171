"""Order aggregate (CQRS) — a retailer's order as the wholesaler sees it.

The order record is the single source of truth for how far an order has
progressed. Each write replaces the stored order wholesale.

State Machine:
    PENDING → CONFIRMED → PACKED → SHIPPED → DELIVERED
    PENDING → PACKED  (packing without a prior acceptance)

Payment status is a separate axis with no transition rules.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    DateTime,
    Float,
    HasMany,
    Identifier,
    String,
    ValueObject,
)

from dispatch.domain import dispatch
from dispatch.order.events import (
    OrderConfirmed,
    OrderDelivered,
    OrderPacked,
    OrderPlaced,
    OrderShipped,
    PaymentStatusChanged,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    PACKED = "Packed"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"


class PaymentStatus(Enum):
    PENDING = "Pending"
    PAID = "Paid"
    OVERDUE = "Overdue"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.PACKED},
    OrderStatus.CONFIRMED: {OrderStatus.PACKED},
    OrderStatus.PACKED: {OrderStatus.SHIPPED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # terminal
}

PACKABLE_STATUSES = {OrderStatus.PENDING, OrderStatus.CONFIRMED}

# Statuses in which the delivery quote and packed_at must be present
_PACKED_STATUSES = {OrderStatus.PACKED, OrderStatus.SHIPPED, OrderStatus.DELIVERED}


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@dispatch.value_object(part_of="Order")
class ContactSnapshot:
    """Retailer contact details frozen onto the order when it is packed.

    Deliberately a copy: later edits to the retailer's profile do not flow
    back into orders that were already packed.
    """

    name = String(max_length=200)
    shop_name = String(max_length=200)
    address = String(max_length=500)
    phone = String(max_length=50)
    email = String(max_length=254)


@dispatch.value_object(part_of="Order")
class DeliveryQuote:
    """Distance and price of delivering a packed order."""

    distance_km = Float(required=True, min_value=0.0)
    cost = Float(required=True, min_value=0.0)
    duration_label = String(max_length=100)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@dispatch.entity(part_of="Order")
class OrderItem:
    """A single line on the order."""

    name = String(required=True, max_length=200)
    quantity = Float(required=True, min_value=0.0)
    unit = String(max_length=30, default="unit")
    unit_price = Float(required=True, min_value=0.0)

    @property
    def line_total(self) -> float:
        return self.quantity * self.unit_price


# ---------------------------------------------------------------------------
# Aggregate Root (CQRS)
# ---------------------------------------------------------------------------
@dispatch.aggregate
class Order:
    retailer_id = Identifier(required=True)
    wholesaler_id = Identifier(required=True)
    retailer_name = String(max_length=200)
    items = HasMany(OrderItem)
    amount = Float(default=0.0, min_value=0.0)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    retailer_snapshot = ValueObject(ContactSnapshot)
    delivery = ValueObject(DeliveryQuote)
    packed_at = DateTime()
    placed_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def delivery_details_follow_status(self):
        packed = OrderStatus(self.status) in _PACKED_STATUSES
        has_details = self.delivery is not None and self.packed_at is not None
        if packed and not has_details:
            raise ValidationError({"delivery": ["Packed orders must carry distance, cost and packing time"]})
        if not packed and (self.delivery is not None or self.packed_at is not None):
            raise ValidationError({"delivery": ["Delivery details are only set once an order is packed"]})

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        retailer_id: str,
        wholesaler_id: str,
        items_data: list[dict],
        retailer_name: str | None = None,
        order_id: str | None = None,
    ):
        """Create a new order in PENDING status with its total computed from the items."""
        now = datetime.now(UTC)
        kwargs = {}
        if order_id:
            kwargs["id"] = order_id

        order = cls(
            retailer_id=retailer_id,
            wholesaler_id=wholesaler_id,
            retailer_name=retailer_name,
            status=OrderStatus.PENDING.value,
            payment_status=PaymentStatus.PENDING.value,
            placed_at=now,
            updated_at=now,
            **kwargs,
        )
        for item_data in items_data:
            order.add_items(OrderItem(**item_data))
        order.amount = round(sum(item.line_total for item in order.items), 2)

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                retailer_id=retailer_id,
                wholesaler_id=wholesaler_id,
                item_count=len(items_data),
                amount=order.amount,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def is_packed(self) -> bool:
        return OrderStatus(self.status) in _PACKED_STATUSES

    @property
    def is_packable(self) -> bool:
        return OrderStatus(self.status) in PACKABLE_STATUSES

    def describe_items(self) -> str:
        """Human-readable summary of the items, e.g. ``"Rice x 10 kg, Dal x 5 kg"``."""
        if not self.items:
            return "Various items"
        parts = []
        for item in self.items:
            quantity = int(item.quantity) if float(item.quantity).is_integer() else item.quantity
            parts.append(f"{item.name} x {quantity} {item.unit or 'unit'}")
        return ", ".join(parts)

    # -------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status: OrderStatus) -> None:
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def confirm(self) -> None:
        """Wholesaler accepts the order."""
        self._assert_can_transition(OrderStatus.CONFIRMED)
        now = datetime.now(UTC)
        self.status = OrderStatus.CONFIRMED.value
        self.updated_at = now
        self.raise_(
            OrderConfirmed(
                order_id=str(self.id),
                wholesaler_id=str(self.wholesaler_id),
                confirmed_at=now,
            )
        )

    def mark_packed(
        self,
        snapshot: ContactSnapshot,
        distance_km: float,
        cost: float,
        duration_label: str | None = None,
        packed_at: datetime | None = None,
    ) -> None:
        """Pack the order, freezing the retailer contact and the delivery quote onto it."""
        self._assert_can_transition(OrderStatus.PACKED)
        now = packed_at or datetime.now(UTC)

        with atomic_change(self):
            self.status = OrderStatus.PACKED.value
            self.packed_at = now
            self.retailer_snapshot = snapshot
            self.delivery = DeliveryQuote(
                distance_km=distance_km,
                cost=cost,
                duration_label=duration_label,
            )
            self.updated_at = now

        self.raise_(
            OrderPacked(
                order_id=str(self.id),
                wholesaler_id=str(self.wholesaler_id),
                retailer_id=str(self.retailer_id),
                distance_km=distance_km,
                delivery_cost=cost,
                packed_at=now,
            )
        )

    def mark_shipped(self) -> None:
        """A vehicle owner collected the order."""
        self._assert_can_transition(OrderStatus.SHIPPED)
        now = datetime.now(UTC)
        self.status = OrderStatus.SHIPPED.value
        self.updated_at = now
        self.raise_(OrderShipped(order_id=str(self.id), shipped_at=now))

    def mark_delivered(self) -> None:
        """The order reached the retailer."""
        self._assert_can_transition(OrderStatus.DELIVERED)
        now = datetime.now(UTC)
        self.status = OrderStatus.DELIVERED.value
        self.updated_at = now
        self.raise_(OrderDelivered(order_id=str(self.id), delivered_at=now))

    def update_payment_status(self, payment_status: str) -> None:
        try:
            new_status = PaymentStatus(payment_status)
        except ValueError:
            raise ValidationError({"payment_status": [f"Unknown payment status: {payment_status}"]})

        previous = self.payment_status
        if previous == new_status.value:
            return

        now = datetime.now(UTC)
        self.payment_status = new_status.value
        self.updated_at = now
        self.raise_(
            PaymentStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                payment_status=new_status.value,
                changed_at=now,
            )
        )
