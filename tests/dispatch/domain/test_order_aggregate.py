"""Tests for the Order aggregate — placement, packing and payment status."""

import pytest
from dispatch.order.events import OrderPacked, OrderPlaced, PaymentStatusChanged
from dispatch.order.order import ContactSnapshot, Order, OrderStatus, PaymentStatus
from protean.exceptions import ValidationError


def _items():
    return [
        {"name": "Basmati Rice", "quantity": 10, "unit": "kg", "unit_price": 80.0},
        {"name": "Toor Dal", "quantity": 5, "unit": "kg", "unit_price": 120.0},
    ]


def _place(**overrides):
    kwargs = {
        "retailer_id": "ret-001",
        "wholesaler_id": "whs-001",
        "items_data": _items(),
        "retailer_name": "Sharma Stores",
    }
    kwargs.update(overrides)
    return Order.place(**kwargs)


def _snapshot():
    return ContactSnapshot(name="Priya Sharma", shop_name="Sharma Stores", address="Sector 14, Gurgaon")


class TestPlaceOrder:
    def test_new_order_is_pending(self):
        order = _place()
        assert order.status == OrderStatus.PENDING.value
        assert order.payment_status == PaymentStatus.PENDING.value

    def test_amount_is_sum_of_line_totals(self):
        order = _place()
        assert order.amount == 1400.0

    def test_items_are_attached(self):
        order = _place()
        assert len(order.items) == 2
        assert {item.name for item in order.items} == {"Basmati Rice", "Toor Dal"}

    def test_explicit_order_id_is_kept(self):
        order = _place(order_id="O1")
        assert str(order.id) == "O1"

    def test_no_delivery_details_until_packed(self):
        order = _place()
        assert order.delivery is None
        assert order.packed_at is None
        assert order.is_packed is False
        assert order.is_packable is True

    def test_raises_order_placed_event(self):
        order = _place()
        assert len(order._events) == 1
        event = order._events[0]
        assert isinstance(event, OrderPlaced)
        assert event.item_count == 2
        assert event.amount == 1400.0


class TestDescribeItems:
    def test_lists_each_item(self):
        order = _place()
        assert order.describe_items() == "Basmati Rice x 10 kg, Toor Dal x 5 kg"

    def test_empty_order_reads_various_items(self):
        order = _place(items_data=[])
        assert order.describe_items() == "Various items"


class TestMarkPacked:
    def test_sets_status_and_delivery_quote(self):
        order = _place()
        order.mark_packed(snapshot=_snapshot(), distance_km=25.0, cost=250.0, duration_label="50 mins")

        assert order.status == OrderStatus.PACKED.value
        assert order.delivery.distance_km == 25.0
        assert order.delivery.cost == 250.0
        assert order.delivery.duration_label == "50 mins"
        assert order.packed_at is not None

    def test_freezes_retailer_snapshot(self):
        order = _place()
        order.mark_packed(snapshot=_snapshot(), distance_km=25.0, cost=250.0)
        assert order.retailer_snapshot.address == "Sector 14, Gurgaon"
        assert order.retailer_snapshot.shop_name == "Sharma Stores"

    def test_raises_order_packed_event(self):
        order = _place()
        order._events.clear()
        order.mark_packed(snapshot=_snapshot(), distance_km=25.0, cost=250.0)

        assert len(order._events) == 1
        event = order._events[0]
        assert isinstance(event, OrderPacked)
        assert event.distance_km == 25.0
        assert event.delivery_cost == 250.0

    def test_confirmed_order_can_be_packed(self):
        order = _place()
        order.confirm()
        order.mark_packed(snapshot=_snapshot(), distance_km=12.0, cost=120.0)
        assert order.status == OrderStatus.PACKED.value

    def test_cannot_pack_twice(self):
        order = _place()
        order.mark_packed(snapshot=_snapshot(), distance_km=25.0, cost=250.0)
        with pytest.raises(ValidationError) as exc:
            order.mark_packed(snapshot=_snapshot(), distance_km=30.0, cost=300.0)
        assert "status" in exc.value.messages
        assert order.delivery.distance_km == 25.0


class TestPaymentStatus:
    def test_update_payment_status(self):
        order = _place()
        order.update_payment_status("Paid")
        assert order.payment_status == PaymentStatus.PAID.value
        assert isinstance(order._events[-1], PaymentStatusChanged)

    def test_payment_status_is_independent_of_order_status(self):
        order = _place()
        order.mark_packed(snapshot=_snapshot(), distance_km=25.0, cost=250.0)
        order.update_payment_status("Overdue")
        order.update_payment_status("Paid")
        assert order.status == OrderStatus.PACKED.value
        assert order.payment_status == PaymentStatus.PAID.value

    def test_unchanged_status_raises_no_event(self):
        order = _place()
        order._events.clear()
        order.update_payment_status("Pending")
        assert order._events == []

    def test_unknown_payment_status_rejected(self):
        order = _place()
        with pytest.raises(ValidationError) as exc:
            order.update_payment_status("Refunded")
        assert "payment_status" in exc.value.messages
